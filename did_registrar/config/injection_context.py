"""Injection context implementation."""

from typing import Any, Mapping, Optional, Type, TypeVar

from .base import BaseInjector, InjectionError
from .settings import Settings

InjectType = TypeVar("InjectType")


class InjectionContext(BaseInjector):
    """Manager for configuration settings and class providers."""

    def __init__(self, *, settings: Mapping[str, Any] = None):
        """Initialize an `InjectionContext`."""
        self._settings = Settings(settings)
        self._instances = {}

    @property
    def settings(self) -> Settings:
        """Accessor for scope-specific settings."""
        return self._settings

    @settings.setter
    def settings(self, settings: Mapping[str, Any]):
        """Setter for scope-specific settings."""
        self._settings = Settings(settings)

    def update_settings(self, settings: Mapping[str, object]):
        """Update the scope with additional settings."""
        if settings:
            self._settings.update(settings)

    def bind_instance(self, base_cls: Type[InjectType], instance: InjectType):
        """Add a static instance as a class binding."""
        self._instances[base_cls] = instance

    def clear_binding(self, base_cls: Type):
        """Remove a previously-added binding."""
        self._instances.pop(base_cls, None)

    def inject_or(
        self, base_cls: Type[InjectType], default: Optional[InjectType] = None
    ) -> Optional[InjectType]:
        """Get the provided instance of a given class identifier or a default.

        Args:
            base_cls: The base class to retrieve an instance of
            default: The default value to return if the binding is missing

        Returns:
            An instance of the base class, or the default
        """
        if not base_cls:
            raise InjectionError("No base class provided to lookup")
        return self._instances.get(base_cls, default)

    def inject(self, base_cls: Type[InjectType]) -> InjectType:
        """Get the provided instance of a given class identifier.

        Raises:
            InjectionError: If no instance is bound to the class

        """
        result = self.inject_or(base_cls)
        if result is None:
            raise InjectionError(
                "No instance provided for class: {}".format(base_cls.__name__)
            )
        if not isinstance(result, base_cls):
            raise InjectionError(
                "Provided instance does not implement the base class: {}".format(
                    base_cls.__name__
                )
            )
        return result

    def copy(self) -> "InjectionContext":
        """Produce a copy of the injector instance."""
        result = InjectionContext(settings=self._settings)
        result._instances = self._instances.copy()
        return result
