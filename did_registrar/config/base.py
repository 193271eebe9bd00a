"""Configuration base classes."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Type

from ..core.error import BaseError


class ConfigError(BaseError):
    """A base exception for all configuration errors."""


class InjectionError(ConfigError):
    """The base exception raised by Injector and Provider implementations."""


class BaseSettings(Mapping[str, Any]):
    """Base settings class."""

    @abstractmethod
    def get_value(self, *var_names, default=None):
        """Fetch a setting.

        Args:
            var_names: A list of variable name alternatives
            default: The default value to return if none are defined
        """

    def get_bool(self, *var_names, default=False) -> bool:
        """Fetch a setting as a boolean value.

        Args:
            var_names: A list of variable name alternatives
            default: The default value to return if none are defined
        """
        value = self.get_value(*var_names, default=default)
        if value is not None:
            value = bool(value and value not in ("false", "False", "0"))
        return value

    def get_int(self, *var_names, default=None) -> Optional[int]:
        """Fetch a setting as an integer value.

        Args:
            var_names: A list of variable name alternatives
            default: The default value to return if none are defined
        """
        value = self.get_value(*var_names, default=default)
        if value is not None:
            try:
                value = int(value)
            except (TypeError, ValueError) as err:
                raise ConfigError(
                    "Setting {} is not an integer: {!r}".format(var_names[0], value)
                ) from err
        return value

    def get_float(self, *var_names, default=None) -> Optional[float]:
        """Fetch a setting as a floating point value."""
        value = self.get_value(*var_names, default=default)
        if value is not None:
            try:
                value = float(value)
            except (TypeError, ValueError) as err:
                raise ConfigError(
                    "Setting {} is not a number: {!r}".format(var_names[0], value)
                ) from err
        return value

    def get_str(self, *var_names, default=None) -> Optional[str]:
        """Fetch a setting as a string value.

        Args:
            var_names: A list of variable name alternatives
            default: The default value to return if none are defined
        """
        value = self.get_value(*var_names, default=default)
        if value is not None:
            value = str(value)
        return value

    @abstractmethod
    def copy(self) -> "BaseSettings":
        """Produce a copy of the settings instance."""

    @abstractmethod
    def extend(self, other: Mapping[str, Any]) -> "BaseSettings":
        """Merge another mapping to produce a new settings instance."""


class BaseInjector(ABC):
    """Base injector class."""

    @abstractmethod
    def inject_or(self, base_cls: Type, default=None):
        """Get the provided instance of a given class identifier or a default."""

    @abstractmethod
    def inject(self, base_cls: Type):
        """Get the provided instance of a given class identifier."""
