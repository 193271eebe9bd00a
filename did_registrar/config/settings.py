"""Settings implementation."""

import os
from typing import Any, Mapping, MutableMapping

from .base import BaseSettings

ENV_SETTINGS = {
    "EBSI_ENVIRONMENT": "ebsi.environment",
    "EBSI_VERSION": "ebsi.version",
    "EBSI_REGISTRY_HOST": "ebsi.registry_host",
    "EBSI_DEFAULT_KMS": "ebsi.default_kms",
    "EBSI_RPC_TIMEOUT": "ebsi.rpc_timeout",
    "LEDGER_DISABLED": "ledger.disabled",
}


class Settings(BaseSettings, MutableMapping[str, Any]):
    """Mutable settings implementation."""

    def __init__(self, values: Mapping[str, Any] = None):
        """Initialize a Settings object.

        Args:
            values: An optional dictionary of settings
        """
        self._values = {}
        if values:
            self._values.update(values)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> "Settings":
        """Build settings from ``EBSI_*`` environment variables."""
        environ = os.environ if environ is None else environ
        return cls(
            {
                key: environ[var]
                for var, key in ENV_SETTINGS.items()
                if environ.get(var) not in (None, "")
            }
        )

    def get_value(self, *var_names, default=None):
        """Fetch a setting.

        Args:
            var_names: A list of variable name alternatives
            default: The default value to return if none are defined
        """
        for k in var_names:
            if k in self._values:
                return self._values[k]
        return default

    def set_value(self, var_name: str, value):
        """Add a setting.

        Args:
            var_name: The name of the setting
            value: The value to assign
        """
        if not isinstance(var_name, str):
            raise TypeError("Setting name must be a string")
        if not var_name:
            raise ValueError("Setting name must be non-empty")
        self._values[var_name] = value

    def set_default(self, var_name: str, value):
        """Add a setting if not currently defined."""
        if var_name not in self:
            self.set_value(var_name, value)

    def clear_value(self, var_name: str):
        """Remove a setting."""
        if var_name in self._values:
            del self._values[var_name]

    def __contains__(self, index):
        """Define 'in' operator."""
        return index in self._values

    def __iter__(self):
        """Iterate settings keys."""
        return iter(self._values)

    def __getitem__(self, index):
        """Fetch as an array index."""
        if not isinstance(index, str):
            raise TypeError("Index must be a string")
        missing = object()
        result = self.get_value(index, default=missing)
        if result is missing:
            raise KeyError("Undefined index: {}".format(index))
        return result

    def __setitem__(self, index, value):
        """Set as an array index."""
        self.set_value(index, value)

    def __delitem__(self, index):
        """Delete as an array index."""
        self.clear_value(index)

    def __len__(self):
        """Fetch the length of the mapping."""
        return len(self._values)

    def __bool__(self):
        """Convert settings to a boolean."""
        return True

    def copy(self) -> BaseSettings:
        """Produce a copy of the settings instance."""
        return Settings(self._values)

    def extend(self, other: Mapping[str, Any]) -> BaseSettings:
        """Merge another settings instance to produce a new instance."""
        vals = self._values.copy()
        vals.update(other)
        return Settings(vals)

    def update(self, other: Mapping[str, Any]):
        """Update the settings in place."""
        self._values.update(other)

    def __repr__(self) -> str:
        """Get the string representation of this object."""
        return "<{}({})>".format(self.__class__.__name__, self._values)
