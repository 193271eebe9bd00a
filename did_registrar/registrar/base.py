"""Base class for DID registrars."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..config.injection_context import InjectionContext
from ..core.error import BaseError, ValidationError
from .models.identifier import Identifier
from .models.key import KeyDescriptor
from .models.service import Service


class RegistrarError(BaseError):
    """Base class for registrar exceptions."""


class DIDMethodNotSupported(RegistrarError):
    """Raised when no registrar is registered for a given did method."""


class InvalidInput(RegistrarError, ValidationError):
    """Raised when invalid input is provided."""


class UnsupportedOperationError(RegistrarError):
    """Raised for operations a registrar does not implement."""


class BaseDidRegistrar(ABC):
    """Capabilities of a DID registrar for one DID method."""

    async def setup(self, context: InjectionContext):
        """Do asynchronous registrar setup."""
        logging.debug(
            "Setup from %s called with context: %s", self.__class__.__name__, context
        )

    @property
    @abstractmethod
    def method(self) -> str:
        """Return method handled by this registrar."""

    @abstractmethod
    async def create_identifier(
        self,
        kms: Optional[str] = None,
        alias: Optional[str] = None,
        options: Optional[dict] = None,
    ) -> Identifier:
        """Create a new DID."""

    @abstractmethod
    async def add_key(
        self, identifier: Identifier, key: KeyDescriptor, options: dict
    ) -> Any:
        """Add a key to a DID document."""

    @abstractmethod
    async def add_service(
        self, identifier: Identifier, service: Service, options: dict
    ) -> Any:
        """Add a service to a DID document."""

    @abstractmethod
    async def remove_key(
        self, identifier: Identifier, kid: str, options: Optional[dict] = None
    ) -> Any:
        """Remove a key from a DID document."""

    @abstractmethod
    async def remove_service(
        self, identifier: Identifier, service_id: str, options: Optional[dict] = None
    ) -> Any:
        """Remove a service from a DID document."""

    @abstractmethod
    async def update_identifier(
        self, identifier: Identifier, document: dict, options: Optional[dict] = None
    ) -> Identifier:
        """Replace the DID document."""

    @abstractmethod
    async def delete_identifier(self, identifier: Identifier) -> bool:
        """Deactivate a DID."""
