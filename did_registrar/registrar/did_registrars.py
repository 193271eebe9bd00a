"""
the did registrars.

responsible for keeping track of all registrars. more importantly
dispatching writes of did's to the registrar of the did method.
"""

import logging
from typing import Any, Dict, Optional

from pydid import DID, InvalidDIDError

from .base import BaseDidRegistrar, DIDMethodNotSupported, InvalidInput
from .models.identifier import Identifier
from .models.key import KeyDescriptor
from .models.service import Service

LOGGER = logging.getLogger(__name__)


class DIDRegistrars:
    """did registrar singleton."""

    def __init__(self):
        """Create DID registrar registry."""
        self.method_to_registrar: Dict[str, BaseDidRegistrar] = {}

    def register_registrar(self, registrar: BaseDidRegistrar):
        """Register a new registrar."""
        LOGGER.debug("Registering registrar %s for %s", registrar, registrar.method)
        self.method_to_registrar[registrar.method] = registrar

    def registrar_for(
        self, method: Optional[str] = None, did: Optional[str] = None
    ) -> BaseDidRegistrar:
        """Look up the registrar for a method name or the method of a DID."""
        if method and did:
            raise InvalidInput("method and did must be 'exclusive or'")
        if not method and not did:
            raise InvalidInput("Either did or method must be provided")
        if not method:
            try:
                method = DID(did).method
            except InvalidDIDError as err:
                raise InvalidInput(f"Invalid DID: {did}") from err

        if method not in self.method_to_registrar:
            raise DIDMethodNotSupported(f"No registrar for method {method}")
        return self.method_to_registrar[method]

    async def create_identifier(
        self,
        method: str,
        kms: Optional[str] = None,
        alias: Optional[str] = None,
        options: Optional[dict] = None,
    ) -> Identifier:
        """Create a DID with the registrar of the given method."""
        return await self.registrar_for(method=method).create_identifier(
            kms=kms, alias=alias, options=options
        )

    async def add_key(
        self, identifier: Identifier, key: KeyDescriptor, options: dict
    ) -> Any:
        """Add a key to a DID document."""
        return await self.registrar_for(did=identifier.did).add_key(
            identifier, key, options
        )

    async def add_service(
        self, identifier: Identifier, service: Service, options: dict
    ) -> Any:
        """Add a service to a DID document."""
        return await self.registrar_for(did=identifier.did).add_service(
            identifier, service, options
        )

    async def remove_key(
        self, identifier: Identifier, kid: str, options: Optional[dict] = None
    ) -> Any:
        """Remove a key from a DID document."""
        return await self.registrar_for(did=identifier.did).remove_key(
            identifier, kid, options
        )

    async def remove_service(
        self, identifier: Identifier, service_id: str, options: Optional[dict] = None
    ) -> Any:
        """Remove a service from a DID document."""
        return await self.registrar_for(did=identifier.did).remove_service(
            identifier, service_id, options
        )

    async def update_identifier(
        self, identifier: Identifier, document: dict, options: Optional[dict] = None
    ) -> Identifier:
        """Update DID."""
        return await self.registrar_for(did=identifier.did).update_identifier(
            identifier, document, options
        )

    async def delete_identifier(self, identifier: Identifier) -> bool:
        """Deactivate DID."""
        return await self.registrar_for(did=identifier.did).delete_identifier(
            identifier
        )
