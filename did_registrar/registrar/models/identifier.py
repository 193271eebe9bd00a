"""Identifier value object returned by registrars."""

from typing import List, Optional, Sequence

from marshmallow import EXCLUDE, fields
from pydid import DID

from ...core.error import ValidationError
from ...messaging.models.base import BaseModel, BaseModelSchema
from .key import KeyDescriptor, KeyDescriptorSchema
from .service import Service, ServiceSchema


class Identifier(BaseModel):
    """A DID with its keys and services.

    Keys are kept in insertion order with the controller key first. Keys
    and services can only be appended.
    """

    class Meta:
        """Identifier metadata."""

        schema_class = "IdentifierSchema"

    def __init__(
        self,
        *,
        did: str,
        controller_key_id: str,
        keys: Sequence[KeyDescriptor] = None,
        services: Sequence[Service] = None,
        alias: Optional[str] = None,
        provider: Optional[str] = None,
    ):
        """Initialize an Identifier."""
        super().__init__()
        self.did = did
        self.controller_key_id = controller_key_id
        self._keys: List[KeyDescriptor] = list(keys or [])
        self._services: List[Service] = list(services or [])
        self.alias = alias
        self.provider = provider

    @property
    def keys(self) -> Sequence[KeyDescriptor]:
        """Accessor for the keys, controller key first."""
        return tuple(self._keys)

    @property
    def services(self) -> Sequence[Service]:
        """Accessor for the services."""
        return tuple(self._services)

    @property
    def method(self) -> str:
        """Return the DID method name."""
        return DID(self.did).method

    @property
    def controller_key(self) -> KeyDescriptor:
        """Return the key authorized to submit ledger transactions."""
        for key in self._keys:
            if key.kid == self.controller_key_id:
                return key
        raise ValidationError(
            f"Controller key {self.controller_key_id} not found for {self.did}"
        )

    def add_key(self, key: KeyDescriptor):
        """Append a key."""
        self._keys.append(key)

    def add_service(self, service: Service):
        """Append a service."""
        self._services.append(service)


class IdentifierSchema(BaseModelSchema):
    """Identifier schema."""

    class Meta:
        """IdentifierSchema metadata."""

        model_class = Identifier
        unknown = EXCLUDE

    did = fields.Str(required=True, metadata={"description": "DID"})
    controller_key_id = fields.Str(required=True, data_key="controllerKeyId")
    keys = fields.List(fields.Nested(KeyDescriptorSchema()), required=False)
    services = fields.List(fields.Nested(ServiceSchema()), required=False)
    alias = fields.Str(required=False, allow_none=True)
    provider = fields.Str(required=False, allow_none=True)
