"""Key descriptors exchanged with the key storage capability."""

from typing import Iterable, Optional, Union

from marshmallow import EXCLUDE, fields, validate

from ...messaging.models.base import BaseModel, BaseModelSchema
from ...wallet.key_type import KeyType
from ...wallet.purposes import KeyPurpose, to_purposes

PURPOSE_VALUES = [purpose.value for purpose in KeyPurpose]


class KeyDescriptor(BaseModel):
    """A key held by the key storage capability.

    Purposes are fixed when the key is created and cannot be reassigned.
    """

    class Meta:
        """KeyDescriptor metadata."""

        schema_class = "KeyDescriptorSchema"

    def __init__(
        self,
        *,
        kid: str,
        type: Union[KeyType, str],
        public_key_hex: str,
        kms: Optional[str] = None,
        purposes: Iterable[Union[KeyPurpose, str]] = None,
        is_controller: bool = False,
    ):
        """Initialize a KeyDescriptor."""
        super().__init__()
        self.kid = kid
        self.type = KeyType.from_value(type)
        self.public_key_hex = public_key_hex
        self.kms = kms
        self._purposes = to_purposes(purposes or ())
        self.is_controller = is_controller

    @property
    def purposes(self):
        """Accessor for the key purposes."""
        return self._purposes


class KeyDescriptorSchema(BaseModelSchema):
    """KeyDescriptor schema."""

    class Meta:
        """KeyDescriptorSchema metadata."""

        model_class = KeyDescriptor
        unknown = EXCLUDE

    kid = fields.Str(required=True, metadata={"description": "Key handle"})
    type = fields.Enum(KeyType, by_value=True, required=True)
    public_key_hex = fields.Str(
        required=True,
        data_key="publicKeyHex",
        metadata={"description": "Public key as hex"},
    )
    kms = fields.Str(required=False, allow_none=True)
    purposes = fields.Method(
        "get_purposes",
        deserialize="load_purposes",
        metadata={"description": "Verification relationships"},
    )
    is_controller = fields.Bool(
        required=False, data_key="isController", load_default=False
    )

    def get_purposes(self, obj: KeyDescriptor):
        """Dump purposes in a stable order."""
        return sorted(purpose.value for purpose in obj.purposes)

    def load_purposes(self, value):
        """Load purpose names."""
        validate.ContainsOnly(PURPOSE_VALUES)(value)
        return value


class ImportableKey(BaseModel):
    """Key material handed to the key storage capability for import."""

    class Meta:
        """ImportableKey metadata."""

        schema_class = "ImportableKeySchema"
        repr_exclude = ("private_key_hex",)

    def __init__(
        self,
        *,
        kms: str,
        type: Union[KeyType, str],
        private_key_hex: str,
        kid: Optional[str] = None,
        purposes: Iterable[Union[KeyPurpose, str]] = None,
        is_controller: bool = False,
    ):
        """Initialize an ImportableKey."""
        super().__init__()
        self.kms = kms
        self.type = KeyType.from_value(type)
        self.private_key_hex = private_key_hex
        self.kid = kid
        self.purposes = to_purposes(purposes or ())
        self.is_controller = is_controller


class ImportableKeySchema(BaseModelSchema):
    """ImportableKey schema."""

    class Meta:
        """ImportableKeySchema metadata."""

        model_class = ImportableKey
        unknown = EXCLUDE

    kms = fields.Str(required=True)
    type = fields.Enum(KeyType, by_value=True, required=True)
    private_key_hex = fields.Str(
        required=True, load_only=True, data_key="privateKeyHex"
    )
    kid = fields.Str(required=False, allow_none=True)
    purposes = fields.List(
        fields.Str(validate=validate.OneOf(PURPOSE_VALUES)), required=False
    )
    is_controller = fields.Bool(
        required=False, data_key="isController", load_default=False
    )
