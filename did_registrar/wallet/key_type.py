"""Key types supported by the EBSI DID registry."""

from enum import Enum
from typing import Union

from cryptography.hazmat.primitives.asymmetric import ec

from ..core.error import UnsupportedKeyTypeError


class KeyType(Enum):
    """Elliptic curve key types accepted by the registry."""

    SECP256K1 = "Secp256k1"
    SECP256R1 = "Secp256r1"

    @classmethod
    def from_value(cls, value: Union["KeyType", str]) -> "KeyType":
        """Look up a key type by enum member or name, case insensitively."""
        if isinstance(value, KeyType):
            return value
        for key_type in KeyType:
            if isinstance(value, str) and value.lower() == key_type.value.lower():
                return key_type
        raise UnsupportedKeyTypeError(f"Unsupported key type: {value}")

    @property
    def curve(self) -> ec.EllipticCurve:
        """Return the cryptography curve instance."""
        return ec.SECP256K1() if self is KeyType.SECP256K1 else ec.SECP256R1()

    @property
    def jwk_crv(self) -> str:
        """Return the JWK ``crv`` value."""
        return "secp256k1" if self is KeyType.SECP256K1 else "P-256"

    @property
    def jws_alg(self) -> str:
        """Return the JWS signature algorithm."""
        return "ES256K" if self is KeyType.SECP256K1 else "ES256"
