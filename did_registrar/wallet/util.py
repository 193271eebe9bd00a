"""Wallet utility functions."""

import base64
from typing import Union

import base58
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from eth_utils import keccak, to_checksum_address

from ..core.error import ValidationError
from .key_type import KeyType


def strip_hex_prefix(value: str) -> str:
    """Remove a leading ``0x`` from a hex string."""
    return value[2:] if value.lower().startswith("0x") else value


def bytes_to_b64(val: bytes, urlsafe=False, pad=True, encoding: str = "ascii") -> str:
    """Convert a byte string to base 64."""
    b64 = (
        base64.urlsafe_b64encode(val).decode(encoding)
        if urlsafe
        else base64.b64encode(val).decode(encoding)
    )
    return b64 if pad else b64.rstrip("=")


def bytes_to_b58(val: bytes) -> str:
    """Convert a byte string to base 58."""
    return base58.b58encode(val).decode("ascii")


def b58_to_bytes(val: str) -> bytes:
    """Convert a base 58 string to bytes."""
    return base58.b58decode(val)


def load_public_key(
    public_key_hex: str, key_type: Union[KeyType, str]
) -> ec.EllipticCurvePublicKey:
    """Load a compressed, uncompressed or raw (x || y) EC public key from hex."""
    key_type = KeyType.from_value(key_type)
    try:
        raw = bytes.fromhex(strip_hex_prefix(public_key_hex or ""))
    except ValueError as err:
        raise ValidationError("Public key is not valid hex") from err
    if len(raw) == 64:
        raw = b"\x04" + raw
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(key_type.curve, raw)
    except ValueError as err:
        raise ValidationError(
            f"Invalid {key_type.value} public key of {len(raw)} bytes"
        ) from err


def uncompressed_public_key(public_key_hex: str, key_type: Union[KeyType, str]) -> bytes:
    """Return the 65 byte uncompressed SEC1 encoding of a public key."""
    return load_public_key(public_key_hex, key_type).public_bytes(
        Encoding.X962, PublicFormat.UncompressedPoint
    )


def ethereum_address(public_key_hex: str) -> str:
    """Derive the checksummed Ethereum address of a secp256k1 public key."""
    point = uncompressed_public_key(public_key_hex, KeyType.SECP256K1)
    return to_checksum_address(keccak(point[1:])[-20:])
