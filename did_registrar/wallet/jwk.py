"""JSON Web Key helpers and EBSI JWK thumbprint calculation."""

import hashlib
import json
from typing import Mapping, Union

from ..core.error import UnsupportedKeyTypeError, ValidationError
from .error import MissingClaimError
from .key_type import KeyType
from .util import bytes_to_b64, load_public_key

# RFC 7638 required members, in lexicographic order
THUMBPRINT_MEMBERS = {
    "EC": ("crv", "kty", "x", "y"),
    "OKP": ("crv", "kty", "x"),
    "RSA": ("e", "kty", "n"),
    "oct": ("k", "kty"),
}

DIGEST_ALGORITHMS = {
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
}


def calculate_jwk_thumbprint(jwk: Mapping, digest_algorithm: str = "sha256") -> str:
    """Calculate the JWK thumbprint used as verification method id.

    Only the members required for the key type take part in the digest, so
    optional members such as ``alg`` or ``use`` and the order of the members
    in ``jwk`` do not change the result.

    Args:
        jwk: The JSON Web Key
        digest_algorithm: ``sha256`` or ``sha512``

    Returns:
        The base64url encoded digest, without padding

    Raises:
        MissingClaimError: if a required member is absent or not a non-empty string
        UnsupportedKeyTypeError: if ``kty`` is missing or unsupported

    """
    kty = jwk.get("kty")
    members = THUMBPRINT_MEMBERS.get(kty) if isinstance(kty, str) else None
    if not members:
        raise UnsupportedKeyTypeError('"kty" (Key Type) parameter missing or unsupported')
    digest = DIGEST_ALGORITHMS.get(digest_algorithm)
    if not digest:
        raise ValidationError(f"Unsupported digest algorithm: {digest_algorithm}")

    components = {}
    for member in members:
        value = jwk.get(member)
        if not isinstance(value, str) or not value:
            raise MissingClaimError(member)
        components[member] = value

    data = json.dumps(components, separators=(",", ":"), ensure_ascii=False)
    return bytes_to_b64(digest(data.encode("utf-8")).digest(), urlsafe=True, pad=False)


def to_jwk(public_key_hex: str, key_type: Union[KeyType, str], use: str = None) -> dict:
    """Build the EC JWK of a public key.

    Args:
        public_key_hex: compressed, uncompressed or raw public key as hex
        key_type: Secp256k1 or Secp256r1
        use: optional JWK ``use`` member, e.g. ``sig``

    """
    key_type = KeyType.from_value(key_type)
    numbers = load_public_key(public_key_hex, key_type).public_numbers()
    jwk = {"alg": key_type.jws_alg}
    if use:
        jwk["use"] = use
    jwk.update(
        {
            "kty": "EC",
            "crv": key_type.jwk_crv,
            "x": bytes_to_b64(numbers.x.to_bytes(32, "big"), urlsafe=True, pad=False),
            "y": bytes_to_b64(numbers.y.to_bytes(32, "big"), urlsafe=True, pad=False),
        }
    )
    return jwk


def calculate_jwk_thumbprint_for_key(key, digest_algorithm: str = "sha256") -> str:
    """Calculate the JWK thumbprint of a key descriptor's public key."""
    return calculate_jwk_thumbprint(
        to_jwk(key.public_key_hex, key.type), digest_algorithm=digest_algorithm
    )
