"""Public key encodings expected by the EBSI DID registry."""

import json
from typing import Union

from ...wallet.jwk import to_jwk
from ...wallet.key_type import KeyType
from ...wallet.util import uncompressed_public_key

JWK_USE_SIGNATURE = "sig"


def format_ebsi_public_key(key, key_type: Union[KeyType, str] = None) -> str:
    """Format a public key the way the registry stores it.

    Secp256k1 keys are sent as the uncompressed point in hex, starting with
    ``04``. Secp256r1 keys are sent as their JWK serialized to indented JSON,
    and the JSON text then hex encoded. The registry stores that encoding on
    chain, so it has to be reproduced byte for byte.

    Args:
        key: a key descriptor, or a public key as hex
        key_type: the key type; defaults to the descriptor's type

    Raises:
        UnsupportedKeyTypeError: for any other key type

    """
    public_key_hex = getattr(key, "public_key_hex", key)
    key_type = KeyType.from_value(key_type or getattr(key, "type", None))
    if key_type is KeyType.SECP256K1:
        return uncompressed_public_key(public_key_hex, key_type).hex()
    jwk = to_jwk(public_key_hex, key_type, use=JWK_USE_SIGNATURE)
    return json.dumps(jwk, indent=2).encode("utf-8").hex()
