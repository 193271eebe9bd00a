"""Random identifiers and key material for EBSI DIDs."""

from ...utils.randomness import RandomSource
from ...wallet.error import InvalidKeyLengthError
from ...wallet.util import bytes_to_b58
from .constants import EbsiDidSpecInfo, EbsiDidSpecInfos

MULTIBASE_BASE58BTC = "z"


def generate_method_specific_id(
    length: int = 16, version_byte: int = None, random: RandomSource = None
) -> str:
    """Generate a base58btc encoded random identifier.

    Args:
        length: number of random bytes
        version_byte: optional version byte placed before the random bytes
        random: source of randomness

    """
    random = random or RandomSource()
    prefix = bytes([version_byte]) if version_byte is not None else b""
    return bytes_to_b58(prefix + random.token_bytes(length))


def generate_ebsi_method_specific_id(
    spec_info: EbsiDidSpecInfo = EbsiDidSpecInfos.V1, random: RandomSource = None
) -> str:
    """Generate the multibase method specific id of a new EBSI DID."""
    return MULTIBASE_BASE58BTC + generate_method_specific_id(
        spec_info.did_length or 16, spec_info.version, random=random
    )


def generate_private_key_hex(
    length: int = 32, provided: bytes = None, random: RandomSource = None
) -> str:
    """Hex encode supplied private key bytes, or generate fresh ones.

    Raises:
        InvalidKeyLengthError: if ``provided`` is not exactly ``length`` bytes

    """
    if provided is not None:
        if len(provided) != length:
            raise InvalidKeyLengthError(
                f"Invalid private key length supplied ({len(provided)}). "
                f"Expected {length}"
            )
        return bytes(provided).hex()
    random = random or RandomSource()
    return random.token_bytes(length).hex()
