"""Verification relationship purposes for registry keys."""

from enum import Enum
from typing import FrozenSet, Iterable, Optional, Union

from ..core.error import UnsupportedKeyTypeError
from .error import InvalidPurposeError
from .key_type import KeyType


class KeyPurpose(str, Enum):
    """Verification relationships a key can be registered for."""

    CAPABILITY_INVOCATION = "capabilityInvocation"
    AUTHENTICATION = "authentication"
    ASSERTION_METHOD = "assertionMethod"
    KEY_AGREEMENT = "keyAgreement"
    CAPABILITY_DELEGATION = "capabilityDelegation"


SECP256R1_PURPOSES = frozenset(
    {KeyPurpose.ASSERTION_METHOD, KeyPurpose.AUTHENTICATION}
)

DEFAULT_PURPOSES = {
    KeyType.SECP256K1: frozenset({KeyPurpose.CAPABILITY_INVOCATION}),
    KeyType.SECP256R1: SECP256R1_PURPOSES,
}


def to_purposes(values: Iterable[Union[KeyPurpose, str]]) -> FrozenSet[KeyPurpose]:
    """Convert purpose names to a set of KeyPurpose members."""
    values = [values] if isinstance(values, str) else list(values)
    try:
        return frozenset(KeyPurpose(value) for value in values)
    except ValueError as err:
        raise InvalidPurposeError(f"Unknown key purpose in {values}") from err


def assign_purposes(
    key_type: Union[KeyType, str],
    requested: Optional[Iterable[Union[KeyPurpose, str]]] = None,
) -> FrozenSet[KeyPurpose]:
    """Validate the requested purposes for a key type or apply its defaults.

    Secp256k1 keys must be usable for capability invocation, since they
    control the DID document. Secp256r1 keys may only be used for assertion
    and authentication.

    Raises:
        InvalidPurposeError: if the purposes are not allowed for the key type,
            or the key type is not supported

    """
    try:
        key_type = KeyType.from_value(key_type)
    except UnsupportedKeyTypeError as err:
        raise InvalidPurposeError(err.message) from err

    purposes = to_purposes(requested or ())
    if not purposes:
        return DEFAULT_PURPOSES[key_type]

    if key_type is KeyType.SECP256K1:
        if KeyPurpose.CAPABILITY_INVOCATION not in purposes:
            raise InvalidPurposeError(
                "Secp256k1 key requires {} purpose".format(
                    KeyPurpose.CAPABILITY_INVOCATION.value
                )
            )
    elif not purposes <= SECP256R1_PURPOSES:
        raise InvalidPurposeError(
            "Secp256r1 key only allows {} purposes".format(
                ", ".join(sorted(purpose.value for purpose in SECP256R1_PURPOSES))
            )
        )
    return purposes
