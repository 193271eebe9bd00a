"""Registry write steps and their RPC parameters."""

from typing import NamedTuple, Union

from ...registrar.models.key import KeyDescriptor
from ...registrar.models.service import Service
from ...wallet.jwk import calculate_jwk_thumbprint_for_key
from ...wallet.key_type import KeyType
from ...wallet.purposes import KeyPurpose
from ...wallet.util import ethereum_address
from .constants import BASE_CONTEXT_DOC, EbsiRpcMethod
from .public_key import format_ebsi_public_key


class LedgerWriteStep(NamedTuple):
    """A registry operation built, signed and submitted as one transaction."""

    method: EbsiRpcMethod
    params: dict


def insert_did_document_step(
    did: str,
    controller_key: KeyDescriptor,
    *,
    not_before: int,
    not_after: int,
    base_document: str = None,
) -> LedgerWriteStep:
    """Insert a DID document controlled by a secp256k1 key."""
    return LedgerWriteStep(
        EbsiRpcMethod.INSERT_DID_DOCUMENT,
        {
            "from": ethereum_address(controller_key.public_key_hex),
            "did": did,
            "baseDocument": base_document or BASE_CONTEXT_DOC,
            "vMethodId": calculate_jwk_thumbprint_for_key(controller_key),
            "isSecp256k1": True,
            "publicKey": format_ebsi_public_key(controller_key),
            "notBefore": not_before,
            "notAfter": not_after,
        },
    )


def add_verification_method_step(
    did: str, controller_key: KeyDescriptor, key: KeyDescriptor
) -> LedgerWriteStep:
    """Add ``key`` as verification method of the document."""
    return LedgerWriteStep(
        EbsiRpcMethod.ADD_VERIFICATION_METHOD,
        {
            "from": ethereum_address(controller_key.public_key_hex),
            "did": did,
            "isSecp256k1": key.type is KeyType.SECP256K1,
            "vMethodId": calculate_jwk_thumbprint_for_key(key),
            "publicKey": format_ebsi_public_key(key),
        },
    )


def add_verification_method_relationship_step(
    did: str,
    controller_key: KeyDescriptor,
    key: KeyDescriptor,
    relationship: Union[KeyPurpose, str],
    *,
    not_before: int,
    not_after: int,
) -> LedgerWriteStep:
    """Grant a verification relationship to an added verification method."""
    return LedgerWriteStep(
        EbsiRpcMethod.ADD_VERIFICATION_METHOD_RELATIONSHIP,
        {
            "from": ethereum_address(controller_key.public_key_hex),
            "did": did,
            "vMethodId": calculate_jwk_thumbprint_for_key(key),
            "name": KeyPurpose(relationship).value,
            "notBefore": not_before,
            "notAfter": not_after,
        },
    )


def add_service_step(
    did: str, controller_key: KeyDescriptor, service: Service
) -> LedgerWriteStep:
    """Add a service endpoint to the document."""
    return LedgerWriteStep(
        EbsiRpcMethod.ADD_SERVICE,
        {
            "from": ethereum_address(controller_key.public_key_hex),
            "did": did,
            "service": service.serialize(),
        },
    )
