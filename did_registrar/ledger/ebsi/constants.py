"""EBSI DID registry constants and endpoint resolution."""

import json
from enum import Enum
from typing import Mapping, NamedTuple, Optional

DEFAULT_ENVIRONMENT = "pilot"
DEFAULT_VERSION = "v5"
DEFAULT_REGISTRY_HOST = "ebsi.eu"

MAX_NOT_AFTER = 2**53 - 1

BASE_CONTEXT_DOC = json.dumps(
    {
        "@context": [
            "https://www.w3.org/ns/did/v1",
            "https://w3id.org/security/suites/jws-2020/v1",
        ]
    }
)


class EbsiRpcMethod(str, Enum):
    """JSON-RPC methods of the DID registry."""

    INSERT_DID_DOCUMENT = "insertDidDocument"
    ADD_VERIFICATION_METHOD = "addVerificationMethod"
    ADD_VERIFICATION_METHOD_RELATIONSHIP = "addVerificationMethodRelationship"
    ADD_SERVICE = "addService"
    SEND_SIGNED_TRANSACTION = "sendSignedTransaction"


class EbsiDidSpecInfo(NamedTuple):
    """Kinds of EBSI DIDs."""

    type: str
    method: str
    version: Optional[int] = None
    did_length: Optional[int] = None
    private_key_length: Optional[int] = None


class EbsiDidSpecInfos:
    """Known kinds of EBSI DIDs."""

    V1 = EbsiDidSpecInfo(
        type="Legal Entity",
        method="did:ebsi:",
        version=0x01,
        did_length=16,
        private_key_length=32,
    )
    KEY = EbsiDidSpecInfo(type="Natural Person", method="did:key:")


class RegistryApiUrls(NamedTuple):
    """DID registry endpoints."""

    mutate: str
    query: str


def get_registry_api_urls(
    environment: str = None, version: str = None, host: str = None
) -> RegistryApiUrls:
    """Resolve the registry endpoints for an environment and API version."""
    base_url = "https://api-{}.{}/did-registry/{}".format(
        environment or DEFAULT_ENVIRONMENT,
        host or DEFAULT_REGISTRY_HOST,
        version or DEFAULT_VERSION,
    )
    return RegistryApiUrls(mutate=f"{base_url}/jsonrpc", query=f"{base_url}/identifiers")


def merge_api_opts(*opts: Optional[Mapping]) -> dict:
    """Merge api option mappings, later values winning over earlier ones."""
    merged = {}
    for opt in opts:
        if opt:
            merged.update({k: v for k, v in opt.items() if v is not None})
    return merged
