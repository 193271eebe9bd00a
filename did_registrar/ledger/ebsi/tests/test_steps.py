import json

import pytest

from ....registrar.models.key import KeyDescriptor
from ....registrar.models.service import Service
from ....wallet.jwk import calculate_jwk_thumbprint_for_key
from ....wallet.key_type import KeyType
from ....wallet.purposes import KeyPurpose
from ..constants import EbsiRpcMethod
from ..steps import (
    add_service_step,
    add_verification_method_relationship_step,
    add_verification_method_step,
    insert_did_document_step,
)

DID = "did:ebsi:zabc"
ADDRESS_ONE = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"


@pytest.fixture
def controller():
    yield KeyDescriptor(
        kid="k1",
        type=KeyType.SECP256K1,
        public_key_hex=(
            "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
        ),
        purposes=[KeyPurpose.CAPABILITY_INVOCATION],
        is_controller=True,
    )


@pytest.fixture
def r1_key():
    yield KeyDescriptor(
        kid="r1",
        type=KeyType.SECP256R1,
        public_key_hex=(
            "036b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296"
        ),
        purposes=[KeyPurpose.ASSERTION_METHOD, KeyPurpose.AUTHENTICATION],
    )


def test_insert_did_document(controller):
    step = insert_did_document_step(DID, controller, not_before=10, not_after=20)
    assert step.method is EbsiRpcMethod.INSERT_DID_DOCUMENT
    params = step.params
    assert params["from"] == ADDRESS_ONE
    assert params["did"] == DID
    assert params["isSecp256k1"] is True
    assert params["vMethodId"] == calculate_jwk_thumbprint_for_key(controller)
    assert params["publicKey"].startswith("04")
    assert (params["notBefore"], params["notAfter"]) == (10, 20)
    assert "https://www.w3.org/ns/did/v1" in json.loads(params["baseDocument"])[
        "@context"
    ]


def test_add_verification_method(controller, r1_key):
    step = add_verification_method_step(DID, controller, r1_key)
    assert step.method is EbsiRpcMethod.ADD_VERIFICATION_METHOD
    assert step.params["from"] == ADDRESS_ONE
    assert step.params["isSecp256k1"] is False
    assert step.params["vMethodId"] == calculate_jwk_thumbprint_for_key(r1_key)


def test_add_relationship(controller, r1_key):
    step = add_verification_method_relationship_step(
        DID, controller, r1_key, "authentication", not_before=1, not_after=2
    )
    assert step.method is EbsiRpcMethod.ADD_VERIFICATION_METHOD_RELATIONSHIP
    assert step.params["name"] == "authentication"
    assert step.params["vMethodId"] == calculate_jwk_thumbprint_for_key(r1_key)


def test_add_service(controller):
    service = Service(
        id=f"{DID}#linked", type="LinkedDomains", service_endpoint="https://x.org"
    )
    step = add_service_step(DID, controller, service)
    assert step.method is EbsiRpcMethod.ADD_SERVICE
    assert step.params["service"] == {
        "id": f"{DID}#linked",
        "type": "LinkedDomains",
        "serviceEndpoint": "https://x.org",
    }
