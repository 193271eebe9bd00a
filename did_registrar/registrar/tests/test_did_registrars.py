import pytest
from unittest.mock import MagicMock

from ...core.error import ValidationError
from ..base import (
    BaseDidRegistrar,
    DIDMethodNotSupported,
    InvalidInput,
    RegistrarError,
    UnsupportedOperationError,
)
from ..did_registrars import DIDRegistrars
from ..models.identifier import Identifier

DID = "did:ebsi:zabc"


@pytest.fixture
def registrar():
    registrar = MagicMock(BaseDidRegistrar)
    registrar.method = "ebsi"
    yield registrar


@pytest.fixture
def registrars(registrar):
    registrars = DIDRegistrars()
    registrars.register_registrar(registrar)
    yield registrars


@pytest.fixture
def identifier():
    yield Identifier(did=DID, controller_key_id="k1")


def test_registrar_for(registrars, registrar):
    assert registrars.registrar_for(method="ebsi") is registrar
    assert registrars.registrar_for(did=DID) is registrar


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"method": "ebsi", "did": DID},
        {"did": "not-a-did"},
    ],
)
def test_registrar_for_invalid(registrars, kwargs):
    with pytest.raises(InvalidInput):
        registrars.registrar_for(**kwargs)


def test_registrar_for_unknown_method(registrars):
    with pytest.raises(DIDMethodNotSupported):
        registrars.registrar_for(method="web")
    with pytest.raises(DIDMethodNotSupported):
        registrars.registrar_for(did="did:web:example.org")


@pytest.mark.asyncio
async def test_create_identifier(registrars, registrar, identifier):
    registrar.create_identifier.return_value = identifier
    result = await registrars.create_identifier("ebsi", "local", options={"a": 1})
    assert result is identifier
    registrar.create_identifier.assert_awaited_once_with(
        kms="local", alias=None, options={"a": 1}
    )


@pytest.mark.asyncio
async def test_dispatch_by_did(registrars, registrar, identifier):
    key = MagicMock()
    service = MagicMock()
    await registrars.add_key(identifier, key, {})
    registrar.add_key.assert_awaited_once_with(identifier, key, {})
    await registrars.add_service(identifier, service, {})
    registrar.add_service.assert_awaited_once_with(identifier, service, {})
    await registrars.remove_key(identifier, "k2")
    registrar.remove_key.assert_awaited_once_with(identifier, "k2", None)
    await registrars.remove_service(identifier, "svc")
    registrar.remove_service.assert_awaited_once_with(identifier, "svc", None)
    await registrars.update_identifier(identifier, {"id": DID})
    registrar.update_identifier.assert_awaited_once_with(identifier, {"id": DID}, None)
    await registrars.delete_identifier(identifier)
    registrar.delete_identifier.assert_awaited_once_with(identifier)


@pytest.mark.asyncio
async def test_dispatch_unknown_method(registrars):
    with pytest.raises(DIDMethodNotSupported):
        await registrars.delete_identifier(
            Identifier(did="did:web:example.org", controller_key_id="k1")
        )


def test_error_hierarchy():
    assert issubclass(InvalidInput, ValidationError)
    assert issubclass(InvalidInput, RegistrarError)
    assert issubclass(DIDMethodNotSupported, RegistrarError)
    assert issubclass(UnsupportedOperationError, RegistrarError)
