import pytest

from ...config.injection_context import InjectionContext
from ...config.base import InjectionError
from ...ledger.ebsi.rpc import EbsiRpcClient
from ...wallet.base import BaseKeyManager, BaseTransactionSigner
from ...wallet.in_memory import InMemoryKeyManager
from .. import setup
from ..default.ebsi import EbsiDIDRegistrar
from ..did_registrars import DIDRegistrars


@pytest.fixture
def context():
    context = InjectionContext(settings={"ebsi.default_kms": "local"})
    key_manager = InMemoryKeyManager()
    context.bind_instance(DIDRegistrars, DIDRegistrars())
    context.bind_instance(BaseKeyManager, key_manager)
    context.bind_instance(BaseTransactionSigner, key_manager)
    yield context


@pytest.mark.asyncio
async def test_setup_registers_ebsi(context):
    await setup(context)
    registrar = context.inject(DIDRegistrars).registrar_for(method="ebsi")
    assert isinstance(registrar, EbsiDIDRegistrar)
    assert registrar.default_kms == "local"
    assert registrar.key_manager is context.inject(BaseKeyManager)
    assert isinstance(context.inject(EbsiRpcClient), EbsiRpcClient)


@pytest.mark.asyncio
async def test_setup_reuses_transport(context):
    transport = EbsiRpcClient(context.settings)
    context.bind_instance(EbsiRpcClient, transport)
    await setup(context)
    registrar = context.inject(DIDRegistrars).registrar_for(method="ebsi")
    assert registrar.orchestrator.transport is transport


@pytest.mark.asyncio
async def test_setup_ledger_disabled(context):
    context.update_settings({"ledger.disabled": True})
    await setup(context)
    assert not context.inject(DIDRegistrars).method_to_registrar


@pytest.mark.asyncio
async def test_setup_without_registry():
    await setup(InjectionContext())


@pytest.mark.asyncio
async def test_setup_without_signer(context):
    context.clear_binding(BaseTransactionSigner)
    with pytest.raises(InjectionError):
        await setup(context)
