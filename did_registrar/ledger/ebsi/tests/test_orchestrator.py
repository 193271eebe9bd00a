import pytest
from unittest.mock import AsyncMock, MagicMock

from ....registrar.models.transaction import SignedTransaction
from ....utils.randomness import FixedRandomSource
from ....wallet.error import SigningError
from ...error import RpcFaultError
from ..constants import EbsiRpcMethod
from ..orchestrator import LedgerTransactionOrchestrator
from ..rpc import RpcFault, RpcResult
from ..steps import LedgerWriteStep

UNSIGNED = {"to": "0x00", "data": "0x01", "nonce": "0x0"}
SIGNED = SignedTransaction(
    r="0x" + "11" * 32,
    s="0x" + "22" * 32,
    v=27,
    signed_raw_transaction="0xf8",
)
STEPS = [
    LedgerWriteStep(EbsiRpcMethod.INSERT_DID_DOCUMENT, {"did": "did:ebsi:z1"}),
    LedgerWriteStep(EbsiRpcMethod.ADD_VERIFICATION_METHOD, {"did": "did:ebsi:z1"}),
    LedgerWriteStep(
        EbsiRpcMethod.ADD_VERIFICATION_METHOD_RELATIONSHIP, {"did": "did:ebsi:z1"}
    ),
]


def build_or_submit(method, params, rpc_id, bearer_token, api_opts):
    if method == EbsiRpcMethod.SEND_SIGNED_TRANSACTION:
        return RpcResult(rpc_id, "0xreceipt")
    return RpcResult(rpc_id, dict(UNSIGNED))


@pytest.fixture
def transport():
    transport = MagicMock()
    transport.call = AsyncMock(side_effect=build_or_submit)
    yield transport


@pytest.fixture
def signer():
    signer = MagicMock()
    signer.sign_eth_transaction = AsyncMock(return_value=SIGNED)
    yield signer


@pytest.mark.asyncio
async def test_execute_all_steps(transport, signer):
    orchestrator = LedgerTransactionOrchestrator(
        transport, signer, random=FixedRandomSource(rpc_ids=[42])
    )
    receipts = await orchestrator.execute(STEPS, kid="k1", bearer_token="token")

    assert receipts == ["0xreceipt"] * 3
    methods = [call.args[0] for call in transport.call.await_args_list]
    assert methods == [
        EbsiRpcMethod.INSERT_DID_DOCUMENT,
        EbsiRpcMethod.SEND_SIGNED_TRANSACTION,
        EbsiRpcMethod.ADD_VERIFICATION_METHOD,
        EbsiRpcMethod.SEND_SIGNED_TRANSACTION,
        EbsiRpcMethod.ADD_VERIFICATION_METHOD_RELATIONSHIP,
        EbsiRpcMethod.SEND_SIGNED_TRANSACTION,
    ]
    assert {call.args[2] for call in transport.call.await_args_list} == {42}
    assert {call.args[3] for call in transport.call.await_args_list} == {"token"}

    envelope = transport.call.await_args_list[1].args[1][0]
    assert envelope == {
        "protocol": "eth",
        "unsignedTransaction": UNSIGNED,
        "r": SIGNED.r,
        "s": SIGNED.s,
        "v": "27",
        "signedRawTransaction": SIGNED.signed_raw_transaction,
    }
    assert signer.sign_eth_transaction.await_count == 3
    signer.sign_eth_transaction.assert_awaited_with("k1", UNSIGNED)


@pytest.mark.asyncio
async def test_fault_aborts_session(transport, signer):
    fault = {"status": 400, "title": "Bad Request", "detail": "nonce too low"}
    transport.call = AsyncMock(
        side_effect=[RpcResult(5, dict(UNSIGNED)), RpcFault(5, fault)]
    )
    orchestrator = LedgerTransactionOrchestrator(transport, signer)

    with pytest.raises(RpcFaultError) as excinfo:
        await orchestrator.execute(
            STEPS, kid="k1", bearer_token="token", rpc_id=5
        )
    assert excinfo.value.payload is fault
    assert excinfo.value.method == EbsiRpcMethod.SEND_SIGNED_TRANSACTION.value
    assert excinfo.value.rpc_id == 5
    assert transport.call.await_count == 2


@pytest.mark.asyncio
async def test_build_fault_skips_signing(transport, signer):
    transport.call = AsyncMock(return_value=RpcFault(5, {"error": "denied"}))
    orchestrator = LedgerTransactionOrchestrator(transport, signer)

    with pytest.raises(RpcFaultError):
        await orchestrator.execute(STEPS, kid="k1", bearer_token="token", rpc_id=5)
    assert transport.call.await_count == 1
    signer.sign_eth_transaction.assert_not_awaited()


@pytest.mark.asyncio
async def test_signer_failure_wrapped(transport, signer):
    signer.sign_eth_transaction = AsyncMock(side_effect=RuntimeError("hsm down"))
    orchestrator = LedgerTransactionOrchestrator(transport, signer)

    with pytest.raises(SigningError):
        await orchestrator.execute(STEPS, kid="k1", bearer_token="token", rpc_id=5)
    assert transport.call.await_count == 1


@pytest.mark.asyncio
async def test_no_steps(transport, signer):
    orchestrator = LedgerTransactionOrchestrator(transport, signer)
    assert await orchestrator.execute([], kid="k1", bearer_token="t", rpc_id=1) == []
    transport.call.assert_not_awaited()
