import json

import pytest
from aiohttp import ClientConnectionError

from ....config.settings import Settings
from ...error import LedgerTransportError
from ..constants import EbsiRpcMethod
from ..rpc import EbsiRpcClient, RpcFault, RpcResult, is_fault


class MockResponse:
    def __init__(self, status: int, text: str):
        self.status = status
        self._text = text

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False


class MockSession:
    closed = False

    def __init__(self, response: MockResponse = None, error: Exception = None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, json=None, headers=None):
        self.requests.append((url, json, headers))
        if self.error:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


def test_is_fault():
    assert not is_fault({"jsonrpc": "2.0", "id": 1, "result": {}})
    assert is_fault({"error": {"code": -32000}})
    assert is_fault({"status": 400, "title": "Bad Request"})
    assert is_fault(["unexpected"])


def test_mutate_url_from_settings():
    client = EbsiRpcClient(
        Settings({"ebsi.environment": "conformance", "ebsi.version": "v4"})
    )
    assert (
        client.mutate_url() == "https://api-conformance.ebsi.eu/did-registry/v4/jsonrpc"
    )
    assert client.mutate_url({"environment": "test"}) == (
        "https://api-test.ebsi.eu/did-registry/v4/jsonrpc"
    )


@pytest.mark.asyncio
async def test_call_result():
    session = MockSession(
        MockResponse(200, json.dumps({"jsonrpc": "2.0", "id": 7, "result": {"a": 1}}))
    )
    client = EbsiRpcClient(session=session)
    outcome = await client.call(
        EbsiRpcMethod.INSERT_DID_DOCUMENT, [{"did": "did:ebsi:z1"}], 7, "token"
    )
    assert outcome == RpcResult(7, {"a": 1})

    url, payload, headers = session.requests[0]
    assert url == "https://api-pilot.ebsi.eu/did-registry/v5/jsonrpc"
    assert payload == {
        "jsonrpc": "2.0",
        "method": "insertDidDocument",
        "params": [{"did": "did:ebsi:z1"}],
        "id": 7,
    }
    assert headers["Authorization"] == "Bearer token"


@pytest.mark.asyncio
async def test_call_fault():
    fault = {"jsonrpc": "2.0", "id": 7, "error": {"code": -32602, "message": "bad"}}
    client = EbsiRpcClient(session=MockSession(MockResponse(200, json.dumps(fault))))
    outcome = await client.call("addService", [{}], 7, "token")
    assert isinstance(outcome, RpcFault)
    assert outcome.payload == fault


@pytest.mark.asyncio
async def test_call_non_json():
    client = EbsiRpcClient(session=MockSession(MockResponse(502, "Bad Gateway")))
    outcome = await client.call("addService", [{}], 7, "token")
    assert outcome == RpcFault(7, {"status": 502, "title": "Bad Gateway"})


@pytest.mark.asyncio
async def test_call_transport_error():
    client = EbsiRpcClient(session=MockSession(error=ClientConnectionError("down")))
    with pytest.raises(LedgerTransportError):
        await client.call("addService", [{}], 7, "token")


@pytest.mark.asyncio
async def test_external_session_not_closed():
    session = MockSession()
    async with EbsiRpcClient(session=session):
        pass
    assert not session.closed
