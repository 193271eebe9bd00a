"""JSON-RPC transport for the EBSI DID registry."""

import json
import logging
from typing import Any, Mapping, NamedTuple, Optional, Sequence, Union

from aiohttp import ClientError, ClientSession, ClientTimeout

from ...config.base import BaseSettings
from ...config.settings import Settings
from ..error import LedgerTransportError
from .constants import get_registry_api_urls, merge_api_opts

LOGGER = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"


class RpcResult(NamedTuple):
    """Successful JSON-RPC response."""

    rpc_id: int
    value: Any


class RpcFault(NamedTuple):
    """JSON-RPC response carrying an error or status payload."""

    rpc_id: int
    payload: Any


RpcOutcome = Union[RpcResult, RpcFault]


def is_fault(body: Any) -> bool:
    """Return whether a response body signals a failure."""
    return not isinstance(body, Mapping) or "status" in body or "error" in body


class EbsiRpcClient:
    """Client posting JSON-RPC requests to the registry mutate endpoint."""

    def __init__(
        self,
        settings: BaseSettings = None,
        *,
        session: ClientSession = None,
        timeout: float = None,
    ):
        """Initialize the client.

        Args:
            settings: ``ebsi.*`` settings providing endpoint defaults
            session: optional externally managed HTTP session
            timeout: total request timeout in seconds

        """
        self.settings = settings or Settings()
        self._session = session
        self._owns_session = session is None
        timeout = timeout or self.settings.get_float("ebsi.rpc_timeout")
        self._timeout = ClientTimeout(total=timeout) if timeout else None

    def __repr__(self) -> str:
        """Return a string representation of the client."""
        return "<{}(mutate={})>".format(self.__class__.__name__, self.mutate_url())

    async def __aenter__(self) -> "EbsiRpcClient":
        """Async context manager enter."""
        return self

    async def __aexit__(self, err_type, err_value, err_t):
        """Async context manager exit."""
        await self.close()

    def mutate_url(self, api_opts: Mapping = None) -> str:
        """Resolve the JSON-RPC endpoint for the given api options."""
        opts = merge_api_opts(
            {
                "environment": self.settings.get_str("ebsi.environment"),
                "version": self.settings.get_str("ebsi.version"),
                "registry_host": self.settings.get_str("ebsi.registry_host"),
            },
            api_opts,
        )
        return get_registry_api_urls(
            environment=opts.get("environment"),
            version=opts.get("version"),
            host=opts.get("registry_host"),
        ).mutate

    async def _get_session(self) -> ClientSession:
        if not self._session or self._session.closed:
            self._session = ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def call(
        self,
        method: str,
        params: Sequence[dict],
        rpc_id: int,
        bearer_token: str,
        api_opts: Optional[Mapping] = None,
    ) -> RpcOutcome:
        """Send a JSON-RPC request.

        Args:
            method: registry method name
            params: positional parameters, a list with one object
            rpc_id: request identifier
            bearer_token: access token authorizing the call
            api_opts: endpoint overrides (``environment``, ``version``,
                ``registry_host``)

        Returns:
            RpcResult, or RpcFault when the body carries ``status`` or ``error``

        Raises:
            LedgerTransportError: if the registry cannot be reached

        """
        url = self.mutate_url(api_opts)
        payload = {
            "jsonrpc": JSONRPC_VERSION,
            "method": getattr(method, "value", method),
            "params": list(params),
            "id": rpc_id,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {bearer_token}",
        }
        LOGGER.debug("Calling %s on %s with id %s", payload["method"], url, rpc_id)

        session = await self._get_session()
        try:
            async with session.post(url, json=payload, headers=headers) as response:
                status = response.status
                text = await response.text()
        except ClientError as err:
            raise LedgerTransportError(
                f"Error calling {payload['method']} on {url}"
            ) from err

        try:
            body = json.loads(text)
        except ValueError:
            LOGGER.debug("Non JSON response from registry (HTTP %s)", status)
            return RpcFault(rpc_id, {"status": status, "title": text})

        if is_fault(body):
            LOGGER.debug("Registry fault for %s (HTTP %s)", payload["method"], status)
            return RpcFault(rpc_id, body)
        return RpcResult(rpc_id, body.get("result"))
