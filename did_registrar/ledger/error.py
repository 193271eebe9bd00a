"""Ledger related errors."""

from typing import Any

from ..core.error import BaseError


class LedgerError(BaseError):
    """Base class for ledger errors."""


class LedgerTransportError(LedgerError):
    """The registry could not be reached or answered with an unusable response."""


class RpcFaultError(LedgerError):
    """The registry answered a JSON-RPC call with an error payload.

    The payload is kept as received so callers can inspect it.
    """

    def __init__(self, payload: Any, *, method: str = None, rpc_id: int = None):
        """Initialize with the raw fault payload."""
        super().__init__(
            "Registry call {} failed: {}".format(method or "(unknown)", payload)
        )
        self.payload = payload
        self.method = method
        self.rpc_id = rpc_id
