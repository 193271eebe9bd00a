"""Replaceable sources of randomness."""

import secrets

MAX_SAFE_INTEGER = 2**53 - 1


class RandomSource:
    """Cryptographically secure random source backed by ``secrets``."""

    def token_bytes(self, length: int) -> bytes:
        """Return ``length`` random bytes."""
        return secrets.token_bytes(length)

    def rpc_id(self) -> int:
        """Return a random JSON-RPC request id.

        Ids stay within the JSON safe integer range; they are not
        guaranteed to be unique across sessions.
        """
        return secrets.randbelow(MAX_SAFE_INTEGER)


class FixedRandomSource(RandomSource):
    """Deterministic random source replaying preset values."""

    def __init__(self, data: bytes = b"", rpc_ids=()):
        """Initialize with the byte stream and rpc ids to hand out."""
        self._data = bytearray(data)
        self._rpc_ids = list(rpc_ids)

    def token_bytes(self, length: int) -> bytes:
        """Consume ``length`` bytes of the preset stream."""
        if len(self._data) < length:
            raise ValueError("Random byte stream exhausted")
        chunk = bytes(self._data[:length])
        del self._data[:length]
        return chunk

    def rpc_id(self) -> int:
        """Return the next preset rpc id."""
        if not self._rpc_ids:
            raise ValueError("No rpc ids left")
        return self._rpc_ids.pop(0)
