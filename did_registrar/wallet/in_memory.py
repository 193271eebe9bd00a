"""In-memory key manager and transaction signer.

Keys live in process memory only. Intended for tests and local development.
"""

import asyncio
import logging
from typing import Dict

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from eth_account import Account
from eth_utils import to_hex

from ..registrar.models.key import ImportableKey, KeyDescriptor
from ..registrar.models.transaction import SignedTransaction
from .base import BaseKeyManager, BaseTransactionSigner
from .error import KeyNotFoundError, SigningError, WalletError
from .key_type import KeyType
from .util import strip_hex_prefix

LOGGER = logging.getLogger(__name__)

QUANTITY_FIELDS = (
    "nonce",
    "chainId",
    "gas",
    "gasPrice",
    "value",
    "maxFeePerGas",
    "maxPriorityFeePerGas",
    "type",
)


def _to_quantity(value):
    if isinstance(value, str):
        return int(value, 16) if value.lower().startswith("0x") else int(value)
    return value


def to_eth_account_transaction(transaction: dict) -> dict:
    """Convert a registry unsigned transaction to eth-account's format."""
    tx = {k: v for k, v in transaction.items() if k != "from"}
    if "gasLimit" in tx:
        tx["gas"] = tx.pop("gasLimit")
    for field in QUANTITY_FIELDS:
        if field in tx:
            tx[field] = _to_quantity(tx[field])
    return tx


def to_recovery_v(v: int) -> int:
    """Reduce an EIP-155 or typed transaction ``v`` to 27 or 28."""
    if v >= 35:
        return (v - 35) % 2 + 27
    if v in (27, 28):
        return v
    return v % 2 + 27


class InMemoryKeyManager(BaseKeyManager, BaseTransactionSigner):
    """Key manager holding private keys in a dict."""

    def __init__(self, kms: str = "local"):
        """Initialize the key manager for the given KMS name."""
        self.kms = kms
        self._private_keys: Dict[str, str] = {}
        self._keys: Dict[str, KeyDescriptor] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    async def import_key(self, key: ImportableKey) -> KeyDescriptor:
        """Import a private key and derive its compressed public key."""
        private_key_hex = strip_hex_prefix(key.private_key_hex)
        try:
            private_key = ec.derive_private_key(
                int(private_key_hex, 16), key.type.curve
            )
        except ValueError as err:
            raise WalletError(f"Invalid {key.type.value} private key") from err
        public_key_hex = (
            private_key.public_key()
            .public_bytes(Encoding.X962, PublicFormat.CompressedPoint)
            .hex()
        )
        kid = key.kid or public_key_hex
        descriptor = KeyDescriptor(
            kid=kid,
            type=key.type,
            public_key_hex=public_key_hex,
            kms=key.kms,
            purposes=key.purposes,
            is_controller=key.is_controller,
        )
        self._private_keys[kid] = private_key_hex
        self._keys[kid] = descriptor
        LOGGER.debug("Imported %s key %s", key.type.value, kid)
        return descriptor

    async def get_key(self, kid: str) -> KeyDescriptor:
        """Fetch a key descriptor by handle."""
        if kid not in self._keys:
            raise KeyNotFoundError(f"Unknown key: {kid}")
        return self._keys[kid]

    async def delete_key(self, kid: str) -> bool:
        """Delete a key by handle."""
        self._private_keys.pop(kid, None)
        self._locks.pop(kid, None)
        return self._keys.pop(kid, None) is not None

    async def sign_eth_transaction(
        self, kid: str, transaction: dict
    ) -> SignedTransaction:
        """Sign a registry transaction with a stored secp256k1 key."""
        key = self._keys.get(kid)
        if not key:
            raise SigningError(f"Unknown key: {kid}")
        if key.type is not KeyType.SECP256K1:
            raise SigningError(
                f"Key {kid} of type {key.type.value} cannot sign Ethereum transactions"
            )
        lock = self._locks.setdefault(kid, asyncio.Lock())
        async with lock:
            try:
                signed = Account.sign_transaction(
                    to_eth_account_transaction(transaction),
                    "0x" + self._private_keys[kid],
                )
            except (TypeError, ValueError, KeyError) as err:
                raise SigningError(f"Could not sign transaction: {err}") from err
        return SignedTransaction(
            r=to_hex(signed.r.to_bytes(32, "big")),
            s=to_hex(signed.s.to_bytes(32, "big")),
            v=to_recovery_v(signed.v),
            signed_raw_transaction=to_hex(signed.raw_transaction),
        )
