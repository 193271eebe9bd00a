"""Capabilities consumed by registrars for key storage and signing."""

from abc import ABC, abstractmethod

from ..registrar.models.key import ImportableKey, KeyDescriptor
from ..registrar.models.transaction import SignedTransaction


class BaseKeyManager(ABC):
    """Abstract key storage capability."""

    @abstractmethod
    async def import_key(self, key: ImportableKey) -> KeyDescriptor:
        """Import key material and return the managed key.

        Args:
            key: The key material, type, purposes and target KMS

        Returns:
            The descriptor of the stored key

        """

    @abstractmethod
    async def delete_key(self, kid: str) -> bool:
        """Delete a key by its handle."""


class BaseTransactionSigner(ABC):
    """Abstract Ethereum transaction signing capability.

    Implementations that track per-key transaction ordering state, such as
    a nonce, must serialize concurrent requests for the same key.
    """

    @abstractmethod
    async def sign_eth_transaction(
        self, kid: str, transaction: dict
    ) -> SignedTransaction:
        """Sign an unsigned registry transaction with the key ``kid``.

        Raises:
            SigningError: on any signer side failure

        """
