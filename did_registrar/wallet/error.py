"""Wallet-related exceptions."""

from ..core.error import BaseError, ValidationError


class WalletError(BaseError):
    """General wallet exception."""


class KeyNotFoundError(WalletError):
    """Record not found exception."""


class SigningError(WalletError):
    """Raised when the signing capability cannot sign a transaction."""


class InvalidPurposeError(ValidationError):
    """Raised when the requested key purposes are not allowed for a key type."""


class InvalidKeyLengthError(ValidationError):
    """Raised when supplied private key material has the wrong length."""


class MissingClaimError(ValidationError):
    """Raised when a JWK lacks a member required for its thumbprint."""

    def __init__(self, claim: str, message: str = None):
        """Initialize with the name of the missing member."""
        super().__init__(message or f'JWK "{claim}" parameter missing or invalid')
        self.claim = claim
