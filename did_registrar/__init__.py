"""did:ebsi registrar: ledger-write protocol for EBSI DID documents."""

from .version import __version__

__all__ = ["__version__"]
