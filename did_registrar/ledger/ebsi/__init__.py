"""EBSI DID registry ledger protocol."""
