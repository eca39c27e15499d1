"""Exception hierarchy raised by ledger and wallet adapters."""

from __future__ import annotations


class LedgerError(Exception):
    """Base exception for ledger contract failures."""


class WalletSessionError(LedgerError):
    """Raised when no wallet account can be obtained."""


class TransactionRevertedError(LedgerError):
    """Raised when a mined transaction reports a failed status."""

    def __init__(self, message: str, *, tx_hash: str | None = None):
        super().__init__(message)
        self.tx_hash = tx_hash
