"""
Ledger adapters for the core ports.

Concrete implementations live behind a lazy factory so ``core`` stays
importable without a node library installed.
"""

from .abi import CROWDFUNDING_ABI, load_abi
from .factory import LedgerConnection, create_ledger

__all__ = [
    "CROWDFUNDING_ABI",
    "LedgerConnection",
    "create_ledger",
    "load_abi",
]
