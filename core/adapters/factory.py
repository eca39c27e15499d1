"""
Factory for creating ledger and wallet adapters for a JSON-RPC endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.ports import LedgerPort, WalletSessionPort

from .abi import load_abi


@dataclass
class LedgerConnection:
    """Ledger and wallet adapters sharing one node connection."""

    ledger: LedgerPort
    wallet: WalletSessionPort


def create_ledger(
    rpc_url: str,
    contract_address: str,
    *,
    abi_path: str | Path | None = None,
    preferred_account: str | None = None,
) -> LedgerConnection:
    """Create web3-backed adapters for the contract at ``contract_address``.

    Args:
        rpc_url:           HTTP JSON-RPC endpoint of the node.
        contract_address:  Deployed crowdfunding contract address.
        abi_path:          Optional JSON ABI overriding the built-in surface.
        preferred_account: Account to activate instead of the node's first.

    Raises:
        ImportError: If the ``web3`` package is not installed.
        ValueError:  If the address or ABI is malformed.
    """
    try:
        from web3 import AsyncHTTPProvider, AsyncWeb3

        from .web3_ledger import Web3CrowdfundingLedger
        from .web3_wallet import NodeWalletSession
    except ImportError as e:
        raise ImportError(
            "The 'web3' package is required to talk to the ledger. "
            "Install it with: pip install web3"
        ) from e

    # Checksum casing is not enforced; the ledger re-checksums the address.
    if not AsyncWeb3.is_address((contract_address or "").lower()):
        raise ValueError(f"Invalid contract address: {contract_address!r}")

    w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
    ledger = Web3CrowdfundingLedger(w3, contract_address, load_abi(abi_path))
    wallet = NodeWalletSession(w3, preferred_account=preferred_account)
    return LedgerConnection(ledger=ledger, wallet=wallet)
