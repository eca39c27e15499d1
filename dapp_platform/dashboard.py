"""Presentation-side session that owns the Snapshot slot.

Wires the wallet session, the read-model builder and the transaction
orchestrator together. The slot is replaced wholesale by whichever rebuild
finishes last; overlapping rebuilds are neither ordered nor cancelled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from core.adapters import create_ledger
from core.domain import RebuildFailure, Snapshot
from core.errors import WalletSessionError
from core.orchestrator import TransactionOrchestrator, TxOptions, TxOutcome
from core.ports import ContractCall, LedgerPort, WalletSessionPort
from core.read_model import ReadModelBuilder
from core.status import StatusChannel

from .config import LedgerSettings

logger = logging.getLogger(__name__)


CONNECT_ADVISORY = "Could not connect – check wallet"
BUSY_MESSAGE = "A transaction is already pending"


class DashboardSession:
    """Holds the current account, snapshot and status line for one client."""

    def __init__(self, *, ledger: LedgerPort, wallet: WalletSessionPort | None = None):
        self.ledger = ledger
        self.wallet = wallet
        self.status = StatusChannel()
        self.builder = ReadModelBuilder(ledger)
        self.orchestrator = TransactionOrchestrator(
            status=self.status,
            refresh=self.refresh,
            sender=lambda: self.account,
        )
        self.account: Optional[str] = None
        self.snapshot: Optional[Snapshot] = None
        self.last_failure: Optional[RebuildFailure] = None
        self.pending: bool = False
        self._start_task: Optional[asyncio.Future] = None
        self._advisory_pending = False

    @property
    def started(self) -> bool:
        return self._start_task is not None and self._start_task.done()

    async def start(self) -> None:
        """Connect the wallet, subscribe to account changes, and rebuild.

        Concurrent callers share one startup and all return after the
        mount rebuild has settled.
        """
        if self._start_task is None:
            self._start_task = asyncio.ensure_future(self._connect())
        await self._start_task

    async def _connect(self) -> None:
        if self.wallet is not None:
            self.wallet.subscribe(self.on_account_change)
            try:
                self.account = await self.wallet.request_current_account() or None
            except WalletSessionError as e:
                logger.warning("Wallet connection failed: %s", e)
                self.account = None

        # Shown after the first successful rebuild, which clears the line.
        self._advisory_pending = self.account is None
        await self.refresh()

    async def on_account_change(self, address: Optional[str]) -> None:
        """Replace the session identity and rebuild for it."""
        self.account = address or None
        if self.account is not None:
            self._advisory_pending = False
        await self.refresh()

    async def switch_account(self, address: Optional[str]) -> None:
        """Activate another account through the wallet when it supports it."""
        select = getattr(self.wallet, "select_account", None)
        if select is None:
            await self.on_account_change(address)
            return
        try:
            await select(address)
        except WalletSessionError as e:
            self.status.publish(str(e))

    async def refresh(self) -> Snapshot | RebuildFailure:
        """Rebuild the read model and assign it into the slot on success."""
        result = await self.builder.rebuild(self.account)
        if isinstance(result, RebuildFailure):
            self.last_failure = result
            self.status.publish(result.message)
            return result
        self.snapshot = result
        self.last_failure = None
        if self._advisory_pending:
            self._advisory_pending = False
            self.status.publish(CONNECT_ADVISORY)
        else:
            self.status.clear()
        return result

    def claim(self) -> bool:
        """Mark a user intent in flight; False if another one already is.

        Synchronous, so no other intent can interleave between the check
        and the claim.
        """
        if self.pending:
            return False
        self.pending = True
        return True

    def release(self) -> None:
        self.pending = False

    async def submit(
        self,
        operation: ContractCall,
        options: TxOptions | None = None,
        success_message: str = "Transaction succeeded",
    ) -> TxOutcome:
        """Run ``operation`` through the orchestrator, flagging it pending.

        A caller that already holds the claim keeps it after this returns.
        """
        owned = self.claim()
        try:
            return await self.orchestrator.submit(operation, options, success_message)
        finally:
            if owned:
                self.release()


def create_dashboard(settings: LedgerSettings) -> DashboardSession:
    """Build a dashboard session connected to the configured ledger."""
    connection = create_ledger(
        settings.rpc_url,
        settings.contract_address,
        abi_path=settings.abi_path,
        preferred_account=settings.account,
    )
    return DashboardSession(ledger=connection.ledger, wallet=connection.wallet)
