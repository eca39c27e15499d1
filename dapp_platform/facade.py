"""User-intent facade: maps dashboard actions to orchestrated contract calls."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from core.amounts import pledge_total, to_wei
from core.domain import READ_FAILURE_MESSAGE
from core.orchestrator import TxOptions, TxOutcome, TxPhase, failure_message
from core.ports import ContractCall

from .config import normalize_address
from .dashboard import BUSY_MESSAGE, DashboardSession

logger = logging.getLogger(__name__)


CAMPAIGN_NOT_FOUND_MESSAGE = "Campaign not found"


class CrowdfundingFacade:
    """Prepares values and contract calls for each user intent.

    Every method reports through the dashboard's status channel and returns
    a :class:`TxOutcome`; none of them raise. Intents are exclusive: while
    one is in flight (pre-reads included) another returns a ``BUSY``
    outcome without touching the status line.
    """

    def __init__(self, dashboard: DashboardSession):
        self.dashboard = dashboard

    @property
    def ledger(self):
        return self.dashboard.ledger

    def _reject(self, message: str) -> TxOutcome:
        self.dashboard.status.publish(message)
        return TxOutcome(phase=TxPhase.FAILED, message=message)

    async def _exclusive(self, intent: Callable[[], Awaitable[TxOutcome]]) -> TxOutcome:
        if not self.dashboard.claim():
            logger.info("Intent rejected: %s", BUSY_MESSAGE)
            return TxOutcome(phase=TxPhase.BUSY, message=BUSY_MESSAGE)
        try:
            return await intent()
        finally:
            self.dashboard.release()

    async def _run(
        self,
        prepare: Callable[[], ContractCall],
        success_message: str,
        *,
        value: int | None = None,
    ) -> TxOutcome:
        try:
            operation = prepare()
        except Exception as e:
            # web3 rejects arguments that do not fit the ABI types here.
            logger.warning("Could not prepare contract call: %s", e)
            return self._reject(failure_message(e))
        return await self.dashboard.submit(operation, TxOptions(value=value), success_message)

    async def create_campaign(self, title: str, pledge_cost_eth: str, pledges_needed: int) -> TxOutcome:
        """Create a campaign, attaching the contract's current fee."""
        return await self._exclusive(lambda: self._create_campaign(title, pledge_cost_eth, pledges_needed))

    async def _create_campaign(self, title: str, pledge_cost_eth: str, pledges_needed: int) -> TxOutcome:
        title = (title or "").strip()
        if not title:
            return self._reject("Title is required")
        try:
            pledge_cost = to_wei(pledge_cost_eth or "0", "ether")
            goal = int(pledges_needed)
        except (TypeError, ValueError) as e:
            return self._reject(str(e))
        if goal <= 0:
            return self._reject("Pledges needed must be at least 1")

        try:
            fee = await self.ledger.get_fee_amount()
        except Exception as e:
            logger.warning("Fee read failed before createCampaign: %s", e)
            return self._reject(READ_FAILURE_MESSAGE)

        return await self._run(
            lambda: self.ledger.create_campaign(title, pledge_cost, goal),
            "Campaign created",
            value=fee,
        )

    async def fund_campaign(self, campaign_id: int, quantity: int = 1) -> TxOutcome:
        """Pledge ``quantity`` units, attaching exactly pledge cost × quantity."""
        return await self._exclusive(lambda: self._fund_campaign(campaign_id, quantity))

    async def _fund_campaign(self, campaign_id: int, quantity: int) -> TxOutcome:
        try:
            campaign = await self.ledger.get_campaign(int(campaign_id))
        except Exception as e:
            logger.info("Campaign #%s lookup failed before funding: %s", campaign_id, e)
            return self._reject(CAMPAIGN_NOT_FOUND_MESSAGE)

        try:
            total = pledge_total(campaign.pledge_cost, quantity)
        except ValueError as e:
            return self._reject(str(e))

        return await self._run(
            lambda: self.ledger.fund_campaign(campaign.id, quantity),
            "Funded successfully",
            value=total,
        )

    async def complete_campaign(self, campaign_id: int) -> TxOutcome:
        return await self._exclusive(lambda: self._run(
            lambda: self.ledger.complete_campaign(int(campaign_id)), "Campaign completed",
        ))

    async def cancel_campaign(self, campaign_id: int) -> TxOutcome:
        return await self._exclusive(lambda: self._run(
            lambda: self.ledger.cancel_campaign(int(campaign_id)), "Campaign cancelled",
        ))

    async def claim_refunds(self) -> TxOutcome:
        return await self._exclusive(lambda: self._run(self.ledger.claim_refunds, "Refund claimed"))

    async def withdraw_owner_funds(self) -> TxOutcome:
        return await self._exclusive(lambda: self._run(self.ledger.withdraw_owner_funds, "Fees withdrawn"))

    async def destroy_contract(self) -> TxOutcome:
        return await self._exclusive(lambda: self._run(self.ledger.destroy_contract, "Contract destroyed"))

    async def ban_entrepreneur(self, address: str) -> TxOutcome:
        return await self._exclusive(lambda: self._run(
            lambda: self.ledger.ban_entrepreneur(normalize_address(address)), "Entrepreneur banned",
        ))

    async def change_owner(self, address: str) -> TxOutcome:
        return await self._exclusive(lambda: self._run(
            lambda: self.ledger.change_owner(normalize_address(address)), "Owner changed",
        ))
