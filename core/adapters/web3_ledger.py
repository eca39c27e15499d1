"""
web3.py implementation of the ledger ports.

Wraps an ``AsyncWeb3`` contract instance, translating between the
provider-agnostic ports in ``core.ports`` and the crowdfunding contract ABI.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from web3 import AsyncWeb3

from core.domain import Campaign, CampaignStatus
from core.errors import TransactionRevertedError

logger = logging.getLogger(__name__)


def campaign_from_call(raw: Sequence[Any] | dict[str, Any]) -> Campaign:
    """Map a ``getCampaign`` return value (struct tuple or named dict)."""
    if isinstance(raw, dict):
        raw = (
            raw["id"], raw["entrepreneur"], raw["title"], raw["pledgeCost"],
            raw["pledgesNeeded"], raw["pledgesCount"], raw["totalRaised"], raw["status"],
        )
    (campaign_id, entrepreneur, title, pledge_cost,
     pledges_needed, pledges_count, total_raised, status) = raw
    return Campaign(
        id=int(campaign_id),
        entrepreneur=str(entrepreneur),
        title=str(title),
        pledge_cost=int(pledge_cost),
        pledges_needed=int(pledges_needed),
        pledges_count=int(pledges_count),
        total_raised=int(total_raised),
        status=CampaignStatus(int(status)),
    )


class Web3ContractCall:
    """A prepared contract function, submitted and awaited on ``send``."""

    def __init__(self, w3: AsyncWeb3, function, *, label: str):
        self._w3 = w3
        self._function = function
        self.label = label

    async def send(self, *, sender: str, value: int | None = None) -> str:
        tx: dict[str, Any] = {"from": AsyncWeb3.to_checksum_address(sender)}
        if value is not None:
            tx["value"] = int(value)

        tx_hash = await self._function.transact(tx)
        # Receipt polling uses the provider's default timeout.
        receipt = await self._w3.eth.wait_for_transaction_receipt(tx_hash)
        tx_hex = AsyncWeb3.to_hex(tx_hash)
        if receipt["status"] != 1:
            raise TransactionRevertedError(
                f"Transaction {tx_hex} reverted ({self.label})",
                tx_hash=tx_hex,
            )
        logger.debug("%s mined in block %s", self.label, receipt.get("blockNumber"))
        return tx_hex


class Web3CrowdfundingLedger:
    """Ledger ports backed by a deployed crowdfunding contract."""

    def __init__(self, w3: AsyncWeb3, address: str, abi: list[dict]):
        self._w3 = w3
        self.address = AsyncWeb3.to_checksum_address(address)
        self._contract = w3.eth.contract(address=self.address, abi=abi)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_fee_amount(self) -> int:
        return int(await self._contract.functions.CAMPAIGN_FEE().call())

    async def get_owner(self) -> str:
        return str(await self._contract.functions.owner().call())

    async def get_super_owner(self) -> str:
        return str(await self._contract.functions.SUPER_OWNER().call())

    async def get_contract_balance(self) -> int:
        return int(await self._w3.eth.get_balance(self.address))

    async def get_remaining_fees(self) -> int:
        return int(await self._contract.functions.getRemainingFeesAndRoyalties().call())

    async def list_active_campaign_ids(self) -> list[int]:
        return [int(i) for i in await self._contract.functions.getActiveCampaigns().call()]

    async def list_completed_campaign_ids(self) -> list[int]:
        return [int(i) for i in await self._contract.functions.getCompletedCampaigns().call()]

    async def list_cancelled_campaign_ids(self) -> list[int]:
        return [int(i) for i in await self._contract.functions.getCancelledCampaigns().call()]

    async def get_campaign(self, campaign_id: int) -> Campaign:
        raw = await self._contract.functions.getCampaign(int(campaign_id)).call()
        return campaign_from_call(raw)

    async def get_account_investments(self, address: str) -> tuple[list[int], list[int]]:
        investor = AsyncWeb3.to_checksum_address(address)
        ids, shares = await self._contract.functions.getInvestorInvestments(investor).call()
        return [int(i) for i in ids], [int(s) for s in shares]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _call(self, label: str, function) -> Web3ContractCall:
        return Web3ContractCall(self._w3, function, label=label)

    def create_campaign(self, title: str, pledge_cost: int, pledges_needed: int) -> Web3ContractCall:
        fn = self._contract.functions.createCampaign(title, int(pledge_cost), int(pledges_needed))
        return self._call("createCampaign", fn)

    def fund_campaign(self, campaign_id: int, quantity: int) -> Web3ContractCall:
        fn = self._contract.functions.fundCampaign(int(campaign_id), int(quantity))
        return self._call("fundCampaign", fn)

    def complete_campaign(self, campaign_id: int) -> Web3ContractCall:
        return self._call("completeCampaign", self._contract.functions.completeCampaign(int(campaign_id)))

    def cancel_campaign(self, campaign_id: int) -> Web3ContractCall:
        return self._call("cancelCampaign", self._contract.functions.cancelCampaign(int(campaign_id)))

    def claim_refunds(self) -> Web3ContractCall:
        return self._call("refundInvestments", self._contract.functions.refundInvestments())

    def withdraw_owner_funds(self) -> Web3ContractCall:
        return self._call("withdrawOwnerFunds", self._contract.functions.withdrawOwnerFunds())

    def destroy_contract(self) -> Web3ContractCall:
        return self._call("destroyContract", self._contract.functions.destroyContract())

    def ban_entrepreneur(self, address: str) -> Web3ContractCall:
        target = AsyncWeb3.to_checksum_address(address)
        return self._call("banEntrepreneur", self._contract.functions.banEntrepreneur(target))

    def change_owner(self, address: str) -> Web3ContractCall:
        target = AsyncWeb3.to_checksum_address(address)
        return self._call("changeOwner", self._contract.functions.changeOwner(target))
