"""Adapters from core read-model types to v1 API contracts."""

from __future__ import annotations

from core.amounts import from_wei
from core.domain import Campaign, CampaignStatus, Snapshot
from core.orchestrator import TxOutcome
from core.roles import (
    can_cancel,
    can_complete,
    can_create_campaign,
    can_pledge,
    shares_for,
    snapshot_is_privileged,
)

from .schemas import (
    CampaignContract,
    InvestmentContract,
    SnapshotContract,
    TxResponse,
)


_STATUS_NAMES = {
    CampaignStatus.ACTIVE: "active",
    CampaignStatus.COMPLETED: "completed",
    CampaignStatus.CANCELLED: "cancelled",
}


def campaign_to_contract(
    campaign: Campaign,
    snapshot: Snapshot,
    account: str | None,
) -> CampaignContract:
    """Render one campaign with the account's shares and control flags."""
    return CampaignContract(
        id=campaign.id,
        entrepreneur=campaign.entrepreneur,
        title=campaign.title,
        status=_STATUS_NAMES[campaign.status],
        pledge_cost=str(campaign.pledge_cost),
        pledge_cost_eth=from_wei(campaign.pledge_cost),
        pledges_needed=campaign.pledges_needed,
        pledges_count=campaign.pledges_count,
        total_raised=str(campaign.total_raised),
        total_raised_eth=from_wei(campaign.total_raised),
        my_shares=shares_for(snapshot.investments, campaign.id),
        can_pledge=can_pledge(campaign, account),
        can_cancel=can_cancel(snapshot, campaign, account),
        can_complete=can_complete(snapshot, campaign, account),
    )


def snapshot_to_contract(snapshot: Snapshot, account: str | None = None) -> SnapshotContract:
    """Convert a core ``Snapshot`` into the v1 dashboard view."""
    account = account if account is not None else snapshot.account

    def _render(campaigns) -> list[CampaignContract]:
        return [campaign_to_contract(c, snapshot, account) for c in campaigns]

    return SnapshotContract(
        account=account,
        owner=snapshot.owner,
        super_owner=snapshot.super_owner,
        fee=str(snapshot.fee),
        fee_eth=from_wei(snapshot.fee),
        contract_balance=str(snapshot.contract_balance),
        contract_balance_eth=from_wei(snapshot.contract_balance),
        remaining_fees=str(snapshot.remaining_fees),
        remaining_fees_eth=from_wei(snapshot.remaining_fees),
        active=_render(snapshot.active),
        completed=_render(snapshot.completed),
        cancelled=_render(snapshot.cancelled),
        investments=[
            InvestmentContract(campaign_id=i.campaign_id, shares=i.shares)
            for i in snapshot.investments
        ],
        is_privileged=snapshot_is_privileged(snapshot, account),
        can_create_campaign=can_create_campaign(snapshot, account),
    )


def outcome_to_contract(outcome: TxOutcome) -> TxResponse:
    return TxResponse(
        ok=outcome.ok,
        phase="confirmed" if outcome.ok else "failed",
        message=outcome.message,
        tx_hash=outcome.tx_hash,
    )
