"""Pure role and control-availability helpers over a Snapshot.

These only drive optimistic enablement of controls. The ledger contract
remains the authority and rejects anything it does not allow.
"""

from __future__ import annotations

from typing import Iterable

from .domain import Campaign, CampaignStatus, Investment, Snapshot


def same_address(a: str | None, b: str | None) -> bool:
    """Case-insensitive address equality; empty addresses never match."""
    if not a or not b:
        return False
    return a.lower() == b.lower()


def is_privileged(account: str | None, owner: str | None, super_owner: str | None) -> bool:
    """Return True when ``account`` is the owner or the super owner."""
    return same_address(account, owner) or same_address(account, super_owner)


def snapshot_is_privileged(snapshot: Snapshot | None, account: str | None) -> bool:
    if snapshot is None:
        return False
    return is_privileged(account, snapshot.owner, snapshot.super_owner)


def can_create_campaign(snapshot: Snapshot | None, account: str | None) -> bool:
    """Owners cannot create campaigns."""
    return bool(account) and not snapshot_is_privileged(snapshot, account)


def can_pledge(campaign: Campaign, account: str | None) -> bool:
    return (
        bool(account)
        and campaign.status is CampaignStatus.ACTIVE
        and not same_address(account, campaign.entrepreneur)
    )


def can_cancel(snapshot: Snapshot | None, campaign: Campaign, account: str | None) -> bool:
    if campaign.status is not CampaignStatus.ACTIVE:
        return False
    return snapshot_is_privileged(snapshot, account) or same_address(account, campaign.entrepreneur)


def can_complete(snapshot: Snapshot | None, campaign: Campaign, account: str | None) -> bool:
    if not can_cancel(snapshot, campaign, account):
        return False
    return campaign.pledges_count >= campaign.pledges_needed


def shares_for(investments: Iterable[Investment], campaign_id: int) -> int:
    """Shares held in ``campaign_id``, or 0 when the account holds none."""
    for investment in investments:
        if investment.campaign_id == campaign_id:
            return investment.shares
    return 0
