"""Core-native read-model types assembled from ledger contract queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


READ_FAILURE_MESSAGE = "Contract read failed – check ABI/address/network"


class CampaignStatus(IntEnum):
    """Campaign status as encoded by the ledger contract."""

    ACTIVE = 0
    COMPLETED = 1
    CANCELLED = 2


@dataclass(frozen=True, slots=True)
class Campaign:
    """One funding campaign as observed on the ledger.

    Values are kept raw; ``pledges_count`` may exceed ``pledges_needed`` if
    the contract reports it that way.
    """

    id: int
    entrepreneur: str
    title: str
    pledge_cost: int
    pledges_needed: int
    pledges_count: int
    total_raised: int
    status: CampaignStatus

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Campaign":
        return cls(
            id=int(data["id"]),
            entrepreneur=str(data.get("entrepreneur", "")),
            title=str(data.get("title", "")),
            pledge_cost=int(data.get("pledge_cost", 0)),
            pledges_needed=int(data.get("pledges_needed", 0)),
            pledges_count=int(data.get("pledges_count", 0)),
            total_raised=int(data.get("total_raised", 0)),
            status=CampaignStatus(int(data.get("status", 0))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "entrepreneur": self.entrepreneur,
            "title": self.title,
            "pledge_cost": self.pledge_cost,
            "pledges_needed": self.pledges_needed,
            "pledges_count": self.pledges_count,
            "total_raised": self.total_raised,
            "status": int(self.status),
        }


@dataclass(frozen=True, slots=True)
class Investment:
    """Shares the current account holds in one campaign."""

    campaign_id: int
    shares: int


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Full read-model produced by one rebuild.

    Replaced wholesale on every successful rebuild; never mutated in place.
    """

    fee: int
    owner: str
    super_owner: str
    contract_balance: int
    remaining_fees: int
    active: tuple[Campaign, ...] = ()
    completed: tuple[Campaign, ...] = ()
    cancelled: tuple[Campaign, ...] = ()
    investments: tuple[Investment, ...] = ()
    account: str | None = None

    def campaigns(self) -> tuple[Campaign, ...]:
        """Return every campaign across the three partitions."""
        return self.active + self.completed + self.cancelled


@dataclass(frozen=True, slots=True)
class RebuildFailure:
    """Returned by a rebuild whose account-independent reads failed."""

    message: str = READ_FAILURE_MESSAGE
    detail: str = ""
    errors: tuple[str, ...] = ()
