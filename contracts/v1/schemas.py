"""Pydantic contracts for the v1 dashboard API.

Currency amounts travel as decimal strings of the smallest unit so that
values beyond the float-safe integer range survive JSON clients intact.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from core.amounts import UINT256_MAX


class _StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


CampaignStatusName = Literal["active", "completed", "cancelled"]


class CampaignContract(_StrictModel):
    id: int = Field(ge=0)
    entrepreneur: str
    title: str
    status: CampaignStatusName
    pledge_cost: str
    pledge_cost_eth: str
    pledges_needed: int
    pledges_count: int
    total_raised: str
    total_raised_eth: str
    my_shares: int = 0
    can_pledge: bool = False
    can_cancel: bool = False
    can_complete: bool = False


class InvestmentContract(_StrictModel):
    campaign_id: int = Field(ge=0)
    shares: int


class SnapshotContract(_StrictModel):
    account: str | None = None
    owner: str
    super_owner: str
    fee: str
    fee_eth: str
    contract_balance: str
    contract_balance_eth: str
    remaining_fees: str
    remaining_fees_eth: str
    active: list[CampaignContract] = Field(default_factory=list)
    completed: list[CampaignContract] = Field(default_factory=list)
    cancelled: list[CampaignContract] = Field(default_factory=list)
    investments: list[InvestmentContract] = Field(default_factory=list)
    is_privileged: bool = False
    can_create_campaign: bool = False


class DashboardResponse(_StrictModel):
    account: str | None = None
    status: str = ""
    pending: bool = False
    snapshot: SnapshotContract | None = None


class StatusResponse(_StrictModel):
    status: str
    pending: bool = False


class TxResponse(_StrictModel):
    ok: bool
    phase: Literal["confirmed", "failed"]
    message: str
    tx_hash: str | None = None


class CreateCampaignRequest(_StrictModel):
    title: str = Field(min_length=1)
    pledge_cost_eth: str = Field(min_length=1)
    pledges_needed: int = Field(gt=0, le=UINT256_MAX)


class FundCampaignRequest(_StrictModel):
    quantity: int = Field(default=1, ge=1, le=UINT256_MAX)


class AddressRequest(_StrictModel):
    address: str = Field(min_length=1)


class AccountRequest(_StrictModel):
    address: str | None = None
