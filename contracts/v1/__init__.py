"""v1 dashboard API contract schemas and adapters."""

__version__ = "1.0.0"

from .adapters import (
    campaign_to_contract,
    outcome_to_contract,
    snapshot_to_contract,
)
from .schemas import (
    AccountRequest,
    AddressRequest,
    CampaignContract,
    CreateCampaignRequest,
    DashboardResponse,
    FundCampaignRequest,
    InvestmentContract,
    SnapshotContract,
    StatusResponse,
    TxResponse,
)

__all__ = [
    "__version__",
    "AccountRequest",
    "AddressRequest",
    "CampaignContract",
    "CreateCampaignRequest",
    "DashboardResponse",
    "FundCampaignRequest",
    "InvestmentContract",
    "SnapshotContract",
    "StatusResponse",
    "TxResponse",
    "campaign_to_contract",
    "outcome_to_contract",
    "snapshot_to_contract",
]
