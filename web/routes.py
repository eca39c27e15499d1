"""
REST API routes for the crowdfund dashboard Web UI.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Path

from contracts.v1 import (
    AccountRequest,
    AddressRequest,
    CreateCampaignRequest,
    DashboardResponse,
    FundCampaignRequest,
    StatusResponse,
    TxResponse,
    outcome_to_contract,
    snapshot_to_contract,
)
from dapp_platform.config import load_settings
from dapp_platform.dashboard import BUSY_MESSAGE, DashboardSession, create_dashboard
from dapp_platform.facade import CrowdfundingFacade
from core.amounts import UINT256_MAX
from core.orchestrator import TxOutcome, TxPhase
from core.roles import snapshot_is_privileged

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

CampaignId = Annotated[int, Path(ge=0, le=UINT256_MAX)]

# Single shared dashboard session (single-user local tool)
_dashboard: Optional[DashboardSession] = None


def get_dashboard() -> DashboardSession:
    """Return the shared dashboard session, creating it from config once."""
    global _dashboard
    if _dashboard is None:
        try:
            _dashboard = create_dashboard(load_settings())
        except (ValueError, ImportError) as e:
            logger.error("Dashboard configuration failed: %s", e)
            raise HTTPException(status_code=500, detail=str(e)) from e
    return _dashboard


async def get_started_dashboard(
    dashboard: DashboardSession = Depends(get_dashboard),
) -> DashboardSession:
    await dashboard.start()
    return dashboard


# --- Helpers ---

def _ensure_idle(dashboard: DashboardSession) -> None:
    """Reject a new intent while a transaction is pending."""
    if dashboard.pending:
        raise HTTPException(status_code=409, detail=BUSY_MESSAGE)


def _tx_response(outcome: TxOutcome) -> TxResponse:
    """Map an intent outcome to the response, or 409 if another was in flight."""
    if outcome.phase is TxPhase.BUSY:
        raise HTTPException(status_code=409, detail=outcome.message)
    return outcome_to_contract(outcome)


def _ensure_privileged(dashboard: DashboardSession) -> None:
    if not snapshot_is_privileged(dashboard.snapshot, dashboard.account):
        raise HTTPException(status_code=403, detail="Only the owner or super owner can do this")


def _dashboard_payload(dashboard: DashboardSession) -> DashboardResponse:
    snapshot = None
    if dashboard.snapshot is not None:
        snapshot = snapshot_to_contract(dashboard.snapshot, dashboard.account)
    return DashboardResponse(
        account=dashboard.account,
        status=dashboard.status.message,
        pending=dashboard.pending,
        snapshot=snapshot,
    )


# --- Routes ---

@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check endpoint."""
    return {"status": "ok"}


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard_view(dashboard: DashboardSession = Depends(get_started_dashboard)):
    """Return the current snapshot view and status line."""
    return _dashboard_payload(dashboard)


@router.get("/status", response_model=StatusResponse)
async def get_status(dashboard: DashboardSession = Depends(get_dashboard)):
    return StatusResponse(status=dashboard.status.message, pending=dashboard.pending)


@router.post("/refresh", response_model=DashboardResponse)
async def refresh(dashboard: DashboardSession = Depends(get_started_dashboard)):
    """Rebuild the read model; a failed rebuild keeps the previous snapshot."""
    await dashboard.refresh()
    return _dashboard_payload(dashboard)


@router.post("/account", response_model=DashboardResponse)
async def switch_account(
    req: AccountRequest,
    dashboard: DashboardSession = Depends(get_started_dashboard),
):
    """Change the active account and rebuild for it."""
    _ensure_idle(dashboard)
    await dashboard.switch_account(req.address)
    return _dashboard_payload(dashboard)


@router.post("/campaigns", response_model=TxResponse)
async def create_campaign(
    req: CreateCampaignRequest,
    dashboard: DashboardSession = Depends(get_started_dashboard),
):
    _ensure_idle(dashboard)
    outcome = await CrowdfundingFacade(dashboard).create_campaign(
        req.title, req.pledge_cost_eth, req.pledges_needed,
    )
    return _tx_response(outcome)


@router.post("/campaigns/{campaign_id}/fund", response_model=TxResponse)
async def fund_campaign(
    campaign_id: CampaignId,
    req: FundCampaignRequest,
    dashboard: DashboardSession = Depends(get_started_dashboard),
):
    _ensure_idle(dashboard)
    outcome = await CrowdfundingFacade(dashboard).fund_campaign(campaign_id, req.quantity)
    return _tx_response(outcome)


@router.post("/campaigns/{campaign_id}/complete", response_model=TxResponse)
async def complete_campaign(campaign_id: CampaignId, dashboard: DashboardSession = Depends(get_started_dashboard)):
    _ensure_idle(dashboard)
    outcome = await CrowdfundingFacade(dashboard).complete_campaign(campaign_id)
    return _tx_response(outcome)


@router.post("/campaigns/{campaign_id}/cancel", response_model=TxResponse)
async def cancel_campaign(campaign_id: CampaignId, dashboard: DashboardSession = Depends(get_started_dashboard)):
    _ensure_idle(dashboard)
    outcome = await CrowdfundingFacade(dashboard).cancel_campaign(campaign_id)
    return _tx_response(outcome)


@router.post("/refunds/claim", response_model=TxResponse)
async def claim_refunds(dashboard: DashboardSession = Depends(get_started_dashboard)):
    _ensure_idle(dashboard)
    outcome = await CrowdfundingFacade(dashboard).claim_refunds()
    return _tx_response(outcome)


@router.post("/admin/withdraw", response_model=TxResponse)
async def withdraw_owner_funds(dashboard: DashboardSession = Depends(get_started_dashboard)):
    _ensure_idle(dashboard)
    _ensure_privileged(dashboard)
    outcome = await CrowdfundingFacade(dashboard).withdraw_owner_funds()
    return _tx_response(outcome)


@router.post("/admin/destroy", response_model=TxResponse)
async def destroy_contract(dashboard: DashboardSession = Depends(get_started_dashboard)):
    _ensure_idle(dashboard)
    _ensure_privileged(dashboard)
    outcome = await CrowdfundingFacade(dashboard).destroy_contract()
    return _tx_response(outcome)


@router.post("/admin/ban", response_model=TxResponse)
async def ban_entrepreneur(
    req: AddressRequest,
    dashboard: DashboardSession = Depends(get_started_dashboard),
):
    _ensure_idle(dashboard)
    _ensure_privileged(dashboard)
    outcome = await CrowdfundingFacade(dashboard).ban_entrepreneur(req.address)
    return _tx_response(outcome)


@router.post("/admin/owner", response_model=TxResponse)
async def change_owner(
    req: AddressRequest,
    dashboard: DashboardSession = Depends(get_started_dashboard),
):
    _ensure_idle(dashboard)
    _ensure_privileged(dashboard)
    outcome = await CrowdfundingFacade(dashboard).change_owner(req.address)
    return _tx_response(outcome)
