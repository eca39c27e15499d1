"""Tests for the REST API routes, with the dashboard backed by fakes."""

import asyncio

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from contracts.v1 import FundCampaignRequest, TxResponse
from dapp_platform.dashboard import BUSY_MESSAGE, CONNECT_ADVISORY, DashboardSession
from web import routes
from web.app import app
from web.routes import get_dashboard


@pytest.fixture
def make_client():
    """Build a TestClient whose dashboard uses the given ledger and wallet."""
    clients = []

    def _make(ledger, wallet=None):
        session = DashboardSession(ledger=ledger, wallet=wallet)
        app.dependency_overrides[get_dashboard] = lambda: session
        client = TestClient(app)
        clients.append(client)
        return client, session

    yield _make
    app.dependency_overrides.clear()


def test_health(make_client, ledger):
    client, _ = make_client(ledger)

    assert client.get("/api/health").json() == {"status": "ok"}


def test_dashboard_view_renders_snapshot(make_client, ledger, wallet, addresses):
    client, _ = make_client(ledger, wallet)

    body = client.get("/api/dashboard").json()

    assert body["account"] == addresses["investor"]
    assert body["pending"] is False
    snapshot = body["snapshot"]
    assert snapshot["fee"] == str(10**16)
    assert snapshot["fee_eth"] == "0.01"
    assert [c["id"] for c in snapshot["active"]] == [1, 2]
    assert snapshot["active"][0]["my_shares"] == 2
    assert snapshot["active"][0]["can_pledge"] is True
    assert snapshot["can_create_campaign"] is True
    assert snapshot["is_privileged"] is False


def test_dashboard_without_wallet_shows_advisory(make_client, ledger):
    client, _ = make_client(ledger)

    body = client.get("/api/dashboard").json()

    assert body["account"] is None
    assert body["status"] == CONNECT_ADVISORY
    assert body["snapshot"]["investments"] == []


def test_dashboard_read_failure_has_no_snapshot(make_client, ledger):
    from core.domain import READ_FAILURE_MESSAGE
    from core.errors import LedgerError

    ledger.failures["get_super_owner"] = LedgerError("wrong network")
    client, _ = make_client(ledger)

    body = client.get("/api/dashboard").json()

    assert body["snapshot"] is None
    assert body["status"] == READ_FAILURE_MESSAGE


def test_fund_campaign_returns_outcome(make_client, ledger, wallet):
    client, session = make_client(ledger, wallet)

    response = client.post("/api/campaigns/1/fund", json={"quantity": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["phase"] == "confirmed"
    assert body["message"] == "Funded successfully"
    assert body["tx_hash"].startswith("0x")
    assert ledger.sent[0]["value"] == 2 * 10**15
    assert session.status.message == "Funded successfully"


def test_fund_unknown_campaign_reports_failure(make_client, ledger, wallet):
    client, _ = make_client(ledger, wallet)

    body = client.post("/api/campaigns/77/fund", json={}).json()

    assert body == {"ok": False, "phase": "failed", "message": "Campaign not found", "tx_hash": None}


def test_create_campaign_validates_request(make_client, ledger, wallet):
    client, _ = make_client(ledger, wallet)

    response = client.post(
        "/api/campaigns",
        json={"title": "Garden", "pledge_cost_eth": "0.01", "pledges_needed": 0},
    )

    assert response.status_code == 422
    assert ledger.sent == []


def test_create_campaign_rejects_unknown_fields(make_client, ledger, wallet):
    client, _ = make_client(ledger, wallet)

    response = client.post(
        "/api/campaigns",
        json={"title": "Garden", "pledge_cost_eth": "0.01", "pledges_needed": 5, "fee": "0"},
    )

    assert response.status_code == 422


def test_create_campaign_submits_with_fee(make_client, ledger, wallet):
    client, _ = make_client(ledger, wallet)

    body = client.post(
        "/api/campaigns",
        json={"title": "Garden", "pledge_cost_eth": "0.01", "pledges_needed": 5},
    ).json()

    assert body["message"] == "Campaign created"
    assert ledger.sent[0]["value"] == 10**16


def test_pending_transaction_rejects_new_intent(make_client, ledger, wallet):
    client, session = make_client(ledger, wallet)
    client.get("/api/dashboard")
    session.pending = True

    response = client.post("/api/refunds/claim")

    assert response.status_code == 409
    assert response.json()["detail"] == BUSY_MESSAGE
    assert ledger.sent == []


def test_admin_routes_require_privileged_account(make_client, ledger, wallet):
    client, _ = make_client(ledger, wallet)

    response = client.post("/api/admin/withdraw")

    assert response.status_code == 403
    assert ledger.sent == []


def test_admin_routes_for_owner(make_client, ledger, make_wallet, addresses):
    client, _ = make_client(ledger, make_wallet(addresses["owner"]))

    withdraw = client.post("/api/admin/withdraw").json()
    ban = client.post("/api/admin/ban", json={"address": addresses["entrepreneur"]}).json()

    assert withdraw["message"] == "Fees withdrawn"
    assert ban["message"] == "Entrepreneur banned"
    assert [s["name"] for s in ledger.sent] == ["withdraw_owner_funds", "ban_entrepreneur"]


def test_switch_account_rebuilds(make_client, ledger, wallet, addresses):
    client, _ = make_client(ledger, wallet)
    client.get("/api/dashboard")

    body = client.post("/api/account", json={"address": addresses["owner"]}).json()

    assert body["account"] == addresses["owner"]
    assert body["snapshot"]["is_privileged"] is True
    assert body["snapshot"]["can_create_campaign"] is False


def test_status_endpoint(make_client, ledger, wallet):
    client, session = make_client(ledger, wallet)
    session.status.publish("Campaign created")

    assert client.get("/api/status").json() == {"status": "Campaign created", "pending": False}


def test_refresh_endpoint_picks_up_new_campaign(make_client, ledger, wallet, make_campaign):
    from core.domain import CampaignStatus

    client, _ = make_client(ledger, wallet)
    client.get("/api/dashboard")
    ledger.add_campaign(make_campaign(5, CampaignStatus.ACTIVE))

    body = client.post("/api/refresh").json()

    assert [c["id"] for c in body["snapshot"]["active"]] == [1, 2, 5]


def test_misconfigured_dashboard_returns_500(monkeypatch):
    app.dependency_overrides.clear()
    monkeypatch.setattr(routes, "_dashboard", None)

    def _broken():
        raise ValueError("Invalid contract address: '0x12'")

    monkeypatch.setattr(routes, "load_settings", _broken)

    response = TestClient(app).get("/api/status")

    assert response.status_code == 500
    assert "Invalid contract address" in response.json()["detail"]


@pytest.mark.asyncio
async def test_concurrent_fund_requests_conflict(ledger, wallet):
    session = DashboardSession(ledger=ledger, wallet=wallet)
    await session.start()
    real_get_campaign = ledger.get_campaign

    async def _slow_get_campaign(campaign_id):
        await asyncio.sleep(0.01)
        return await real_get_campaign(campaign_id)

    ledger.get_campaign = _slow_get_campaign
    req = FundCampaignRequest(quantity=1)

    results = await asyncio.gather(
        routes.fund_campaign(1, req, session),
        routes.fund_campaign(1, req, session),
        return_exceptions=True,
    )

    conflicts = [r for r in results if isinstance(r, HTTPException)]
    assert len(conflicts) == 1
    assert conflicts[0].status_code == 409
    assert conflicts[0].detail == BUSY_MESSAGE
    assert [r.phase for r in results if isinstance(r, TxResponse)] == ["confirmed"]
    assert len(ledger.sent) == 1


@pytest.mark.parametrize("path", ["/api/campaigns/-1/complete", f"/api/campaigns/{2**256}/cancel"])
def test_campaign_id_outside_uint256_is_rejected(make_client, ledger, wallet, path):
    client, _ = make_client(ledger, wallet)

    response = client.post(path)

    assert response.status_code == 422
    assert ledger.sent == []


def test_fund_quantity_outside_uint256_is_rejected(make_client, ledger, wallet):
    client, _ = make_client(ledger, wallet)

    response = client.post("/api/campaigns/1/fund", json={"quantity": 2**256})

    assert response.status_code == 422
    assert ledger.sent == []
