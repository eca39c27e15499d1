"""
Shared fixtures for crowdfund dashboard tests.
"""

import asyncio

import pytest

from core.domain import Campaign, CampaignStatus
from core.errors import LedgerError, WalletSessionError


OWNER = "0x1111111111111111111111111111111111111111"
SUPER_OWNER = "0x2222222222222222222222222222222222222222"
ENTREPRENEUR = "0x3333333333333333333333333333333333333333"
INVESTOR = "0x4444444444444444444444444444444444444444"


class FakeCall:
    """Prepared write that records its submission on the fake ledger."""

    def __init__(self, ledger, name: str, args: tuple):
        self.ledger = ledger
        self.name = name
        self.args = args

    async def send(self, *, sender: str, value: int | None = None) -> str:
        self.ledger.sent.append(
            {"name": self.name, "args": self.args, "sender": sender, "value": value}
        )
        await asyncio.sleep(0)
        error = self.ledger.write_errors.get(self.name)
        if error is not None:
            raise error
        if self.ledger.on_send is not None:
            self.ledger.on_send(self.name, self.args, value)
        return f"0x{len(self.ledger.sent):064x}"


class FakeLedger:
    """In-memory ledger implementing the read and write ports."""

    def __init__(self):
        self.fee = 10**16
        self.owner = OWNER
        self.super_owner = SUPER_OWNER
        self.balance = 5 * 10**18
        self.remaining_fees = 3 * 10**16
        self.campaigns: dict[int, Campaign] = {}
        self.active_ids: list[int] = []
        self.completed_ids: list[int] = []
        self.cancelled_ids: list[int] = []
        self.investments: dict[str, tuple[list[int], list[int]]] = {}
        self.failures: dict[str, Exception] = {}
        self.detail_failures: set[int] = set()
        self.write_errors: dict[str, Exception] = {}
        self.calls: list[str] = []
        self.sent: list[dict] = []
        self.on_send = None

    def add_campaign(self, campaign: Campaign) -> Campaign:
        self.campaigns[campaign.id] = campaign
        bucket = {
            CampaignStatus.ACTIVE: self.active_ids,
            CampaignStatus.COMPLETED: self.completed_ids,
            CampaignStatus.CANCELLED: self.cancelled_ids,
        }[campaign.status]
        bucket.append(campaign.id)
        return campaign

    async def _read(self, name: str, value):
        self.calls.append(name)
        await asyncio.sleep(0)
        if name in self.failures:
            raise self.failures[name]
        return value

    async def get_fee_amount(self):
        return await self._read("get_fee_amount", self.fee)

    async def get_owner(self):
        return await self._read("get_owner", self.owner)

    async def get_super_owner(self):
        return await self._read("get_super_owner", self.super_owner)

    async def get_contract_balance(self):
        return await self._read("get_contract_balance", self.balance)

    async def get_remaining_fees(self):
        return await self._read("get_remaining_fees", self.remaining_fees)

    async def list_active_campaign_ids(self):
        return await self._read("list_active_campaign_ids", list(self.active_ids))

    async def list_completed_campaign_ids(self):
        return await self._read("list_completed_campaign_ids", list(self.completed_ids))

    async def list_cancelled_campaign_ids(self):
        return await self._read("list_cancelled_campaign_ids", list(self.cancelled_ids))

    async def get_campaign(self, campaign_id):
        self.calls.append(f"get_campaign:{campaign_id}")
        await asyncio.sleep(0)
        if campaign_id in self.detail_failures or campaign_id not in self.campaigns:
            raise LedgerError(f"Campaign {campaign_id} does not exist")
        return self.campaigns[campaign_id]

    async def get_account_investments(self, address):
        return await self._read(
            "get_account_investments",
            self.investments.get(address.lower(), ([], [])),
        )

    def _write(self, name: str, *args) -> FakeCall:
        return FakeCall(self, name, args)

    def create_campaign(self, title, pledge_cost, pledges_needed):
        return self._write("create_campaign", title, pledge_cost, pledges_needed)

    def fund_campaign(self, campaign_id, quantity):
        return self._write("fund_campaign", campaign_id, quantity)

    def complete_campaign(self, campaign_id):
        return self._write("complete_campaign", campaign_id)

    def cancel_campaign(self, campaign_id):
        return self._write("cancel_campaign", campaign_id)

    def claim_refunds(self):
        return self._write("claim_refunds")

    def withdraw_owner_funds(self):
        return self._write("withdraw_owner_funds")

    def destroy_contract(self):
        return self._write("destroy_contract")

    def ban_entrepreneur(self, address):
        return self._write("ban_entrepreneur", address)

    def change_owner(self, address):
        return self._write("change_owner", address)


class FakeWallet:
    """Wallet session with a fixed account (or a connection failure)."""

    def __init__(self, account: str | None = INVESTOR, *, fail: bool = False):
        self.account = account
        self.fail = fail
        self.listeners = []

    async def request_current_account(self):
        if self.fail:
            raise WalletSessionError("User rejected the connection request")
        return self.account

    def subscribe(self, callback):
        self.listeners.append(callback)

    async def select_account(self, address):
        self.account = address
        for callback in self.listeners:
            await callback(address)
        return address


def _campaign(campaign_id: int, status: CampaignStatus, **overrides) -> Campaign:
    data = dict(
        id=campaign_id,
        entrepreneur=ENTREPRENEUR,
        title=f"Campaign {campaign_id}",
        pledge_cost=10**15,
        pledges_needed=10,
        pledges_count=0,
        total_raised=0,
        status=status,
    )
    data.update(overrides)
    return Campaign(**data)


@pytest.fixture
def addresses():
    """Well-known addresses used by the fake ledger."""
    return {
        "owner": OWNER,
        "super_owner": SUPER_OWNER,
        "entrepreneur": ENTREPRENEUR,
        "investor": INVESTOR,
    }


@pytest.fixture
def make_campaign():
    """Build a ``Campaign`` with sensible defaults.

    Usage:
        make_campaign(7, CampaignStatus.ACTIVE, pledges_count=3)
    """
    return _campaign


@pytest.fixture
def empty_ledger():
    """A fake ledger with no campaigns."""
    return FakeLedger()


@pytest.fixture
def ledger():
    """A fake ledger with campaigns in every status and one investor."""
    fake = FakeLedger()
    fake.add_campaign(_campaign(1, CampaignStatus.ACTIVE, pledges_count=4))
    fake.add_campaign(_campaign(2, CampaignStatus.ACTIVE, pledges_count=10, total_raised=10**16))
    fake.add_campaign(_campaign(3, CampaignStatus.COMPLETED, pledges_count=10, total_raised=10**16))
    fake.add_campaign(_campaign(4, CampaignStatus.CANCELLED, pledges_count=1))
    fake.investments[INVESTOR.lower()] = ([1, 3], [2, 1])
    return fake


@pytest.fixture
def wallet():
    """A wallet connected as the investor account."""
    return FakeWallet()


@pytest.fixture
def make_wallet():
    """Build a ``FakeWallet``; ``make_wallet(fail=True)`` simulates a refusal."""
    return FakeWallet
