"""Core ports for the ledger contract runtime and the wallet session."""

from __future__ import annotations

from typing import Awaitable, Callable, Protocol

from .domain import Campaign


AccountChangeCallback = Callable[[str | None], Awaitable[None]]


class ContractCall(Protocol):
    """A prepared state-mutating call, signed and submitted on ``send``."""

    async def send(self, *, sender: str, value: int | None = None) -> str:
        """Submit the call, wait until it is applied, and return its hash."""
        ...


class LedgerReadPort(Protocol):
    """Read-only queries against the ledger contract."""

    async def get_fee_amount(self) -> int:
        ...

    async def get_owner(self) -> str:
        ...

    async def get_super_owner(self) -> str:
        ...

    async def get_contract_balance(self) -> int:
        ...

    async def get_remaining_fees(self) -> int:
        ...

    async def list_active_campaign_ids(self) -> list[int]:
        ...

    async def list_completed_campaign_ids(self) -> list[int]:
        ...

    async def list_cancelled_campaign_ids(self) -> list[int]:
        ...

    async def get_campaign(self, campaign_id: int) -> Campaign:
        ...

    async def get_account_investments(self, address: str) -> tuple[list[int], list[int]]:
        """Return ``(ids, shares)``, equal length and index-correlated."""
        ...


class LedgerWritePort(Protocol):
    """Factories for state-mutating contract calls."""

    def create_campaign(self, title: str, pledge_cost: int, pledges_needed: int) -> ContractCall:
        ...

    def fund_campaign(self, campaign_id: int, quantity: int) -> ContractCall:
        ...

    def complete_campaign(self, campaign_id: int) -> ContractCall:
        ...

    def cancel_campaign(self, campaign_id: int) -> ContractCall:
        ...

    def claim_refunds(self) -> ContractCall:
        ...

    def withdraw_owner_funds(self) -> ContractCall:
        ...

    def destroy_contract(self) -> ContractCall:
        ...

    def ban_entrepreneur(self, address: str) -> ContractCall:
        ...

    def change_owner(self, address: str) -> ContractCall:
        ...


class LedgerPort(LedgerReadPort, LedgerWritePort, Protocol):
    """Full ledger contract surface."""


class WalletSessionPort(Protocol):
    """Source of the active account identity."""

    async def request_current_account(self) -> str:
        ...

    def subscribe(self, callback: AccountChangeCallback) -> None:
        ...
