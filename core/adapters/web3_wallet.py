"""Wallet session backed by the accounts a node manages (``eth_accounts``)."""

from __future__ import annotations

import logging

from web3 import AsyncWeb3

from core.errors import WalletSessionError
from core.ports import AccountChangeCallback

logger = logging.getLogger(__name__)


class NodeWalletSession:
    """Exposes node-unlocked accounts as the active session identity.

    The node signs transactions sent ``from`` any of these accounts, so the
    active account is simply the one selected here.
    """

    def __init__(self, w3: AsyncWeb3, *, preferred_account: str | None = None):
        self._w3 = w3
        self._preferred = preferred_account
        self._current: str | None = None
        self._listeners: list[AccountChangeCallback] = []

    @property
    def current_account(self) -> str | None:
        return self._current

    async def _accounts(self) -> list[str]:
        try:
            accounts = await self._w3.eth.accounts
        except Exception as e:
            raise WalletSessionError(f"Could not list node accounts: {e}") from e
        return [str(a) for a in accounts]

    async def request_current_account(self) -> str:
        accounts = await self._accounts()
        if not accounts:
            raise WalletSessionError("No unlocked accounts on the connected node")
        if self._preferred:
            self._current = self._match(accounts, self._preferred)
        else:
            self._current = accounts[0]
        return self._current

    def subscribe(self, callback: AccountChangeCallback) -> None:
        self._listeners.append(callback)

    async def select_account(self, address: str | None) -> str | None:
        """Switch the active account and notify subscribers."""
        if address:
            selected: str | None = self._match(await self._accounts(), address)
        else:
            selected = None
        self._current = selected
        logger.info("Active account changed to %s", selected or "<none>")
        for callback in list(self._listeners):
            await callback(selected)
        return selected

    @staticmethod
    def _match(accounts: list[str], address: str) -> str:
        wanted = address.lower()
        for account in accounts:
            if account.lower() == wanted:
                return account
        raise WalletSessionError(f"Account {address} is not available on the connected node")
