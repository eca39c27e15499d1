"""Read-model builder: fan out ledger queries and assemble one Snapshot."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable

from .domain import Campaign, Investment, RebuildFailure, Snapshot
from .ports import LedgerReadPort

logger = logging.getLogger(__name__)


def zip_investments(ids: list[int], shares: list[int]) -> tuple[Investment, ...]:
    """Pair campaign ids with share counts by position.

    The ledger guarantees both sequences are index-correlated, so no
    sorting or length validation happens here.
    """
    return tuple(
        Investment(campaign_id=int(campaign_id), shares=int(count))
        for campaign_id, count in zip(ids, shares)
    )


def exclusive_buckets(lists: dict[str, list[int]]) -> dict[str, list[int]]:
    """Keep each id only in the first list that reports it.

    Lists are taken in insertion order (active, completed, cancelled), so
    partitions stay disjoint even if the contract lists an id twice.
    """
    seen: set[int] = set()
    buckets: dict[str, list[int]] = {}
    for name, ids in lists.items():
        kept = []
        for campaign_id in (int(i) for i in ids):
            if campaign_id in seen:
                logger.info("Campaign #%d listed again under '%s'; ignored", campaign_id, name)
                continue
            seen.add(campaign_id)
            kept.append(campaign_id)
        buckets[name] = kept
    return buckets


class ReadModelBuilder:
    """Builds a fresh :class:`Snapshot` from independent ledger queries.

    Holds no snapshot between calls; every ``rebuild`` returns a new value.
    """

    def __init__(self, ledger: LedgerReadPort):
        self.ledger = ledger

    async def rebuild(self, account: str | None = None) -> Snapshot | RebuildFailure:
        """Fetch and assemble contract state scoped to ``account``.

        Returns a :class:`RebuildFailure` when any scalar, list or
        investments query fails. Campaigns whose detail cannot be read are
        dropped from their list without failing the rebuild.
        """
        account = account or None
        reads: dict[str, Awaitable[Any]] = {
            "fee": self.ledger.get_fee_amount(),
            "owner": self.ledger.get_owner(),
            "super_owner": self.ledger.get_super_owner(),
            "contract_balance": self.ledger.get_contract_balance(),
            "remaining_fees": self.ledger.get_remaining_fees(),
            "active_ids": self.ledger.list_active_campaign_ids(),
            "completed_ids": self.ledger.list_completed_campaign_ids(),
            "cancelled_ids": self.ledger.list_cancelled_campaign_ids(),
        }
        if account:
            reads["investments"] = self.ledger.get_account_investments(account)

        results = await asyncio.gather(*reads.values(), return_exceptions=True)
        values = dict(zip(reads.keys(), results))

        errors = {
            name: value for name, value in values.items() if isinstance(value, BaseException)
        }
        if errors:
            for name, exc in errors.items():
                logger.warning("Ledger read '%s' failed: %s", name, exc)
            first = next(iter(errors.values()))
            return RebuildFailure(
                detail=str(first) or type(first).__name__,
                errors=tuple(errors.keys()),
            )

        buckets = exclusive_buckets({
            "active": values["active_ids"],
            "completed": values["completed_ids"],
            "cancelled": values["cancelled_ids"],
        })
        details = await self._fetch_details(buckets)

        if account:
            ids, shares = values["investments"]
            investments = zip_investments(ids, shares)
        else:
            investments = ()

        return Snapshot(
            fee=int(values["fee"]),
            owner=str(values["owner"]),
            super_owner=str(values["super_owner"]),
            contract_balance=int(values["contract_balance"]),
            remaining_fees=int(values["remaining_fees"]),
            active=self._partition(buckets["active"], details),
            completed=self._partition(buckets["completed"], details),
            cancelled=self._partition(buckets["cancelled"], details),
            investments=investments,
            account=account,
        )

    async def _fetch_details(self, buckets: dict[str, list[int]]) -> dict[int, Campaign | None]:
        """Fetch every listed campaign once, concurrently across all lists."""
        union = list(dict.fromkeys(i for ids in buckets.values() for i in ids))
        found = await asyncio.gather(*(self._fetch_detail(i) for i in union))
        return dict(zip(union, found))

    async def _fetch_detail(self, campaign_id: int) -> Campaign | None:
        try:
            return await self.ledger.get_campaign(campaign_id)
        except Exception as e:
            logger.info("Dropping campaign #%d: detail read failed: %s", campaign_id, e)
            return None

    @staticmethod
    def _partition(ids: list[int], details: dict[int, Campaign | None]) -> tuple[Campaign, ...]:
        return tuple(c for c in (details.get(i) for i in ids) if c is not None)
