"""Transaction orchestrator: submit → confirm → refresh → report."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from .errors import WalletSessionError
from .ports import ContractCall
from .status import StatusChannel

logger = logging.getLogger(__name__)


PENDING_MESSAGE = "Waiting for confirmation…"
FAILURE_MESSAGE = "Transaction failed / rejected"
DEFAULT_SUCCESS_MESSAGE = "Transaction succeeded"


class TxPhase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    BUSY = "busy"


@dataclass(frozen=True, slots=True)
class TxOptions:
    """Per-call options; ``value`` is the currency amount to attach."""

    value: int | None = None


@dataclass(frozen=True, slots=True)
class TxOutcome:
    phase: TxPhase
    message: str
    tx_hash: str | None = None

    @property
    def ok(self) -> bool:
        return self.phase is TxPhase.CONFIRMED


def failure_message(exc: BaseException) -> str:
    """Return the error's own message, or the generic failure text."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message.strip():
        return message
    text = str(exc).strip()
    return text or FAILURE_MESSAGE


class TransactionOrchestrator:
    """Drives one state-mutating call through its lifecycle.

    Holds no queue and never retries; concurrent ``submit`` calls are
    independent and their post-success refreshes may interleave.
    """

    def __init__(
        self,
        *,
        status: StatusChannel,
        refresh: Callable[[], Awaitable[Any]],
        sender: Callable[[], str | None],
    ):
        self.status = status
        self._refresh = refresh
        self._sender = sender

    async def submit(
        self,
        operation: ContractCall,
        options: TxOptions | None = None,
        success_message: str = DEFAULT_SUCCESS_MESSAGE,
    ) -> TxOutcome:
        """Submit ``operation`` and report the outcome on the status channel.

        Success is published only after the triggered refresh has settled.
        Failures are converted into a status message and never raised.
        """
        options = options or TxOptions()
        self.status.publish(PENDING_MESSAGE)

        try:
            sender = self._sender()
            if not sender:
                raise WalletSessionError("No wallet account connected")
            tx_hash = await operation.send(sender=sender, value=options.value)
        except Exception as e:
            message = failure_message(e)
            logger.warning("Transaction failed: %s", message)
            self.status.publish(message)
            return TxOutcome(phase=TxPhase.FAILED, message=message)

        logger.info("Transaction %s confirmed; refreshing read model", tx_hash)
        try:
            await self._refresh()
        except Exception:
            # The refresh reports its own failures; the transaction stands.
            logger.exception("Post-transaction refresh raised")

        self.status.publish(success_message)
        return TxOutcome(phase=TxPhase.CONFIRMED, message=success_message, tx_hash=tx_hash)
