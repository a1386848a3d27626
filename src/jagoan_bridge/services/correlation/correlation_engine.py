# -*- coding: utf-8 -*-
"""CorrelationEngine: turns sensor amounts into pending transactions and replies into ledger records.

State per transaction: Pending -> Resolved, or Pending -> Expired. Each authorized
reply resolves exactly one transaction, always the oldest (FIFO); the reply text
alone cannot tell which pending amount the human meant.
"""

from __future__ import annotations

import asyncio
import structlog
from collections.abc import Awaitable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Callable, Optional

from jagoan_bridge.events.transaction_events import TransactionPendingEvent
from jagoan_bridge.exceptions import LedgerWriteError
from jagoan_bridge.models.amount_observation import AmountObservation
from jagoan_bridge.models.ledger_entry import LedgerEntry
from jagoan_bridge.models.pending_transaction import PendingTransaction
from jagoan_bridge.notifications.types import NotificationMessage
from jagoan_bridge.utils.amount import ensure_positive
from jagoan_bridge.utils.validation import mask_identity, same_identity

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from jagoan_bridge.clients.ledger_client import ILedgerClient
    from jagoan_bridge.persistence.repositories.interfaces.pending_transaction_repository import (
        IPendingTransactionRepository,
    )
    from jagoan_bridge.services.dedup.amount_deduplicator import AmountDeduplicator


ReplySink = Callable[[NotificationMessage], Awaitable[Any]]
"""Sends a response back to whoever wrote the reply."""

CLASSIFY_QUESTION = "What was it for?"


class AmountEventStatus(StrEnum):
    ACCEPTED = "accepted"
    DUPLICATE = "duplicate"


class ReplyStatus(StrEnum):
    UNAUTHORIZED = "unauthorized"
    EMPTY_REPLY = "empty_reply"
    NOTHING_PENDING = "nothing_pending"
    RECORDED = "recorded"
    LEDGER_FAILED = "ledger_failed"


@dataclass(frozen=True, slots=True)
class AmountEventResult:
    """Outcome of on_amount_event."""

    status: AmountEventStatus
    transaction: PendingTransaction | None = None

    @property
    def is_duplicate(self) -> bool:
        return self.status is AmountEventStatus.DUPLICATE


@dataclass(frozen=True, slots=True)
class ReplyResult:
    """Outcome of on_reply."""

    status: ReplyStatus
    transaction: PendingTransaction | None = None
    entry: LedgerEntry | None = None
    record_id: str | None = None
    restored: bool = False
    """True when a failed transaction was put back in the queue."""


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CorrelationEngine:
    """Correlates fire-and-forget amount events with human replies.

    Owns the pending repository lifecycle (insert, expire, resolve). The
    deduplicator is consulted first and keeps its own window. Mutations of
    both are serialized by one lock; the ledger write runs outside it.
    """

    def __init__(
        self,
        deduplicator: "AmountDeduplicator",
        pending_repository: "IPendingTransactionRepository",
        ledger_client: "ILedgerClient",
        *,
        authorized_identity: str,
        pending_ttl: timedelta = timedelta(hours=1),
        timezone: tzinfo = UTC,
        category: Optional[str] = None,
        restore_on_ledger_failure: bool = False,
        event_bus: Optional[Any] = None,
        clock: Callable[[], datetime] = _utc_now,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            deduplicator: Suppresses repeated amounts within its window.
            pending_repository: FIFO store of pending transactions.
            ledger_client: Creates the durable ledger record.
            authorized_identity: The only chat identity allowed to classify transactions.
            pending_ttl: Age after which a pending transaction expires.
            timezone: Zone that defines "today" for the ledger date.
            category: Optional category reference attached to every record.
            restore_on_ledger_failure: Put the transaction back when the ledger write fails.
            event_bus: Optional; if set, emits TransactionPendingEvent for notifiers.
            clock: Returns the current aware datetime (injected for tests).
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        if not authorized_identity or not str(authorized_identity).strip():
            raise ValueError("authorized_identity is required")
        self._dedup = deduplicator
        self._repo = pending_repository
        self._ledger = ledger_client
        self._authorized_identity = str(authorized_identity).strip()
        self._ttl = pending_ttl
        self._timezone = timezone
        self._category = category
        self._restore_on_failure = restore_on_ledger_failure
        self._event_bus: Optional["EventBus"] = event_bus
        self._clock = clock
        self._lock = asyncio.Lock()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def pending_ttl(self) -> timedelta:
        return self._ttl

    async def on_amount_event(
        self,
        amount: Decimal,
        now: Optional[datetime] = None,
    ) -> AmountEventResult:
        """Accept an amount from the sensor.

        Duplicates are dropped silently (logged only). Otherwise expired entries
        are swept, the amount is stored as pending and TransactionPendingEvent
        is emitted; delivery of that notification never affects the result.

        Raises:
            InvalidAmountError: amount is not a finite number greater than zero.
        """
        amount = ensure_positive(amount)
        now = now or self._clock()

        async with self._lock:
            dedup = self._dedup.check(AmountObservation(amount=amount, observed_at=now))
            if dedup.is_duplicate:
                self._logger.info("amount_event_duplicate", amount=str(amount))
                return AmountEventResult(status=AmountEventStatus.DUPLICATE)
            await self._sweep(now)
            transaction = await self._repo.put(amount, now)
            pending_count = await self._repo.size()

        self._logger.info(
            "transaction_pending_created",
            transaction_id=transaction.id,
            amount=str(amount),
            pending_count=pending_count,
        )
        self._emit_pending(transaction, pending_count)
        return AmountEventResult(status=AmountEventStatus.ACCEPTED, transaction=transaction)

    async def on_reply(
        self,
        reply_text: str,
        sender_identity: str | int | None,
        now: Optional[datetime] = None,
        *,
        respond: Optional[ReplySink] = None,
    ) -> ReplyResult:
        """Resolve the oldest pending transaction with reply_text as its name.

        Unauthorized senders are ignored (no response, no mutation). A blank
        reply pops nothing and asks for a name. With nothing pending a
        "nothing to confirm" response is sent. On ledger failure the
        popped transaction is dropped unless restore_on_ledger_failure is set.
        """
        if not same_identity(sender_identity, self._authorized_identity):
            self._logger.warning(
                "reply_unauthorized",
                sender_masked=mask_identity(str(sender_identity) if sender_identity else None),
            )
            return ReplyResult(status=ReplyStatus.UNAUTHORIZED)

        name = (reply_text or "").strip()
        if not name:
            self._logger.info("reply_empty_ignored")
            await self._respond(
                respond,
                NotificationMessage(
                    event_type="empty_reply",
                    message="Reply with a short name for the transaction, e.g. Lunch.",
                ),
            )
            return ReplyResult(status=ReplyStatus.EMPTY_REPLY)

        now = now or self._clock()
        async with self._lock:
            await self._sweep(now)
            transaction = await self._repo.pop_oldest()

        if transaction is None:
            self._logger.info("reply_nothing_pending")
            await self._respond(
                respond,
                NotificationMessage(
                    event_type="nothing_pending",
                    message="No transaction is waiting for confirmation.",
                ),
            )
            return ReplyResult(status=ReplyStatus.NOTHING_PENDING)

        entry = LedgerEntry(
            name=name,
            amount=transaction.amount,
            date=self._today(now),
            category=self._category,
        )
        payload = {"transaction_id": transaction.id, **entry.to_dict()}
        await self._respond(
            respond,
            NotificationMessage(
                event_type="transaction_saving",
                message="Saving transaction to the ledger...",
                payload=payload,
            ),
        )

        try:
            record_id = await self._ledger.create_record(entry)
        except LedgerWriteError as e:
            restored = False
            if self._restore_on_failure:
                await self._repo.restore(transaction)
                restored = True
            self._logger.error(
                "ledger_write_failed",
                transaction_id=transaction.id,
                amount=str(transaction.amount),
                restored=restored,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            await self._respond(
                respond,
                NotificationMessage(
                    event_type="transaction_failed",
                    message=(
                        "It is back in the queue; reply again to retry."
                        if restored
                        else "It was removed from the queue; please record it manually."
                    ),
                    payload={**payload, "restored": restored, "error": str(e)},
                ),
            )
            return ReplyResult(
                status=ReplyStatus.LEDGER_FAILED,
                transaction=transaction,
                entry=entry,
                restored=restored,
            )

        self._logger.info(
            "transaction_recorded",
            transaction_id=transaction.id,
            record_id=record_id,
            amount=str(transaction.amount),
        )
        await self._respond(
            respond,
            NotificationMessage(
                event_type="transaction_recorded",
                message="Transaction saved.",
                payload={**payload, "record_id": record_id},
            ),
        )
        return ReplyResult(
            status=ReplyStatus.RECORDED,
            transaction=transaction,
            entry=entry,
            record_id=record_id,
        )

    async def pending_count(self, now: Optional[datetime] = None) -> int:
        """Live pending entries after sweeping expired ones."""
        now = now or self._clock()
        async with self._lock:
            await self._sweep(now)
            return await self._repo.size()

    async def _sweep(self, now: datetime) -> None:
        expired = await self._repo.sweep_expired(now, self._ttl)
        if expired:
            self._logger.info(
                "pending_transactions_expired",
                expired_count=len(expired),
                transaction_ids=[t.id for t in expired],
            )

    def _today(self, now: datetime) -> date:
        return now.astimezone(self._timezone).date()

    def _emit_pending(self, transaction: PendingTransaction, pending_count: int) -> None:
        """Emit TransactionPendingEvent for PendingTransactionNotifier."""
        if self._event_bus is None:
            return
        event = TransactionPendingEvent(
            transaction_id=transaction.id,
            amount=transaction.amount,
            received_at=transaction.received_at,
            pending_count=pending_count,
        )
        try:
            self._event_bus.dispatch(event)
        except Exception:
            self._logger.exception(
                "transaction_pending_event_dispatch_failed",
                transaction_id=transaction.id,
            )

    async def _respond(self, respond: Optional[ReplySink], message: NotificationMessage) -> None:
        if respond is None:
            return
        try:
            await respond(message)
        except Exception:
            self._logger.exception(
                "reply_send_failed",
                reply_event_type=message.event_type,
            )
