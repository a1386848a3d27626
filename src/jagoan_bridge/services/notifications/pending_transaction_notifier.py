# -*- coding: utf-8 -*-
"""PendingTransactionNotifier: listens to TransactionPendingEvent and asks for classification."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from jagoan_bridge.events.transaction_events import TransactionPendingEvent
from jagoan_bridge.notifications.types import NotificationMessage
from jagoan_bridge.services.correlation.correlation_engine import CLASSIFY_QUESTION

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from jagoan_bridge.notifications.notification_manager import NotificationService


class PendingTransactionNotifier:
    """Subscribes to TransactionPendingEvent and enqueues a chat notification.

    Enqueueing never blocks and never raises into the event bus; a dropped
    notification leaves the pending transaction resolvable.
    """

    def __init__(
        self,
        notification_service: "NotificationService",
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._notification_service = notification_service
        self._event_bus: "EventBus" = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def start(self) -> None:
        """Subscribe to TransactionPendingEvent."""
        self._event_bus.on(TransactionPendingEvent, self._on_pending)
        self._logger.debug("pending_transaction_notifier_started")

    def stop(self) -> None:
        """Unsubscribe from TransactionPendingEvent."""
        key = TransactionPendingEvent.__name__
        handlers = getattr(self._event_bus, "handlers", {})
        if key in handlers:
            handlers[key] = [h for h in handlers[key] if h != self._on_pending]
        self._logger.debug("pending_transaction_notifier_stopped")

    def _on_pending(self, event: TransactionPendingEvent) -> None:
        """Handle TransactionPendingEvent: build and enqueue the notification."""
        notification = NotificationMessage(
            event_type="transaction_pending",
            message=CLASSIFY_QUESTION,
            payload={
                "transaction_id": event.transaction_id,
                "amount": str(event.amount),
                "received_at": event.received_at.isoformat(),
                "pending_count": event.pending_count,
            },
        )
        try:
            queued = self._notification_service.notify(notification)
        except RuntimeError as e:
            self._logger.warning(
                "pending_transaction_notification_failed",
                transaction_id=event.transaction_id,
                error_message=str(e),
            )
            return
        self._logger.debug(
            "pending_transaction_notified",
            transaction_id=event.transaction_id,
            queued=queued,
        )
