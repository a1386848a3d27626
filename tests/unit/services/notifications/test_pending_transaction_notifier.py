# -*- coding: utf-8 -*-
"""Unit tests for PendingTransactionNotifier."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import MagicMock

from jagoan_bridge.events.transaction_events import TransactionPendingEvent
from jagoan_bridge.services.notifications.pending_transaction_notifier import PendingTransactionNotifier


def _event(now_utc: datetime) -> TransactionPendingEvent:
    return TransactionPendingEvent(
        transaction_id="txn_1_abc",
        amount=Decimal("50000"),
        received_at=now_utc,
        pending_count=2,
    )


def test_start_subscribes_and_stop_unsubscribes(event_bus: Any) -> None:
    service = SimpleNamespace(notify=MagicMock(return_value=True))
    notifier = PendingTransactionNotifier(cast(Any, service), event_bus)

    notifier.start()
    assert len(event_bus.handlers["TransactionPendingEvent"]) == 1

    notifier.stop()
    assert event_bus.handlers["TransactionPendingEvent"] == []


def test_pending_event_enqueues_classification_request(event_bus: Any, now_utc: datetime) -> None:
    service = SimpleNamespace(notify=MagicMock(return_value=True))
    notifier = PendingTransactionNotifier(cast(Any, service), event_bus)
    notifier.start()

    handler = event_bus.handlers["TransactionPendingEvent"][0]
    handler(_event(now_utc))

    service.notify.assert_called_once()
    message = service.notify.call_args.args[0]
    assert message.event_type == "transaction_pending"
    assert message.message == "What was it for?"
    assert message.payload == {
        "transaction_id": "txn_1_abc",
        "amount": "50000",
        "received_at": now_utc.isoformat(),
        "pending_count": 2,
    }


def test_notification_failure_is_swallowed(event_bus: Any, now_utc: datetime) -> None:
    service = SimpleNamespace(notify=MagicMock(side_effect=RuntimeError("not initialized")))
    notifier = PendingTransactionNotifier(cast(Any, service), event_bus)
    notifier.start()

    event_bus.handlers["TransactionPendingEvent"][0](_event(now_utc))

    service.notify.assert_called_once()
