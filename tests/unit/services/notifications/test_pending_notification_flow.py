# -*- coding: utf-8 -*-
"""Amount events through a real EventBus to the notification channel."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, cast

from bubus import EventBus  # type: ignore[import-untyped]

from jagoan_bridge.notifications.notification_manager import NotificationService
from jagoan_bridge.notifications.types import NotificationMessage
from jagoan_bridge.services.correlation.correlation_engine import AmountEventStatus, CorrelationEngine
from jagoan_bridge.services.notifications.pending_transaction_notifier import PendingTransactionNotifier


class _RecordingChannel:
    def __init__(self) -> None:
        self.sent: list[NotificationMessage] = []

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    async def send_notification(self, message: NotificationMessage) -> bool:
        self.sent.append(message)
        return True


async def test_duplicate_amount_is_announced_once(
    engine_factory: Callable[..., CorrelationEngine],
    now_utc: datetime,
) -> None:
    bus = EventBus(name="PendingFlowTest", wal_path=None)
    channel = _RecordingChannel()
    service = NotificationService(notifiers=[cast(Any, channel)])
    notifier = PendingTransactionNotifier(service, bus)
    engine = engine_factory(event_bus=bus)
    await service.initialize()
    notifier.start()
    try:
        first = await engine.on_amount_event(Decimal("50000"), now_utc)
        second = await engine.on_amount_event(Decimal("50000"), now_utc + timedelta(milliseconds=50))
        await bus.wait_until_idle()
        await service.shutdown()
    finally:
        notifier.stop()
        await bus.stop()

    assert first.status is AmountEventStatus.ACCEPTED
    assert second.status is AmountEventStatus.DUPLICATE
    assert [m.event_type for m in channel.sent] == ["transaction_pending"]
    assert channel.sent[0].payload is not None
    assert channel.sent[0].payload["amount"] == "50000"
    assert await engine.pending_count() == 1
