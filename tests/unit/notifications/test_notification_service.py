# -*- coding: utf-8 -*-
"""Unit tests for NotificationService."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import pytest

from jagoan_bridge.notifications.notification_manager import NotificationService
from jagoan_bridge.notifications.types import NotificationMessage


def _notifier(**kwargs: Any) -> Any:
    return SimpleNamespace(
        initialize=AsyncMock(),
        shutdown=AsyncMock(),
        send_notification=kwargs.get("send", AsyncMock(return_value=True)),
    )


def _message(event_type: str = "transaction_pending") -> NotificationMessage:
    return NotificationMessage(event_type=event_type, message="What was it for?")


async def test_notify_delivers_to_all_notifiers() -> None:
    first, second = _notifier(), _notifier()
    service = NotificationService(notifiers=cast(Any, [first, second]))
    await service.initialize()

    assert service.notify(_message()) is True
    await service.shutdown()

    first.send_notification.assert_awaited_once_with(_message())
    second.send_notification.assert_awaited_once_with(_message())
    first.shutdown.assert_awaited_once()


async def test_failing_notifier_does_not_block_others() -> None:
    broken = _notifier(send=AsyncMock(side_effect=RuntimeError("telegram down")))
    healthy = _notifier()
    service = NotificationService(notifiers=cast(Any, [broken, healthy]))
    await service.initialize()

    service.notify(_message("system_started"))
    service.notify(_message())
    await service.shutdown()

    assert broken.send_notification.await_count == 2
    assert healthy.send_notification.await_count == 2


async def test_notify_without_notifiers_is_noop() -> None:
    service = NotificationService(notifiers=[])
    await service.initialize()

    assert service.notify(_message()) is False
    assert service.is_running is False
    await service.shutdown()


def test_notify_before_initialize_raises() -> None:
    service = NotificationService(notifiers=cast(Any, [_notifier()]))
    with pytest.raises(RuntimeError):
        service.notify(_message())


async def test_notify_drops_when_queue_full() -> None:
    service = NotificationService(notifiers=cast(Any, [_notifier()]), queue_size=1)
    await service.initialize()

    # The worker has not run yet, so the second message does not fit.
    assert service.notify(_message()) is True
    assert service.notify(_message()) is False
    await service.shutdown()
