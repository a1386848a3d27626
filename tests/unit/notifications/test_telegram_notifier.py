# -*- coding: utf-8 -*-
"""Unit tests for TelegramNotifier."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import pytest
from telegram.constants import ParseMode
from telegram.error import BadRequest, NetworkError

from jagoan_bridge.notifications.strategies.telegram import TelegramNotifier
from jagoan_bridge.notifications.stylers.notification_styler import EventNotificationStyler
from jagoan_bridge.notifications.types import NotificationMessage


def _settings(**telegram: Any) -> Any:
    cfg = {
        "enabled": True,
        "api_key": "token",
        "chat_id": "123456789",
        "messages_per_minute": 30,
        "max_retries": 3,
        "backoff_base_seconds": 0.0,
        "connect_timeout": 10.0,
        "read_timeout": 20.0,
        "write_timeout": 20.0,
        "pool_timeout": 10.0,
    }
    cfg.update(telegram)
    return SimpleNamespace(telegram=SimpleNamespace(**cfg))


def _message() -> NotificationMessage:
    return NotificationMessage(
        event_type="transaction_pending",
        message="What was it for?",
        payload={"amount": "50000", "pending_count": 1},
    )


async def _notifier(bot: Any, **telegram: Any) -> TelegramNotifier:
    notifier = TelegramNotifier(_settings(**telegram), EventNotificationStyler(), bot=cast(Any, bot))
    await notifier.initialize()
    return notifier


async def test_send_renders_html_to_configured_chat() -> None:
    bot = SimpleNamespace(send_message=AsyncMock())
    notifier = await _notifier(bot)

    assert await notifier.send_notification(_message()) is True

    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == "123456789"
    assert kwargs["parse_mode"] == ParseMode.HTML
    assert "Rp 50.000" in kwargs["text"]


async def test_network_errors_are_retried_then_dropped() -> None:
    bot = SimpleNamespace(send_message=AsyncMock(side_effect=NetworkError("timeout")))
    notifier = await _notifier(bot, max_retries=2)

    assert await notifier.send_notification(_message()) is False
    assert bot.send_message.await_count == 2


async def test_network_error_then_success() -> None:
    bot = SimpleNamespace(send_message=AsyncMock(side_effect=[NetworkError("timeout"), None]))
    notifier = await _notifier(bot)

    assert await notifier.send_notification(_message()) is True
    assert bot.send_message.await_count == 2


async def test_bad_request_is_not_retried() -> None:
    bot = SimpleNamespace(send_message=AsyncMock(side_effect=BadRequest("can't parse entities")))
    notifier = await _notifier(bot)

    assert await notifier.send_notification(_message()) is False
    assert bot.send_message.await_count == 1


async def test_send_after_shutdown_returns_false() -> None:
    bot = SimpleNamespace(send_message=AsyncMock())
    notifier = await _notifier(bot)
    await notifier.shutdown()

    assert await notifier.send_notification(_message()) is False
    bot.send_message.assert_not_awaited()


def test_requires_chat_id() -> None:
    with pytest.raises(ValueError):
        TelegramNotifier(_settings(chat_id=None), EventNotificationStyler())
