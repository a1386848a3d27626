# -*- coding: utf-8 -*-
"""Unit tests for ConsoleNotifier."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast

from jagoan_bridge.notifications.strategies.console import ConsoleNotifier, to_plain_text
from jagoan_bridge.notifications.stylers.notification_styler import EventNotificationStyler
from jagoan_bridge.notifications.types import NotificationMessage


def _notifier(enabled: bool, lines: list[str]) -> ConsoleNotifier:
    settings = SimpleNamespace(console=SimpleNamespace(enabled=enabled))
    return ConsoleNotifier(cast(Any, settings), EventNotificationStyler(), write=lines.append)


def test_to_plain_text_strips_tags_and_entities() -> None:
    assert to_plain_text("<b>Fish &amp; chips</b>") == "Fish & chips"


async def test_prints_rendered_message() -> None:
    lines: list[str] = []
    notifier = _notifier(True, lines)
    await notifier.initialize()

    delivered = await notifier.send_notification(
        NotificationMessage(event_type="system_started", message="Waiting for transactions.")
    )

    assert delivered is True
    assert lines == ["▶️ Bridge Started\nWaiting for transactions."]


async def test_disabled_console_does_not_print() -> None:
    lines: list[str] = []
    notifier = _notifier(False, lines)
    await notifier.initialize()

    assert await notifier.send_notification(NotificationMessage(event_type="x", message="y")) is False
    assert lines == []
