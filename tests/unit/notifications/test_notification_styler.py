# -*- coding: utf-8 -*-
"""Unit tests for EventNotificationStyler."""

from __future__ import annotations

from jagoan_bridge.notifications.stylers.notification_styler import EventNotificationStyler
from jagoan_bridge.notifications.types import NotificationMessage

styler = EventNotificationStyler()


def test_pending_shows_amount_and_question() -> None:
    text = styler.render(
        NotificationMessage(
            event_type="transaction_pending",
            message="What was it for?",
            payload={"amount": "50000", "pending_count": 1},
        )
    )

    assert "New expense" in text
    assert "Rp 50.000" in text
    assert "What was it for?" in text
    assert "waiting" not in text


def test_pending_mentions_backlog() -> None:
    text = styler.render(
        NotificationMessage(
            event_type="transaction_pending",
            message="What was it for?",
            payload={"amount": "20000", "pending_count": 3},
        )
    )

    assert "3 transactions are waiting" in text


def test_recorded_summarizes_entry() -> None:
    text = styler.render(
        NotificationMessage(
            event_type="transaction_recorded",
            message="Transaction saved.",
            payload={"name": "Lunch", "amount": "50000", "date": "2026-02-13"},
        )
    )

    assert "Transaction saved!" in text
    assert "Lunch" in text
    assert "Rp 50.000" in text
    assert "13/02/2026" in text


def test_reply_text_is_html_escaped() -> None:
    text = styler.render(
        NotificationMessage(
            event_type="transaction_recorded",
            message="Transaction saved.",
            payload={"name": "<b>Fish & chips</b>", "amount": "1000", "date": "2026-02-13"},
        )
    )

    assert "&lt;b&gt;Fish &amp; chips&lt;/b&gt;" in text


def test_failed_states_queue_outcome() -> None:
    text = styler.render(
        NotificationMessage(
            event_type="transaction_failed",
            message="It was removed from the queue; please record it manually.",
            payload={"name": "Lunch", "amount": "50000"},
        )
    )

    assert "Could not save the transaction" in text
    assert "record it manually" in text


def test_nothing_pending_is_plain() -> None:
    text = styler.render(
        NotificationMessage(event_type="nothing_pending", message="No transaction is waiting for confirmation.")
    )
    assert text == "❌ No transaction is waiting for confirmation."


def test_unknown_event_uses_generic_renderer() -> None:
    text = styler.render(NotificationMessage(event_type="custom_event", message="hi", payload={"k": 1}))
    assert "Custom Event" in text
    assert "<b>k:</b> 1" in text


def test_explicit_title_overrides_default() -> None:
    text = styler.render(NotificationMessage(event_type="system_started", message="Up.", title="Bridge online"))
    assert text == "▶️ <b>Bridge online</b>\nUp."


def test_empty_reply_asks_for_name() -> None:
    text = styler.render(
        NotificationMessage(event_type="empty_reply", message="Reply with a short name for the transaction, e.g. Lunch.")
    )
    assert text == "✏️ Reply with a short name for the transaction, e.g. Lunch."
