# -*- coding: utf-8 -*-
"""Event-based notification styler with emojis (Telegram HTML)."""

from __future__ import annotations

import html
from datetime import date
from typing import Any

from jagoan_bridge.notifications.types import NotificationMessage, NotificationStyler
from jagoan_bridge.utils.formatting import format_date, format_idr


class EventNotificationStyler(NotificationStyler):
    """Render notifications and chat replies by event_type."""

    def render(self, message: NotificationMessage) -> str:
        """Dispatch to the appropriate renderer based on event_type."""
        renderer = {
            "transaction_pending": self._render_pending,
            "transaction_saving": self._render_plain,
            "transaction_recorded": self._render_recorded,
            "transaction_failed": self._render_failed,
            "nothing_pending": self._render_plain,
            "empty_reply": self._render_plain,
            "system_started": self._render_system,
            "system_stopped": self._render_system,
        }.get(message.event_type, self._render_generic)
        return renderer(message)

    def _render_pending(self, message: NotificationMessage) -> str:
        """New pending expense: amount plus the classification question."""
        payload = message.payload or {}
        emoji, title = self._title(message)
        lines = [
            f"{emoji} <b>{title}</b>\n",
            self._row("💰 Amount", format_idr(payload.get("amount"))),
            "",
            html.escape(message.message),
        ]
        pending_count = payload.get("pending_count")
        if isinstance(pending_count, int) and pending_count > 1:
            lines.append(
                f"\n📬 {pending_count} transactions are waiting; replies are matched oldest first."
            )
        return "\n".join(lines).strip()

    def _render_recorded(self, message: NotificationMessage) -> str:
        """Confirmation summarizing name, amount and date."""
        payload = message.payload or {}
        emoji, title = self._title(message)
        lines = [
            f"{emoji} <b>{title}</b>\n",
            self._row("📝 Name", html.escape(str(payload.get("name") or ""))),
            self._row("💰 Amount", format_idr(payload.get("amount"))),
            self._row("📅 Date", self._format_date(payload.get("date"))),
        ]
        return "\n".join(line for line in lines if line).strip()

    def _render_failed(self, message: NotificationMessage) -> str:
        """Ledger write failure, stating whether the transaction is still queued."""
        payload = message.payload or {}
        emoji, title = self._title(message)
        lines = [
            f"{emoji} <b>{title}</b>\n",
            self._row("📝 Name", html.escape(str(payload.get("name") or ""))),
            self._row("💰 Amount", format_idr(payload.get("amount"))),
            "",
            html.escape(message.message),
        ]
        return "\n".join(lines).strip()

    def _render_plain(self, message: NotificationMessage) -> str:
        emoji, _ = self._title(message)
        return f"{emoji} {html.escape(message.message)}"

    def _render_system(self, message: NotificationMessage) -> str:
        emoji, title = self._title(message)
        return f"{emoji} <b>{title}</b>\n{html.escape(message.message)}"

    def _render_generic(self, message: NotificationMessage) -> str:
        """Render unknown event types using message and payload."""
        emoji, title = self._title(message)
        lines = [f"{emoji} <b>{title}</b>", html.escape(message.message)]
        if message.payload:
            for key in sorted(message.payload.keys()):
                value = message.payload.get(key)
                if value is not None:
                    lines.append(f"<b>{html.escape(key)}:</b> {html.escape(str(value))}")
        return "\n".join(lines).strip()

    @staticmethod
    def _title(message: NotificationMessage) -> tuple[str, str]:
        """Emoji and heading for the event type; an explicit message.title wins."""
        event_type = message.event_type
        mapping = {
            "transaction_pending": ("🎯", "New expense"),
            "transaction_saving": ("⏳", "Saving"),
            "transaction_recorded": ("✅", "Transaction saved!"),
            "transaction_failed": ("❌", "Could not save the transaction"),
            "nothing_pending": ("❌", "Nothing pending"),
            "empty_reply": ("✏️", "Name needed"),
            "system_started": ("▶️", "Bridge Started"),
            "system_stopped": ("⏹️", "Bridge Stopped"),
        }
        emoji, title = mapping.get(event_type, ("ℹ️", event_type.replace("_", " ").title()))
        return emoji, message.title or title

    @staticmethod
    def _row(label: str, value: Any) -> str:
        """Format '<emoji> <b>Label:</b> value'; empty string when value is empty."""
        if value in (None, ""):
            return ""
        emoji, _, remainder = label.partition(" ")
        if remainder:
            return f"{emoji} <b>{remainder}:</b> {value}"
        return f"<b>{label}:</b> {value}"

    @staticmethod
    def _format_date(value: Any) -> str:
        """Accept a date or ISO string; fall back to str()."""
        if isinstance(value, date):
            return format_date(value)
        if isinstance(value, str):
            try:
                return format_date(date.fromisoformat(value))
            except ValueError:
                return value
        return "" if value is None else str(value)
