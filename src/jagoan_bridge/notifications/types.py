"""Outbound chat message type and the renderer protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class NotificationMessage:
    """Something to tell the human: a pending-amount prompt, a reply outcome, a lifecycle notice.

    event_type selects the template; payload carries the values it shows
    (amount as a string, dates as ISO strings).
    """

    event_type: str
    message: str
    title: str | None = None
    payload: dict[str, Any] | None = None


class NotificationStyler(Protocol):
    def render(self, message: NotificationMessage) -> str:
        """Telegram-HTML text for message."""
        ...
