# -*- coding: utf-8 -*-
"""Console channel: the same rendered notifications, printed as plain text."""

from __future__ import annotations

import html
import re
from typing import TYPE_CHECKING, Callable

from jagoan_bridge.notifications.strategies.base import BaseNotificationStrategy
from jagoan_bridge.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from jagoan_bridge.config import Settings
    from jagoan_bridge.notifications.types import NotificationStyler

_HTML_TAG = re.compile(r"</?[a-zA-Z][^>]*>")


def to_plain_text(rendered: str) -> str:
    """Drop Telegram-HTML tags and unescape entities."""
    return html.unescape(_HTML_TAG.sub("", rendered))


class ConsoleNotifier(BaseNotificationStrategy):
    """Write notifications to stdout. Enabled with CONSOLE__ENABLED=true."""

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        write: Callable[[str], object] = print,
    ) -> None:
        super().__init__(settings)
        self._styler = styler
        self._write = write
        self._open = False

    @property
    def is_running(self) -> bool:
        return self._open

    async def initialize(self) -> None:
        self._open = True

    async def shutdown(self) -> None:
        self._open = False

    async def send_notification(self, message: NotificationMessage) -> bool:
        if not self._open or not self.settings.console.enabled:
            return False
        self._write(to_plain_text(self._styler.render(message)))
        return True
