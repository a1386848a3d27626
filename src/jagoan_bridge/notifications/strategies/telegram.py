# -*- coding: utf-8 -*-
"""Telegram notification strategy (python-telegram-bot, async)."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from telegram import Bot
from telegram.constants import ParseMode
from telegram.error import BadRequest, Forbidden, RetryAfter, TelegramError
from telegram.request import HTTPXRequest

from jagoan_bridge.notifications.strategies.base import BaseNotificationStrategy
from jagoan_bridge.notifications.types import NotificationMessage
from jagoan_bridge.utils.validation import mask_identity

if TYPE_CHECKING:
    from jagoan_bridge.config.config import Settings
    from jagoan_bridge.notifications.types import NotificationStyler


class _MinuteRateLimiter:
    """Sliding one-minute window; wait() sleeps until a send slot is free."""

    def __init__(self, per_minute: int, clock: Callable[[], float] = time.monotonic) -> None:
        self._per_minute = per_minute
        self._clock = clock
        self._sent: deque[float] = deque()

    async def wait(self) -> None:
        if self._per_minute <= 0:
            return
        now = self._clock()
        while self._sent and now - self._sent[0] >= 60:
            self._sent.popleft()
        if len(self._sent) >= self._per_minute:
            await asyncio.sleep(60 - (now - self._sent[0]))

    def record(self) -> None:
        self._sent.append(self._clock())


def _retry_after_seconds(exc: RetryAfter) -> float:
    value = exc.retry_after
    return value.total_seconds() if hasattr(value, "total_seconds") else float(value)


class TelegramNotifier(BaseNotificationStrategy):
    """Push notifications into the authorized chat.

    At most telegram.max_retries attempts per message; afterwards it is
    dropped and logged. Rejections (bad HTML, bot blocked) are not retried.
    """

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        bot: Optional[Bot] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings)
        cfg = settings.telegram
        if not cfg.enabled or not cfg.api_key or not cfg.chat_id:
            raise ValueError("TelegramNotifier requires telegram.api_key and telegram.chat_id.")
        self._token = str(cfg.api_key)
        self.chat_id = str(cfg.chat_id).strip()
        self.max_retries = cfg.max_retries
        self._backoff_base = cfg.backoff_base_seconds
        self._timeouts = {
            "connect_timeout": cfg.connect_timeout,
            "read_timeout": cfg.read_timeout,
            "write_timeout": cfg.write_timeout,
            "pool_timeout": cfg.pool_timeout,
        }
        self._limiter = _MinuteRateLimiter(cfg.messages_per_minute)
        self._styler = styler
        self._bot = bot
        self._running = False
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        if self._running:
            return
        if self._bot is None:
            self._bot = Bot(token=self._token, request=HTTPXRequest(**self._timeouts))
        self._running = True
        self._logger.debug("telegram_notifier_ready", chat_id_masked=mask_identity(self.chat_id))

    async def shutdown(self) -> None:
        self._running = False
        self._bot = None

    async def send_notification(self, message: NotificationMessage) -> bool:
        """Render and deliver one message. Returns False when it was not delivered."""
        if not self._running or self._bot is None:
            self._logger.warning("telegram_not_running_cannot_send", event_type=message.event_type)
            return False
        text = self._styler.render(message)
        await self._limiter.wait()
        for attempt in range(1, self.max_retries + 1):
            try:
                await self._bot.send_message(chat_id=self.chat_id, text=text, parse_mode=ParseMode.HTML)
            except RetryAfter as exc:
                delay = _retry_after_seconds(exc)
                self._logger.warning("telegram_rate_limited", retry_seconds=delay, attempt=attempt)
            except (BadRequest, Forbidden) as exc:
                self._logger.error(
                    "telegram_message_rejected",
                    event_type=message.event_type,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                return False
            except TelegramError as exc:
                delay = min(60.0, self._backoff_base * 2 ** (attempt - 1))
                self._logger.warning(
                    "telegram_send_retry",
                    error_type=type(exc).__name__,
                    attempt=attempt,
                    backoff_seconds=delay,
                )
            else:
                self._limiter.record()
                return True
            if attempt < self.max_retries:
                await asyncio.sleep(delay)

        self._logger.error(
            "telegram_message_dropped",
            event_type=message.event_type,
            max_retries=self.max_retries,
        )
        return False
