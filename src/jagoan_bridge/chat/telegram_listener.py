# -*- coding: utf-8 -*-
"""Inbound chat: long-poll Telegram and forward replies to the correlation engine."""

from __future__ import annotations

import asyncio
import structlog
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

from telegram import Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import Application, ApplicationBuilder, ContextTypes, MessageHandler, filters

from jagoan_bridge.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from jagoan_bridge.config import Settings
    from jagoan_bridge.notifications.types import NotificationStyler
    from jagoan_bridge.services.correlation import CorrelationEngine


class TelegramReplyListener:
    """Receives text messages and resolves pending transactions with them.

    Authorization is the engine's job: every text message is forwarded with
    its chat id as sender identity. Responses are sent as in-chat replies.
    """

    def __init__(
        self,
        settings: "Settings",
        engine: "CorrelationEngine",
        styler: "NotificationStyler",
        *,
        application: Optional[Application] = None,
        start_timeout_seconds: float = 10.0,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        cfg = settings.telegram
        if application is None and not cfg.api_key:
            raise ValueError("TelegramReplyListener requires telegram.api_key.")
        self._token = cfg.api_key
        self._engine = engine
        self._styler = styler
        self._application = application
        self._start_timeout = start_timeout_seconds
        self._running = False
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def is_running(self) -> bool:
        return self._running

    def _build_application(self) -> Application:
        application = ApplicationBuilder().token(str(self._token)).build()
        application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self.handle_text))
        return application

    async def start(self) -> bool:
        """Start polling. Returns False (and logs) if the bot could not start."""
        if self._running:
            return True
        if self._application is None:
            self._application = self._build_application()
        application = self._application
        try:
            async with asyncio.timeout(self._start_timeout):
                await application.initialize()
                await application.start()
                if application.updater is None:
                    raise RuntimeError("Telegram application has no updater")
                await application.updater.start_polling(
                    drop_pending_updates=True,
                    allowed_updates=[Update.MESSAGE],
                )
        except (TelegramError, RuntimeError, TimeoutError) as exc:
            self._logger.warning(
                "telegram_listener_start_failed",
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            await self._teardown(application)
            return False
        self._running = True
        self._logger.info("telegram_listener_started")
        return True

    async def stop(self) -> None:
        """Stop polling and shut the application down. Idempotent."""
        if not self._running or self._application is None:
            return
        self._running = False
        await self._teardown(self._application)
        self._logger.info("telegram_listener_stopped")

    async def _teardown(self, application: Application) -> None:
        """Stop whatever part of the application is up, then release its resources.

        Each step runs even if an earlier one failed.
        """
        steps: list[tuple[str, Callable[[], Awaitable[Any]]]] = []
        if application.updater is not None and application.updater.running:
            steps.append(("updater_stop", application.updater.stop))
        if application.running:
            steps.append(("application_stop", application.stop))
        steps.append(("application_shutdown", application.shutdown))
        for step, call in steps:
            try:
                await call()
            except (TelegramError, RuntimeError) as exc:
                self._logger.warning(
                    "telegram_listener_teardown_failed",
                    teardown_step=step,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )

    async def handle_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """MessageHandler callback: forward text and sender chat id to the engine."""
        message = update.effective_message
        chat = update.effective_chat
        if message is None or chat is None or not message.text:
            return

        async def respond(reply: NotificationMessage) -> None:
            await message.reply_text(self._styler.render(reply), parse_mode=ParseMode.HTML)

        result = await self._engine.on_reply(message.text, str(chat.id), respond=respond)
        self._logger.debug("telegram_reply_handled", reply_status=str(result.status))
