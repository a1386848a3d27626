# -*- coding: utf-8 -*-
"""
Entry point for the transaction bridge.

Orchestrates: logging, settings, container, notification worker, HTTP server,
Telegram reply listener, shutdown (SIGINT/SIGTERM or CancelledError).
Flow: sensor -> POST /webhook/transaction -> CorrelationEngine -> pending + chat notification;
chat reply -> CorrelationEngine -> Notion page -> chat confirmation.

Run with: python -m jagoan_bridge.main  (or the jagoan-bridge console script)
"""
from __future__ import annotations

import asyncio
import signal
import structlog

from jagoan_bridge.config import Settings, get_settings
from jagoan_bridge.di import Container
from jagoan_bridge.exceptions import MissingRequiredConfigError
from jagoan_bridge.logging.config import configure_logging
from jagoan_bridge.notifications.types import NotificationMessage
from jagoan_bridge.utils import mask_identity


def _setup_signals(shutdown_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            pass  # Windows has no add_signal_handler


async def serve(container: Container, settings: Settings, shutdown_event: asyncio.Event) -> None:
    """Start every component, wait for shutdown_event, then stop them in reverse order.

    Cleanup also runs when a startup step fails (e.g. the port is taken);
    the startup error is re-raised afterwards.
    """
    logger = structlog.get_logger("main")
    notification_service = container.notification_service()
    pending_notifier = container.pending_transaction_notifier()
    web_server = container.web_server()
    listener = container.telegram_listener()
    ledger_client = container.ledger_client()

    try:
        await notification_service.initialize()
        pending_notifier.start()
        await web_server.start()
        logger.info(
            "main_bridge_started",
            chat_id_masked=mask_identity(settings.telegram.chat_id),
            dedup_window_ms=settings.correlation.dedup_window_ms,
            pending_ttl_seconds=settings.correlation.pending_ttl_seconds,
            category_configured=settings.notion.category_reference is not None,
        )
        if settings.notion.category_reference is None:
            logger.warning("main_no_ledger_category", message="Records will not be categorized.")

        if settings.telegram.listen_replies:
            if not await listener.start():
                logger.warning(
                    "main_reply_listener_unavailable",
                    message="Webhook endpoint is active; replies will not be processed.",
                )

        notification_service.notify(
            NotificationMessage(
                event_type="system_started",
                message="Waiting for transactions.",
            )
        )
        await shutdown_event.wait()
    finally:
        logger.info("main_shutdown_started")
        await listener.stop()
        await web_server.stop()
        pending_notifier.stop()
        if notification_service.is_running:
            notification_service.notify(
                NotificationMessage(
                    event_type="system_stopped",
                    message="Pending transactions in memory were discarded.",
                )
            )
        await notification_service.shutdown()
        await ledger_client.aclose()
        logger.info("main_shutdown_complete")


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    missing = settings.missing_required()
    if missing:
        logger.error(
            "main_missing_required_config",
            missing=missing,
            message="Create a .env file or export the variables listed.",
        )
        raise MissingRequiredConfigError(*missing)

    shutdown_event = asyncio.Event()
    _setup_signals(shutdown_event)
    await serve(Container(), settings, shutdown_event)


def main() -> None:
    asyncio.run(run())


__all__ = ["serve", "run", "main"]

if __name__ == "__main__":
    main()
