# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector).

One container per process is the service context: the deduplicator, the
pending repository and the engine are singletons created once at startup
and injected into the HTTP handlers and the chat listener.
"""

from __future__ import annotations

from datetime import timedelta
from zoneinfo import ZoneInfo

from aiohttp import web
from bubus import EventBus  # type: ignore[import-untyped]
from dependency_injector import containers, providers

from jagoan_bridge.api import WebServer, create_app
from jagoan_bridge.chat import TelegramReplyListener
from jagoan_bridge.clients.ledger_client import ILedgerClient
from jagoan_bridge.clients.notion import NotionLedgerClient, build_notion_http_client
from jagoan_bridge.config import Settings, get_settings
from jagoan_bridge.events.bus import get_event_bus
from jagoan_bridge.notifications.notification_manager import NotificationService
from jagoan_bridge.notifications.strategies.base import BaseNotificationStrategy
from jagoan_bridge.notifications.strategies.console import ConsoleNotifier
from jagoan_bridge.notifications.strategies.telegram import TelegramNotifier
from jagoan_bridge.notifications.stylers import EventNotificationStyler
from jagoan_bridge.persistence.repositories.in_memory import InMemoryPendingTransactionRepository
from jagoan_bridge.persistence.repositories.interfaces import IPendingTransactionRepository
from jagoan_bridge.services.correlation import CorrelationEngine
from jagoan_bridge.services.dedup import AmountDeduplicator
from jagoan_bridge.services.notifications import PendingTransactionNotifier


def _build_notification_notifiers(
    settings: Settings,
    styler: EventNotificationStyler,
) -> list[BaseNotificationStrategy]:
    notifiers: list[BaseNotificationStrategy] = []
    if settings.console.enabled:
        notifiers.append(ConsoleNotifier(settings=settings, styler=styler))
    if settings.telegram.enabled and settings.telegram.api_key and settings.telegram.chat_id:
        notifiers.append(TelegramNotifier(settings=settings, styler=styler))
    return notifiers


def _build_deduplicator(settings: Settings) -> AmountDeduplicator:
    return AmountDeduplicator.from_millis(settings.correlation.dedup_window_ms)


def _build_correlation_engine(
    settings: Settings,
    deduplicator: AmountDeduplicator,
    pending_repository: IPendingTransactionRepository,
    ledger_client: ILedgerClient,
    event_bus: EventBus,
) -> CorrelationEngine:
    correlation = settings.correlation
    return CorrelationEngine(
        deduplicator=deduplicator,
        pending_repository=pending_repository,
        ledger_client=ledger_client,
        authorized_identity=str(settings.telegram.chat_id or ""),
        pending_ttl=timedelta(seconds=correlation.pending_ttl_seconds),
        timezone=ZoneInfo(settings.app.timezone),
        category=settings.notion.category_reference,
        restore_on_ledger_failure=correlation.restore_on_ledger_failure,
        event_bus=event_bus,
    )


def _build_web_server(settings: Settings, app: web.Application) -> WebServer:
    return WebServer(app, host=settings.server.host, port=settings.server.port)


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, stores, engine, chat and HTTP adapters."""

    config = providers.Callable(get_settings)

    event_bus = providers.Callable(get_event_bus)

    notification_styler = providers.Singleton(EventNotificationStyler)

    notification_service = providers.Singleton(
        NotificationService,
        notifiers=providers.Callable(_build_notification_notifiers, config, notification_styler),
    )

    deduplicator = providers.Singleton(_build_deduplicator, config)

    pending_repository = providers.Singleton(InMemoryPendingTransactionRepository)

    notion_http_client = providers.Singleton(build_notion_http_client, config)

    ledger_client = providers.Singleton(
        NotionLedgerClient,
        http_client=notion_http_client,
        settings=config,
    )

    correlation_engine = providers.Singleton(
        _build_correlation_engine,
        config,
        deduplicator,
        pending_repository,
        ledger_client,
        event_bus,
    )

    pending_transaction_notifier = providers.Singleton(
        PendingTransactionNotifier,
        notification_service=notification_service,
        event_bus=event_bus,
    )

    web_app = providers.Singleton(create_app, correlation_engine)

    web_server = providers.Singleton(_build_web_server, config, web_app)

    telegram_listener = providers.Singleton(
        TelegramReplyListener,
        settings=config,
        engine=correlation_engine,
        styler=notification_styler,
    )
