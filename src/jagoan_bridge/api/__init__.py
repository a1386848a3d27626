"""Inbound HTTP surface (sensor webhooks, health)."""

from jagoan_bridge.api.app import ENGINE_KEY, WebhookHandlers, create_app
from jagoan_bridge.api.schemas import (
    EventDirection,
    TransactionEventPayload,
    parse_notification_event,
    parse_transaction_event,
)
from jagoan_bridge.api.server import WebServer

__all__ = [
    "ENGINE_KEY",
    "EventDirection",
    "TransactionEventPayload",
    "WebServer",
    "WebhookHandlers",
    "create_app",
    "parse_notification_event",
    "parse_transaction_event",
]
