"""Notification subsystem."""

from jagoan_bridge.notifications.notification_manager import NotificationService
from jagoan_bridge.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from jagoan_bridge.notifications.stylers import EventNotificationStyler
from jagoan_bridge.notifications.types import NotificationMessage, NotificationStyler

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "EventNotificationStyler",
    "NotificationMessage",
    "NotificationService",
    "NotificationStyler",
    "TelegramNotifier",
]
