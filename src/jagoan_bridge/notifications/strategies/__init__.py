"""Notification strategies."""

from jagoan_bridge.notifications.strategies.base import BaseNotificationStrategy
from jagoan_bridge.notifications.strategies.console import ConsoleNotifier
from jagoan_bridge.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]
