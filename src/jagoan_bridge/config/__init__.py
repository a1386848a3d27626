"""Configuration subpackage."""

from jagoan_bridge.config.config import (
    AppSettings,
    ConsoleNotificationSettings,
    CorrelationSettings,
    LoggingSettings,
    NotionSettings,
    ServerSettings,
    Settings,
    TelegramNotificationSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "ConsoleNotificationSettings",
    "CorrelationSettings",
    "LoggingSettings",
    "NotionSettings",
    "ServerSettings",
    "Settings",
    "TelegramNotificationSettings",
    "get_settings",
]
