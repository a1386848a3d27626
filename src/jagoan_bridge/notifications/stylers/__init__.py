"""Notification stylers."""

from jagoan_bridge.notifications.stylers.notification_styler import EventNotificationStyler

__all__ = ["EventNotificationStyler"]
