"""Inbound chat adapters."""

from jagoan_bridge.chat.telegram_listener import TelegramReplyListener

__all__ = ["TelegramReplyListener"]
