"""Logging setup."""

from jagoan_bridge.logging.config import configure_logging

__all__ = ["configure_logging"]
