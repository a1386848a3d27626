"""Jagoan bridge: bank notification amounts -> chat confirmation -> Notion ledger."""

from jagoan_bridge.config import get_settings
from jagoan_bridge.di import Container
from jagoan_bridge.services import AmountDeduplicator, CorrelationEngine

__version__ = "0.1.0"
__all__ = [
    "AmountDeduplicator",
    "Container",
    "CorrelationEngine",
    "get_settings",
]
