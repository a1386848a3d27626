# -*- coding: utf-8 -*-
"""Application services."""

from jagoan_bridge.services.correlation import (
    AmountEventResult,
    AmountEventStatus,
    CorrelationEngine,
    ReplyResult,
    ReplyStatus,
)
from jagoan_bridge.services.dedup import AmountDeduplicator, DedupResult
from jagoan_bridge.services.notifications import PendingTransactionNotifier

__all__ = [
    "AmountDeduplicator",
    "AmountEventResult",
    "AmountEventStatus",
    "CorrelationEngine",
    "DedupResult",
    "PendingTransactionNotifier",
    "ReplyResult",
    "ReplyStatus",
]
