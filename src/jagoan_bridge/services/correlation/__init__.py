# -*- coding: utf-8 -*-
"""Transaction correlation: amount events in, ledger records out."""

from jagoan_bridge.services.correlation.correlation_engine import (
    AmountEventResult,
    AmountEventStatus,
    CorrelationEngine,
    ReplyResult,
    ReplySink,
    ReplyStatus,
)

__all__ = [
    "AmountEventResult",
    "AmountEventStatus",
    "CorrelationEngine",
    "ReplyResult",
    "ReplySink",
    "ReplyStatus",
]
