"""Amount deduplication."""

from jagoan_bridge.services.dedup.amount_deduplicator import (
    AmountDeduplicator,
    DedupResult,
    DedupWindowEntry,
)

__all__ = ["AmountDeduplicator", "DedupResult", "DedupWindowEntry"]
