"""Transaction lifecycle events (emitted by CorrelationEngine)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from bubus import BaseEvent  # type: ignore[import-untyped]


class TransactionPendingEvent(BaseEvent[None]):
    """Emitted after a non-duplicate amount is stored as pending.

    Handled by PendingTransactionNotifier, which asks the human to classify it.
    """

    transaction_id: str
    amount: Decimal
    received_at: datetime
    pending_count: int
    """Pending entries after this one was stored."""
