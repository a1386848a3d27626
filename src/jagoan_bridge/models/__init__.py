# -*- coding: utf-8 -*-
"""Domain models."""

from jagoan_bridge.models.amount_observation import AmountObservation
from jagoan_bridge.models.ledger_entry import LedgerEntry
from jagoan_bridge.models.pending_transaction import PendingTransaction, new_transaction_id

__all__ = [
    "AmountObservation",
    "LedgerEntry",
    "PendingTransaction",
    "new_transaction_id",
]
