# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/, etc."""

from jagoan_bridge.persistence.repositories.interfaces.pending_transaction_repository import (
    IPendingTransactionRepository,
)

__all__ = ["IPendingTransactionRepository"]
