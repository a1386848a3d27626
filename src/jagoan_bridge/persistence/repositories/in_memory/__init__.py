"""In-memory repository implementations."""

from jagoan_bridge.persistence.repositories.in_memory.pending_transaction_repository import (
    InMemoryPendingTransactionRepository,
)

__all__ = ["InMemoryPendingTransactionRepository"]
