"""Persistence layer (repositories, etc.)."""

from jagoan_bridge.persistence.repositories import (
    IPendingTransactionRepository,
    InMemoryPendingTransactionRepository,
)

__all__ = [
    "IPendingTransactionRepository",
    "InMemoryPendingTransactionRepository",
]
