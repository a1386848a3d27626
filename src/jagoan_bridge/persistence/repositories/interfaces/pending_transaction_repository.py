"""Abstract interface for pending transaction storage (in-memory, Redis, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from decimal import Decimal

from jagoan_bridge.models.pending_transaction import PendingTransaction


class IPendingTransactionRepository(ABC):
    """FIFO mailbox of unconfirmed transactions with lazy TTL expiry.

    Every operation is atomic with respect to the others: concurrent put and
    pop_oldest never reorder entries or hand out the same entry twice.
    """

    @abstractmethod
    async def put(self, amount: Decimal, now: datetime) -> PendingTransaction:
        """Store a new transaction received at now (appended last). Returns it with its fresh id."""
        ...

    @abstractmethod
    async def pop_oldest(self) -> PendingTransaction | None:
        """Remove and return the earliest-inserted entry, or None if empty."""
        ...

    @abstractmethod
    async def restore(self, transaction: PendingTransaction) -> None:
        """Put a previously popped transaction back at the head of the queue."""
        ...

    @abstractmethod
    async def delete(self, transaction_id: str) -> bool:
        """Remove by id. Returns True if an entry was removed."""
        ...

    @abstractmethod
    async def sweep_expired(self, now: datetime, ttl: timedelta) -> list[PendingTransaction]:
        """Remove every entry with now - received_at > ttl. Returns the removed entries."""
        ...

    @abstractmethod
    async def size(self) -> int:
        """Number of stored entries."""
        ...
