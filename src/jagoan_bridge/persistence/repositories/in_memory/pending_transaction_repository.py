# -*- coding: utf-8 -*-
"""In-memory pending transaction repository (explicit FIFO deque)."""

from __future__ import annotations

import asyncio
from collections import deque
from datetime import datetime, timedelta
from decimal import Decimal

from jagoan_bridge.models.pending_transaction import PendingTransaction
from jagoan_bridge.persistence.repositories.interfaces.pending_transaction_repository import (
    IPendingTransactionRepository,
)


class InMemoryPendingTransactionRepository(IPendingTransactionRepository):
    """In-memory implementation of IPendingTransactionRepository.

    Order lives in the deque (head = oldest); the dict only indexes by id.
    State is process-lifetime: a restart drops every pending entry.
    """

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._queue: deque[PendingTransaction] = deque()
        self._by_id: dict[str, PendingTransaction] = {}
        self._lock = asyncio.Lock()

    async def put(self, amount: Decimal, now: datetime) -> PendingTransaction:
        """Append a new transaction received at now."""
        transaction = PendingTransaction.create(amount, received_at=now)
        async with self._lock:
            while transaction.id in self._by_id:
                transaction = PendingTransaction.create(amount, received_at=now)
            self._queue.append(transaction)
            self._by_id[transaction.id] = transaction
        return transaction

    async def pop_oldest(self) -> PendingTransaction | None:
        """Remove and return the head of the queue."""
        async with self._lock:
            if not self._queue:
                return None
            transaction = self._queue.popleft()
            del self._by_id[transaction.id]
            return transaction

    async def restore(self, transaction: PendingTransaction) -> None:
        """Push back at the head. No-op if the id is already stored."""
        async with self._lock:
            if transaction.id in self._by_id:
                return
            self._queue.appendleft(transaction)
            self._by_id[transaction.id] = transaction

    async def delete(self, transaction_id: str) -> bool:
        """Remove by id."""
        async with self._lock:
            transaction = self._by_id.pop(transaction_id, None)
            if transaction is None:
                return False
            self._queue.remove(transaction)
            return True

    async def sweep_expired(self, now: datetime, ttl: timedelta) -> list[PendingTransaction]:
        """Drop every expired entry, wherever it sits in the queue."""
        async with self._lock:
            expired = [t for t in self._queue if t.is_expired(now, ttl)]
            if not expired:
                return []
            self._queue = deque(t for t in self._queue if not t.is_expired(now, ttl))
            for t in expired:
                del self._by_id[t.id]
            return expired

    async def size(self) -> int:
        """Number of stored entries."""
        async with self._lock:
            return len(self._queue)
