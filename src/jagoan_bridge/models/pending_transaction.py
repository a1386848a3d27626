"""PendingTransaction: an amount observation awaiting human classification.

Lives in the pending store until it is resolved by a reply or expires after the TTL.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal


def new_transaction_id(now: datetime) -> str:
    """Return a process-unique id: millisecond timestamp plus random suffix."""
    millis = int(now.timestamp() * 1000)
    return f"txn_{millis}_{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True, slots=True)
class PendingTransaction:
    """Unconfirmed transaction held in the pending store.

    Identity: id. received_at drives FIFO order and expiry.
    """

    id: str
    """Opaque unique id (txn_<millis>_<random>)."""
    amount: Decimal
    """Positive transaction amount."""
    received_at: datetime
    """When the non-duplicate observation was accepted."""

    @classmethod
    def create(
        cls,
        amount: Decimal,
        *,
        received_at: datetime | None = None,
        id: str | None = None,
    ) -> PendingTransaction:
        """Create a new pending transaction with a fresh id."""
        if amount <= 0:
            raise ValueError("amount must be positive")
        received_at = received_at or datetime.now(UTC)
        return cls(
            id=id or new_transaction_id(received_at),
            amount=amount,
            received_at=received_at,
        )

    def age(self, now: datetime) -> timedelta:
        """Time elapsed since the transaction was received."""
        return now - self.received_at

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        """True when the age strictly exceeds ttl."""
        return self.age(now) > ttl
