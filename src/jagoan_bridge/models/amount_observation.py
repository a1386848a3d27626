"""AmountObservation: one amount reported by the sensor."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class AmountObservation:
    """Ephemeral sensor observation, consumed by the deduplicator and then discarded."""

    amount: Decimal
    observed_at: datetime
