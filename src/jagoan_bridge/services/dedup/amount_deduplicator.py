# -*- coding: utf-8 -*-
"""AmountDeduplicator: suppress repeats of the same amount within a trailing window.

The sensor sometimes delivers the same notification twice. Matching is exact
(Decimal equality) so two genuinely distinct transactions of the same amount
inside the window collapse into one; that is a known limitation.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

import structlog

from jagoan_bridge.models.amount_observation import AmountObservation


@dataclass(frozen=True, slots=True)
class DedupWindowEntry:
    """Amount seen at inserted_at. At most one live entry per amount."""

    amount: Decimal
    inserted_at: datetime


@dataclass(frozen=True, slots=True)
class DedupResult:
    """Outcome of observe()."""

    is_duplicate: bool
    window_size: int
    """Live entries after the observation."""


class AmountDeduplicator:
    """In-process dedup window. Resets on restart; knows nothing about the pending store."""

    def __init__(
        self,
        window: timedelta = timedelta(milliseconds=5000),
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the deduplicator.

        Args:
            window: Trailing window; entries older than this are pruned.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        if window < timedelta(0):
            raise ValueError("window must not be negative")
        self._window = window
        self._entries: list[DedupWindowEntry] = []
        self._lock = threading.Lock()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @classmethod
    def from_millis(cls, window_ms: int, **kwargs: Any) -> AmountDeduplicator:
        """Build from a window expressed in milliseconds."""
        return cls(timedelta(milliseconds=window_ms), **kwargs)

    @property
    def window(self) -> timedelta:
        return self._window

    def observe(self, amount: Decimal, now: datetime) -> DedupResult:
        """Prune stale entries, then report whether amount is a repeat; record it if not."""
        with self._lock:
            self._entries = [e for e in self._entries if now - e.inserted_at <= self._window]
            if any(e.amount == amount for e in self._entries):
                self._logger.debug(
                    "dedup_amount_suppressed",
                    amount=str(amount),
                    window_ms=int(self._window.total_seconds() * 1000),
                )
                return DedupResult(is_duplicate=True, window_size=len(self._entries))
            self._entries.append(DedupWindowEntry(amount=amount, inserted_at=now))
            return DedupResult(is_duplicate=False, window_size=len(self._entries))

    def check(self, observation: AmountObservation) -> DedupResult:
        """observe() for a sensor observation."""
        return self.observe(observation.amount, observation.observed_at)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
