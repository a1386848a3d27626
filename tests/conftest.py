# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest

from jagoan_bridge.persistence.repositories.in_memory.pending_transaction_repository import (
    InMemoryPendingTransactionRepository,
)
from jagoan_bridge.services.correlation.correlation_engine import CorrelationEngine
from jagoan_bridge.services.dedup.amount_deduplicator import AmountDeduplicator

AUTHORIZED_CHAT_ID = "123456789"


class FakeEventBus:
    """Minimal event bus fake: records subscriptions and dispatched events."""

    def __init__(self) -> None:
        self.handlers: dict[str, list[Any]] = {}
        self.dispatched: list[Any] = []

    def on(self, event_type: type[Any], handler: Any) -> None:
        key = event_type.__name__
        self.handlers.setdefault(key, []).append(handler)

    def dispatch(self, event: Any) -> Any:
        self.dispatched.append(event)
        return event


@pytest.fixture
def chat_id() -> str:
    """The single authorized chat identity."""
    return AUTHORIZED_CHAT_ID


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def D() -> Callable[[Any], Decimal]:
    """Decimal helper: D('1.23') -> Decimal('1.23')."""
    return lambda value: Decimal(str(value))


@pytest.fixture
def pending_repo() -> InMemoryPendingTransactionRepository:
    """Fresh in-memory pending repository per test."""
    return InMemoryPendingTransactionRepository()


@pytest.fixture
def deduplicator() -> AmountDeduplicator:
    """Deduplicator with the default 5 s window."""
    return AmountDeduplicator(timedelta(milliseconds=5000))


@pytest.fixture
def event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def ledger_client() -> Any:
    """Ledger collaborator whose create_record succeeds with a page id."""
    return SimpleNamespace(create_record=AsyncMock(return_value="page-1"), aclose=AsyncMock())


@pytest.fixture
def engine_factory(
    deduplicator: AmountDeduplicator,
    pending_repo: InMemoryPendingTransactionRepository,
    ledger_client: Any,
    event_bus: FakeEventBus,
    now_utc: datetime,
    chat_id: str,
) -> Callable[..., CorrelationEngine]:
    """Build CorrelationEngine with test collaborators and easy overrides."""

    def _build(**overrides: Any) -> CorrelationEngine:
        return CorrelationEngine(
            deduplicator=overrides.pop("deduplicator", deduplicator),
            pending_repository=overrides.pop("pending_repository", pending_repo),
            ledger_client=overrides.pop("ledger_client", ledger_client),
            authorized_identity=overrides.pop("authorized_identity", chat_id),
            pending_ttl=overrides.pop("pending_ttl", timedelta(hours=1)),
            timezone=overrides.pop("timezone", UTC),
            category=overrides.pop("category", None),
            restore_on_ledger_failure=overrides.pop("restore_on_ledger_failure", False),
            event_bus=overrides.pop("event_bus", event_bus),
            clock=overrides.pop("clock", lambda: now_utc),
        )

    return _build
