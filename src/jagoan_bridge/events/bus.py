"""Process-wide bubus EventBus carrying transaction lifecycle events."""

from __future__ import annotations

from bubus import EventBus  # type: ignore[import-untyped]

BUS_NAME = "JagoanBridge"

_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Shared bus, created lazily. History is kept short: events are only notification triggers."""
    global _bus
    if _bus is None:
        _bus = EventBus(name=BUS_NAME, max_history_size=50, wal_path=None)
    return _bus


def set_event_bus(bus: EventBus | None) -> None:
    """Replace the shared bus; None drops it so the next get_event_bus() builds a new one."""
    global _bus
    _bus = bus
