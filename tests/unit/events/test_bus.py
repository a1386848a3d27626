# -*- coding: utf-8 -*-
"""Unit tests for the shared event bus accessor."""

from __future__ import annotations

from typing import Any

from jagoan_bridge.events.bus import get_event_bus, set_event_bus


def test_set_event_bus_overrides_shared_instance(event_bus: Any) -> None:
    set_event_bus(event_bus)
    try:
        assert get_event_bus() is event_bus
    finally:
        set_event_bus(None)
