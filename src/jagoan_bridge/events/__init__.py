# -*- coding: utf-8 -*-
"""Event bus and event types."""

from jagoan_bridge.events.bus import get_event_bus, set_event_bus
from jagoan_bridge.events.transaction_events import TransactionPendingEvent

__all__ = ["get_event_bus", "set_event_bus", "TransactionPendingEvent"]
