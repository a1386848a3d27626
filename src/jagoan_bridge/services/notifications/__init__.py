"""Event-driven notifiers."""

from jagoan_bridge.services.notifications.pending_transaction_notifier import (
    PendingTransactionNotifier,
)

__all__ = ["PendingTransactionNotifier"]
