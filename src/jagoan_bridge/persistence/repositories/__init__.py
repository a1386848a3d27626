# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, etc.)."""

from jagoan_bridge.persistence.repositories.interfaces import IPendingTransactionRepository
from jagoan_bridge.persistence.repositories.in_memory import InMemoryPendingTransactionRepository

__all__ = [
    "IPendingTransactionRepository",
    "InMemoryPendingTransactionRepository",
]
