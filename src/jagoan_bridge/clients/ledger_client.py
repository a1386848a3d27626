"""Ledger collaborator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jagoan_bridge.models.ledger_entry import LedgerEntry


class ILedgerClient(ABC):
    """Durable store of confirmed, classified transactions."""

    @abstractmethod
    async def create_record(self, entry: LedgerEntry) -> str:
        """Create a record and return its opaque id.

        Raises:
            LedgerWriteError: The record could not be created.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources. Default: nothing to release."""
        return None
