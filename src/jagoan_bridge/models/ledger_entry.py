"""LedgerEntry: the terminal artifact handed to the ledger collaborator."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Any


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """Confirmed, classified transaction. Write-only from the engine's point of view."""

    name: str
    """Free-text label (the human reply)."""
    amount: Decimal
    date: date
    """Calendar date of the confirmation, in the configured timezone."""
    category: str | None = None
    """Opaque category reference (e.g. a Notion page id)."""

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation (amount as string, date as ISO)."""
        data = asdict(self)
        data["amount"] = str(self.amount)
        data["date"] = self.date.isoformat()
        return data
