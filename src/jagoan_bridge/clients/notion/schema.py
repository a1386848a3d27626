"""Notion page property payloads for ledger records."""

from __future__ import annotations

from typing import Any

from jagoan_bridge.models.ledger_entry import LedgerEntry

NAME_PROPERTY = "Name"
AMOUNT_PROPERTY = "Amount"
DATE_PROPERTY = "Date"


def _number(value: Any) -> int | float:
    """Notion numbers are JSON numbers; keep whole amounts as int."""
    if value == int(value):
        return int(value)
    return float(value)


def build_page_properties(entry: LedgerEntry, *, category_property: str) -> dict[str, Any]:
    """Map a LedgerEntry to Notion database properties.

    The category relation is only included when the entry carries a reference.
    """
    properties: dict[str, Any] = {
        NAME_PROPERTY: {"title": [{"text": {"content": entry.name}}]},
        AMOUNT_PROPERTY: {"number": _number(entry.amount)},
        DATE_PROPERTY: {"date": {"start": entry.date.isoformat()}},
    }
    if entry.category:
        properties[category_property] = {"relation": [{"id": entry.category}]}
    return properties


def build_create_page_body(
    entry: LedgerEntry,
    *,
    database_id: str,
    category_property: str,
) -> dict[str, Any]:
    """Full body for POST /pages."""
    return {
        "parent": {"database_id": database_id},
        "properties": build_page_properties(entry, category_property=category_property),
    }


def summarize_properties(database: dict[str, Any]) -> dict[str, str]:
    """Return {property_name: property_type} from a GET /databases/{id} response."""
    raw = database.get("properties")
    if not isinstance(raw, dict):
        return {}
    summary: dict[str, str] = {}
    for name, prop in raw.items():
        prop_type = prop.get("type") if isinstance(prop, dict) else None
        summary[str(name)] = str(prop_type or "unknown")
    return summary
