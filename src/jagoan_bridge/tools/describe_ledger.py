# -*- coding: utf-8 -*-
"""Print the ledger database properties (name and type).

Useful to find the relation property name for NOTION__CATEGORY_PROPERTY.

Run with: python -m jagoan_bridge.tools.describe_ledger
"""

from __future__ import annotations

import asyncio
import sys

from jagoan_bridge.clients.notion import NotionLedgerClient, build_notion_http_client
from jagoan_bridge.config import get_settings
from jagoan_bridge.exceptions import ExternalServiceError, MissingRequiredConfigError
from jagoan_bridge.logging.config import configure_logging


def format_properties(properties: dict[str, str]) -> str:
    """One '- "Name" (type)' line per property, sorted by name."""
    return "\n".join(f'- "{name}" ({kind})' for name, kind in sorted(properties.items()))


async def describe() -> dict[str, str]:
    settings = get_settings()
    missing = [
        name
        for name in ("NOTION__API_KEY", "NOTION__DATABASE_ID")
        if name in settings.missing_required()
    ]
    if missing:
        raise MissingRequiredConfigError(*missing)
    client = NotionLedgerClient(build_notion_http_client(settings), settings)
    try:
        return await client.describe_database()
    finally:
        await client.aclose()


def main() -> None:
    configure_logging()
    try:
        properties = asyncio.run(describe())
    except (MissingRequiredConfigError, ExternalServiceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print("Database properties:\n")
    print(format_properties(properties))
    relations = [name for name, kind in properties.items() if kind == "relation"]
    if relations:
        print(f"\nRelation properties usable as category: {', '.join(sorted(relations))}")


if __name__ == "__main__":
    main()
