"""Notion ledger client."""

from jagoan_bridge.clients.notion.notion_client import (
    NotionLedgerClient,
    build_notion_http_client,
)
from jagoan_bridge.clients.notion.schema import (
    build_create_page_body,
    build_page_properties,
    summarize_properties,
)

__all__ = [
    "NotionLedgerClient",
    "build_create_page_body",
    "build_notion_http_client",
    "build_page_properties",
    "summarize_properties",
]
