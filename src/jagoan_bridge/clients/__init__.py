"""External service clients (HTTP, ledger)."""

from jagoan_bridge.clients.http import AsyncHttpClient
from jagoan_bridge.clients.ledger_client import ILedgerClient
from jagoan_bridge.clients.notion import NotionLedgerClient, build_notion_http_client

__all__ = [
    "AsyncHttpClient",
    "ILedgerClient",
    "NotionLedgerClient",
    "build_notion_http_client",
]
