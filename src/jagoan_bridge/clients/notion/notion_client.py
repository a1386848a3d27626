# -*- coding: utf-8 -*-
"""Notion ledger client (REST API over AsyncHttpClient)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from jagoan_bridge.clients.http import AsyncHttpClient
from jagoan_bridge.clients.ledger_client import ILedgerClient
from jagoan_bridge.clients.notion.schema import (
    build_create_page_body,
    summarize_properties,
)
from jagoan_bridge.exceptions import ExternalServiceError, LedgerWriteError
from jagoan_bridge.models.ledger_entry import LedgerEntry

if TYPE_CHECKING:
    from jagoan_bridge.config import Settings


def build_notion_http_client(settings: "Settings") -> AsyncHttpClient:
    """AsyncHttpClient preconfigured with Notion auth and version headers."""
    cfg = settings.notion
    return AsyncHttpClient(
        timeout_seconds=cfg.timeout_seconds,
        max_retries=cfg.max_retries,
        headers={
            "Authorization": f"Bearer {cfg.api_key or ''}",
            "Notion-Version": cfg.api_version,
            "Content-Type": "application/json",
        },
        logger_name="NotionHttpClient",
    )


class NotionLedgerClient(ILedgerClient):
    """Create ledger records as pages in a Notion database."""

    def __init__(
        self,
        http_client: AsyncHttpClient,
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: HTTP client carrying Notion auth headers.
            settings: Application settings (notion section).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        cfg = settings.notion
        if not cfg.database_id:
            raise ValueError("NotionLedgerClient requires notion.database_id.")
        self._http = http_client
        self._base_url = cfg.api_base_url.rstrip("/")
        self._database_id = cfg.database_id
        self._category_property = cfg.category_property
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def create_record(self, entry: LedgerEntry) -> str:
        """POST /pages. Returns the new page id.

        Raises:
            LedgerWriteError: Transport error, non-2xx response, or a response without id.
        """
        body = build_create_page_body(
            entry,
            database_id=self._database_id,
            category_property=self._category_property,
        )
        try:
            response = await self._http.post(f"{self._base_url}/pages", json=body)
        except ExternalServiceError as e:
            self._logger.error(
                "notion_create_page_failed",
                http_status_code=e.status_code,
                notion_error_body=e.body,
            )
            raise LedgerWriteError(f"Notion page creation failed: {e}", cause=e) from e

        page_id = response.get("id") if isinstance(response, dict) else None
        if not page_id:
            raise LedgerWriteError("Notion response did not include a page id")
        self._logger.debug(
            "notion_page_created",
            page_id=page_id,
            has_category=entry.category is not None,
        )
        return str(page_id)

    async def describe_database(self) -> dict[str, str]:
        """GET /databases/{id}. Returns {property_name: property_type}.

        Raises:
            ExternalServiceError: The database could not be read.
        """
        data = await self._http.get(f"{self._base_url}/databases/{self._database_id}")
        return summarize_properties(data if isinstance(data, dict) else {})

    async def aclose(self) -> None:
        await self._http.aclose()
