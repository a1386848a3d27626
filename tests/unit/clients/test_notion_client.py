# -*- coding: utf-8 -*-
"""Unit tests for the Notion ledger client and page schema."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import pytest

from jagoan_bridge.clients.notion.notion_client import NotionLedgerClient
from jagoan_bridge.clients.notion.schema import (
    build_create_page_body,
    build_page_properties,
    summarize_properties,
)
from jagoan_bridge.exceptions import ExternalServiceError, LedgerWriteError
from jagoan_bridge.models.ledger_entry import LedgerEntry


def _settings(**notion: Any) -> Any:
    cfg = {
        "database_id": "db-1",
        "api_base_url": "https://api.notion.com/v1/",
        "category_property": "Category",
    }
    cfg.update(notion)
    return SimpleNamespace(notion=SimpleNamespace(**cfg))


def _http(**methods: Any) -> Any:
    return SimpleNamespace(
        post=methods.get("post", AsyncMock(return_value={"id": "page-1"})),
        get=methods.get("get", AsyncMock(return_value={})),
        aclose=AsyncMock(),
    )


@pytest.fixture
def entry() -> LedgerEntry:
    return LedgerEntry(name="Lunch", amount=Decimal("50000"), date=date(2026, 2, 13))


def test_page_properties_without_category(entry: LedgerEntry) -> None:
    properties = build_page_properties(entry, category_property="Category")

    assert properties == {
        "Name": {"title": [{"text": {"content": "Lunch"}}]},
        "Amount": {"number": 50000},
        "Date": {"date": {"start": "2026-02-13"}},
    }


def test_page_properties_with_category(entry: LedgerEntry) -> None:
    categorized = LedgerEntry(name=entry.name, amount=entry.amount, date=entry.date, category="cat-1")

    properties = build_page_properties(categorized, category_property="Kategori")

    assert properties["Kategori"] == {"relation": [{"id": "cat-1"}]}


def test_fractional_amount_is_float() -> None:
    entry = LedgerEntry(name="Snack", amount=Decimal("1250.5"), date=date(2026, 2, 13))
    assert build_page_properties(entry, category_property="Category")["Amount"] == {"number": 1250.5}


def test_create_page_body_has_parent(entry: LedgerEntry) -> None:
    body = build_create_page_body(entry, database_id="db-1", category_property="Category")
    assert body["parent"] == {"database_id": "db-1"}
    assert "Name" in body["properties"]


def test_summarize_properties() -> None:
    database = {"properties": {"Name": {"type": "title"}, "Category": {"type": "relation"}, "Odd": "x"}}
    assert summarize_properties(database) == {"Name": "title", "Category": "relation", "Odd": "unknown"}
    assert summarize_properties({}) == {}


async def test_create_record_posts_page(entry: LedgerEntry) -> None:
    http = _http()
    client = NotionLedgerClient(cast(Any, http), _settings())

    page_id = await client.create_record(entry)

    assert page_id == "page-1"
    http.post.assert_awaited_once()
    url = http.post.await_args.args[0]
    assert url == "https://api.notion.com/v1/pages"
    assert http.post.await_args.kwargs["json"]["parent"] == {"database_id": "db-1"}


async def test_create_record_wraps_http_failure(entry: LedgerEntry) -> None:
    http = _http(post=AsyncMock(side_effect=ExternalServiceError("boom", status_code=400, body="{}")))
    client = NotionLedgerClient(cast(Any, http), _settings())

    with pytest.raises(LedgerWriteError) as exc_info:
        await client.create_record(entry)

    assert isinstance(exc_info.value.cause, ExternalServiceError)


async def test_create_record_requires_page_id(entry: LedgerEntry) -> None:
    http = _http(post=AsyncMock(return_value={"object": "page"}))
    client = NotionLedgerClient(cast(Any, http), _settings())

    with pytest.raises(LedgerWriteError):
        await client.create_record(entry)


async def test_describe_database_summarizes_properties() -> None:
    http = _http(get=AsyncMock(return_value={"properties": {"Amount": {"type": "number"}}}))
    client = NotionLedgerClient(cast(Any, http), _settings())

    assert await client.describe_database() == {"Amount": "number"}
    http.get.assert_awaited_once_with("https://api.notion.com/v1/databases/db-1")


async def test_aclose_closes_http_client() -> None:
    http = _http()
    client = NotionLedgerClient(cast(Any, http), _settings())
    await client.aclose()
    http.aclose.assert_awaited_once()


def test_database_id_required() -> None:
    with pytest.raises(ValueError):
        NotionLedgerClient(cast(Any, _http()), _settings(database_id=None))
