# -*- coding: utf-8 -*-
"""Unit tests for display formatting and identity helpers."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from jagoan_bridge.utils.formatting import format_date, format_idr
from jagoan_bridge.utils.validation import mask_identity, same_identity


def test_format_idr_whole_amount() -> None:
    assert format_idr(Decimal("50000")) == "Rp 50.000"
    assert format_idr(1250000) == "Rp 1.250.000"
    assert format_idr("999") == "Rp 999"


def test_format_idr_fraction_uses_comma() -> None:
    assert format_idr(Decimal("1250.5")) == "Rp 1.250,5"


def test_format_idr_negative() -> None:
    assert format_idr(Decimal("-5000")) == "-Rp 5.000"


def test_format_idr_falls_back_for_non_numbers() -> None:
    assert format_idr("abc") == "abc"


def test_format_date() -> None:
    assert format_date(date(2026, 2, 3)) == "03/02/2026"


def test_mask_identity() -> None:
    assert mask_identity("123456789") == "12***89"
    assert mask_identity("1234") == "***"
    assert mask_identity(None) == "***"


def test_same_identity() -> None:
    assert same_identity("123", 123)
    assert same_identity(" 123 ", "123")
    assert not same_identity("123", "124")
    assert not same_identity(None, "123")
    assert not same_identity("", "")
