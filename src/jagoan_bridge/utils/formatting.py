"""Display helpers for amounts and dates (Indonesian conventions)."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any


def format_idr(value: Any) -> str:
    """Format an amount as Rupiah: 'Rp 50.000', 'Rp 1.250,5'.

    Thousands use '.', decimals use ','. Whole amounts print without decimals.
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (ArithmeticError, ValueError):
        return str(value)
    if not amount.is_finite():
        return str(value)
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    integral = int(amount)
    fraction = amount - integral
    text = f"{integral:,}".replace(",", ".")
    if fraction:
        digits = format(fraction.normalize(), "f").split(".", 1)[1]
        text = f"{text},{digits}"
    return f"{sign}Rp {text}"


def format_date(value: date) -> str:
    """Format a calendar date as dd/mm/yyyy."""
    return value.strftime("%d/%m/%Y")
