"""Amount parsing: JSON payload values and free-form notification text."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from jagoan_bridge.exceptions import InvalidAmountError

# Currency marker, optional whitespace, then digits with '.'/',' separators.
_AMOUNT_PATTERN = re.compile(r"(IDR|Rp)\s*([\d.,]+)")


def extract_amount(text: str | None) -> Decimal | None:
    """Return the first currency amount found in text, or None.

    Both '.' and ',' are treated as thousands separators and stripped
    ("IDR 50.000" and "Rp 50,000" both give 50000).
    """
    if not text:
        return None
    match = _AMOUNT_PATTERN.search(text)
    if match is None:
        return None
    cleaned = match.group(2).replace(".", "").replace(",", "")
    if not cleaned:
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def parse_amount(value: Any) -> Decimal:
    """Validate a JSON amount: a finite number greater than zero.

    Raises:
        InvalidAmountError: missing, boolean, string, non-finite, zero or negative.
    """
    if value is None:
        raise InvalidAmountError("Amount is required.")
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidAmountError("Amount must be a number.")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidAmountError("Amount must be a number.") from e
    return ensure_positive(amount)


def ensure_positive(amount: Decimal) -> Decimal:
    """Return amount unchanged if finite and > 0, else raise InvalidAmountError."""
    if not amount.is_finite():
        raise InvalidAmountError("Amount must be a finite number.")
    if amount <= 0:
        raise InvalidAmountError("Amount must be greater than zero.")
    return amount
