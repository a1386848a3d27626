# -*- coding: utf-8 -*-
"""Utility modules."""

from jagoan_bridge.utils.amount import ensure_positive, extract_amount, parse_amount
from jagoan_bridge.utils.formatting import format_date, format_idr
from jagoan_bridge.utils.validation import mask_identity, same_identity

__all__ = [
    "ensure_positive",
    "extract_amount",
    "format_date",
    "format_idr",
    "mask_identity",
    "parse_amount",
    "same_identity",
]
