"""Validation helpers for identities."""

from __future__ import annotations


def mask_identity(identity: str | None) -> str:
    """Return a masked chat identity for logging (e.g. 12***89)."""
    if not identity:
        return "***"
    s = str(identity).strip()
    if len(s) <= 4:
        return "***"
    return f"{s[:2]}***{s[-2:]}"


def same_identity(a: str | int | None, b: str | int | None) -> bool:
    """Compare two chat identities as trimmed strings. None never matches."""
    if a is None or b is None:
        return False
    left = str(a).strip()
    return bool(left) and left == str(b).strip()
