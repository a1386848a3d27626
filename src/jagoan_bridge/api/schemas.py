"""Inbound webhook payloads."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any

from jagoan_bridge.exceptions import InvalidAmountError, InvalidPayloadError
from jagoan_bridge.utils.amount import ensure_positive, extract_amount, parse_amount


class EventDirection(StrEnum):
    """Money direction reported by the sensor. Only outgoing money needs classifying."""

    OUTGOING = "OUTGOING"
    INCOMING = "INCOMING"


@dataclass(frozen=True, slots=True)
class TransactionEventPayload:
    """Validated sensor event."""

    amount: Decimal
    direction: EventDirection = EventDirection.OUTGOING


def _require_object(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise InvalidPayloadError("Request body must be a JSON object.")
    return body


def _parse_direction(value: Any) -> EventDirection:
    if value is None:
        return EventDirection.OUTGOING
    if not isinstance(value, str):
        raise InvalidPayloadError("type must be OUTGOING or INCOMING.")
    try:
        return EventDirection(value.strip().upper())
    except ValueError as e:
        raise InvalidPayloadError("type must be OUTGOING or INCOMING.") from e


def parse_transaction_event(body: Any) -> TransactionEventPayload:
    """Validate {"amount": <number>, "type": "OUTGOING"|"INCOMING"?}.

    Raises:
        InvalidPayloadError: body is not an object or type is unknown.
        InvalidAmountError: amount is missing, not a number, or not positive.
    """
    data = _require_object(body)
    return TransactionEventPayload(
        amount=parse_amount(data.get("amount")),
        direction=_parse_direction(data.get("type")),
    )


def parse_notification_event(body: Any) -> TransactionEventPayload:
    """Validate {"text": "<notification text>", "type"?} and extract the amount.

    Raises:
        InvalidPayloadError: body is not an object, text is missing, or type is unknown.
        InvalidAmountError: no positive amount found in the text.
    """
    data = _require_object(body)
    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        raise InvalidPayloadError("text must be a non-empty string.")
    amount = extract_amount(text)
    if amount is None:
        raise InvalidAmountError("No amount found in notification text.")
    return TransactionEventPayload(
        amount=ensure_positive(amount),
        direction=_parse_direction(data.get("type")),
    )
