"""Exceptions subpackage."""

from jagoan_bridge.exceptions.exceptions import (
    ExternalServiceError,
    InvalidAmountError,
    InvalidPayloadError,
    JagoanError,
    LedgerWriteError,
    MissingRequiredConfigError,
    RateLimitError,
)

__all__ = [
    "ExternalServiceError",
    "InvalidAmountError",
    "InvalidPayloadError",
    "JagoanError",
    "LedgerWriteError",
    "MissingRequiredConfigError",
    "RateLimitError",
]
