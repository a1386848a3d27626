"""Custom exceptions for the transaction bridge."""

from __future__ import annotations


class JagoanError(Exception):
    """Base exception for bridge errors."""

    pass


class MissingRequiredConfigError(JagoanError):
    """Raised when one or more required configuration values are missing."""

    def __init__(self, *names: str) -> None:
        super().__init__(f"Missing required configuration: {', '.join(names)}")
        self.names = names


class InvalidPayloadError(JagoanError, ValueError):
    """Raised when an inbound request body is malformed."""

    pass


class InvalidAmountError(InvalidPayloadError):
    """Raised when an inbound amount is missing, non-numeric, or not positive."""

    pass


class ExternalServiceError(JagoanError):
    """Raised when an HTTP request to an external service fails."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body
        self.cause = cause


class RateLimitError(ExternalServiceError):
    """Raised when the API returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class LedgerWriteError(JagoanError):
    """Raised when the ledger collaborator fails to create a record."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause
