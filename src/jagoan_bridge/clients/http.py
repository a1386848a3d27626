# -*- coding: utf-8 -*-
"""JSON-over-HTTP client for external APIs: retried reads, single-shot writes."""

from __future__ import annotations

import asyncio
import random
import uuid
from typing import Any, Callable, Dict, Mapping, Optional

import aiohttp
import structlog
from structlog.contextvars import bound_contextvars

from jagoan_bridge.exceptions import ExternalServiceError, RateLimitError

_MAX_ERROR_BODY = 2000


def _parse_retry_after(response: aiohttp.ClientResponse) -> Optional[float]:
    header = response.headers.get("Retry-After")
    if not header:
        return None
    try:
        return max(0.0, float(header))
    except ValueError:
        return None


class AsyncHttpClient:
    """Async JSON client over a lazily created aiohttp session.

    GET is idempotent and retried with jittered backoff; 429 honours
    Retry-After and other 4xx responses fail at once. POST creates
    resources (a ledger page), so it is attempted exactly once.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 15.0,
        max_retries: int = 3,
        headers: Optional[Mapping[str, str]] = None,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            timeout_seconds: Total timeout per request.
            max_retries: Attempts for GET requests.
            headers: Default headers (auth, API version) sent with every request.
            session: Shared session; when omitted the client owns one and
                aclose() must be called.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._max_retries = max(1, max_retries)
        self._headers = dict(headers or {})
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _session_for_request(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout, headers=self._headers)
        return self._session

    async def aclose(self) -> None:
        """Close the owned session, if one was opened."""
        session, self._session = self._session, None
        if self._owns_session and session is not None and not session.closed:
            await session.close()

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    @staticmethod
    def _jittered_backoff(attempt: int) -> float:
        return min(4.0, 0.25 * 2**attempt) + random.uniform(0.0, 0.15)

    @staticmethod
    async def _read_error_body(response: aiohttp.ClientResponse) -> str:
        try:
            return (await response.text())[:_MAX_ERROR_BODY]
        except (aiohttp.ClientError, UnicodeDecodeError):
            return ""

    async def _get_once(self, url: str, params: Dict[str, Any]) -> Any:
        """One GET attempt. Raises RateLimitError or ExternalServiceError on failure."""
        session = await self._session_for_request()
        try:
            async with session.get(url, params=params) as response:
                if response.status == 429:
                    raise RateLimitError(url=url, retry_after=_parse_retry_after(response))
                if response.status >= 400:
                    raise ExternalServiceError(
                        f"GET {url} returned HTTP {response.status}",
                        url=url,
                        status_code=response.status,
                        body=await self._read_error_body(response),
                    )
                return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalServiceError(f"GET {url} failed: {type(e).__name__}", url=url, cause=e) from e

    async def get(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET url and return the decoded JSON body.

        Raises:
            RateLimitError: Still throttled (429) after the last attempt.
            ExternalServiceError: Client error (4xx), or server/transport failure after retries.
        """
        with bound_contextvars(http_url=url, http_request_id=uuid.uuid4().hex[:12]):
            attempt = 0
            while True:
                try:
                    return await self._get_once(url, params or {})
                except ExternalServiceError as e:
                    client_error = e.status_code is not None and 400 <= e.status_code < 500
                    retryable = isinstance(e, RateLimitError) or not client_error
                    attempt += 1
                    if not retryable or attempt >= self._max_retries:
                        self._logger.error(
                            "http_get_failed",
                            http_status_code=e.status_code,
                            http_attempts=attempt,
                            error_message=str(e),
                        )
                        raise
                    retry_after = e.retry_after if isinstance(e, RateLimitError) else None
                    delay = retry_after if retry_after else self._jittered_backoff(attempt - 1)
                    self._logger.debug(
                        "http_get_retry",
                        http_status_code=e.status_code,
                        http_attempt=attempt,
                        retry_in_seconds=round(delay, 2),
                    )
                    await asyncio.sleep(delay)

    async def post(self, url: str, *, json: Optional[Dict[str, Any]] = None) -> Any:
        """POST a JSON body once and return the decoded JSON response.

        Raises:
            ExternalServiceError: Transport error, timeout, or non-2xx status
                (status_code and the response body are attached).
        """
        with bound_contextvars(http_url=url, http_request_id=uuid.uuid4().hex[:12]):
            session = await self._session_for_request()
            try:
                async with session.post(url, json=json or {}) as response:
                    if response.status < 400:
                        return await response.json()
                    body = await self._read_error_body(response)
                    self._logger.error(
                        "http_post_failed",
                        http_status_code=response.status,
                        http_error_body=body,
                    )
                    raise ExternalServiceError(
                        f"POST {url} returned HTTP {response.status}",
                        url=url,
                        status_code=response.status,
                        body=body,
                    )
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                self._logger.error(
                    "http_post_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise ExternalServiceError(
                    f"POST {url} failed: {type(e).__name__}",
                    url=url,
                    cause=e,
                ) from e
