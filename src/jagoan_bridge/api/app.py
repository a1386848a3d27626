# -*- coding: utf-8 -*-
"""aiohttp application: sensor webhooks and health check.

Routes:
    POST /webhook/transaction   {"amount": 50000, "type": "OUTGOING"}
    POST /webhook/notification  {"text": "Pembayaran IDR 50.000 berhasil"}
    GET  /health
"""

from __future__ import annotations

import time
import uuid
from datetime import UTC, datetime
from typing import Any, Awaitable, Callable, Optional

import structlog
from aiohttp import web
from structlog.contextvars import bound_contextvars

from jagoan_bridge.api.schemas import (
    EventDirection,
    TransactionEventPayload,
    parse_notification_event,
    parse_transaction_event,
)
from jagoan_bridge.exceptions import InvalidPayloadError
from jagoan_bridge.services.correlation import CorrelationEngine

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

ENGINE_KEY = web.AppKey("engine", CorrelationEngine)


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"success": False, "error": message}, status=status)


def _request_context_middleware(logger: Any) -> Any:
    """Bind a request id to log context, log completion, turn unexpected errors into 500."""

    @web.middleware
    async def middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        started = time.perf_counter()
        with bound_contextvars(
            http_request_id=request_id,
            http_method=request.method,
            http_path=request.path,
        ):
            try:
                response = await handler(request)
            except web.HTTPException:
                raise
            except Exception:
                logger.exception("http_request_failed")
                response = _error(500, "Internal server error")
            response.headers["X-Request-ID"] = request_id
            logger.debug(
                "http_request_completed",
                http_status_code=response.status,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return response

    return middleware


class WebhookHandlers:
    """Request handlers bound to the correlation engine."""

    def __init__(
        self,
        engine: CorrelationEngine,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._engine = engine
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def transaction(self, request: web.Request) -> web.Response:
        """Receive an amount from the notification sensor."""
        return await self._accept(request, parse_transaction_event)

    async def notification(self, request: web.Request) -> web.Response:
        """Receive raw notification text and extract the amount server-side."""
        return await self._accept(request, parse_notification_event)

    async def health(self, request: web.Request) -> web.Response:
        """Read-only status: current time and live pending count."""
        now = self._clock()
        pending = await self._engine.pending_count(now)
        return web.json_response(
            {
                "status": "ok",
                "timestamp": now.isoformat(),
                "pending_count": pending,
            }
        )

    async def _accept(
        self,
        request: web.Request,
        parse: Callable[[Any], TransactionEventPayload],
    ) -> web.Response:
        try:
            try:
                body = await request.json()
            except ValueError as e:
                raise InvalidPayloadError("Request body must be valid JSON.") from e
            event = parse(body)
        except InvalidPayloadError as e:
            self._logger.warning("webhook_rejected", reason=str(e))
            return _error(400, f"Invalid request. {e}")

        if event.direction is EventDirection.INCOMING:
            self._logger.info("webhook_incoming_ignored", amount=str(event.amount))
            return web.json_response({"success": True, "status": "ignored"})

        result = await self._engine.on_amount_event(event.amount, self._clock())
        if result.is_duplicate or result.transaction is None:
            return web.json_response({"success": True, "status": "duplicate"})
        return web.json_response(
            {
                "success": True,
                "status": "pending",
                "transaction_id": result.transaction.id,
                "message": "Transaction received. Please reply to the Telegram bot.",
            }
        )


def create_app(
    engine: CorrelationEngine,
    *,
    clock: Optional[Callable[[], datetime]] = None,
    get_logger: Callable[[str], Any] = structlog.get_logger,
) -> web.Application:
    """Build the aiohttp application around a correlation engine."""
    handlers = WebhookHandlers(
        engine,
        clock=clock or (lambda: datetime.now(UTC)),
        get_logger=get_logger,
    )
    app = web.Application(middlewares=[_request_context_middleware(get_logger("http"))])
    app[ENGINE_KEY] = engine
    app.router.add_post("/webhook/transaction", handlers.transaction)
    app.router.add_post("/webhook/notification", handlers.notification)
    app.router.add_get("/health", handlers.health)
    return app
