# -*- coding: utf-8 -*-
"""HTTP server lifecycle (aiohttp AppRunner) inside the application event loop."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

import structlog
from aiohttp import web


class WebServer:
    """Start/stop an aiohttp application on host:port without owning the event loop."""

    def __init__(
        self,
        app: web.Application,
        *,
        host: str = "0.0.0.0",
        port: int = 3000,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._app = app
        self._host = host
        self._port = port
        self._runner: Optional[web.AppRunner] = None
        self._lock = asyncio.Lock()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def is_running(self) -> bool:
        return self._runner is not None

    async def start(self) -> None:
        """Bind and start serving. Idempotent."""
        async with self._lock:
            if self._runner is not None:
                return
            runner = web.AppRunner(self._app, access_log=None)
            await runner.setup()
            site = web.TCPSite(runner, host=self._host, port=self._port)
            await site.start()
            self._runner = runner
        self._logger.info(
            "http_server_started",
            webhook_url=f"http://{self._host}:{self._port}/webhook/transaction",
            health_url=f"http://{self._host}:{self._port}/health",
        )

    async def stop(self) -> None:
        """Stop serving and release the socket. Idempotent."""
        async with self._lock:
            runner = self._runner
            self._runner = None
        if runner is None:
            return
        await runner.cleanup()
        self._logger.info("http_server_stopped")
