# -*- coding: utf-8 -*-
"""Logging setup: stdlib handlers, structlog processor chain, optional Logfire export.

Call configure_logging() once at process start; modules then log through
structlog.get_logger(name) with snake_case event names and keyword fields.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

import logfire
import structlog
from structlog.types import EventDict, Processor

from jagoan_bridge.config import get_settings
from jagoan_bridge.config.config import AppSettings, LoggingSettings

# stdlib level name -> Logfire min_level
_LOGFIRE_LEVELS: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

# Polling and access lines; only shown when a handler runs at DEBUG.
_NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "telegram.ext", "aiohttp.access")


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp logger name, app name, service metadata and environment on every event."""
    stdlib_logger = getattr(logger, "_logger", None)
    event_dict["logger"] = getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
    app = get_settings().app
    event_dict["app_name"] = app.app_name
    if app.service_name:
        event_dict["service_name"] = app.service_name
    if app.service_version:
        event_dict["service_version"] = app.service_version
    event_dict["environment"] = app.environment
    return event_dict


def _stringify_decimals(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Render Decimal amounts as plain strings (JSON has no exact decimal type)."""
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = format(value, "f")
    return event_dict


def _console_handler(cfg: LoggingSettings) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(_level(cfg.console_level))
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _file_handler(cfg: LoggingSettings) -> logging.Handler:
    path = Path(cfg.log_file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        path,
        when=cfg.log_file_when,
        interval=cfg.log_file_interval,
        backupCount=cfg.log_file_backup_count,
        encoding="utf-8",
        utc=cfg.log_file_utc,
    )
    handler.setLevel(_level(cfg.file_level))
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _install_handlers(cfg: LoggingSettings) -> None:
    handlers: list[logging.Handler] = []
    if cfg.log_to_console:
        handlers.append(_console_handler(cfg))
    if cfg.log_to_file:
        handlers.append(_file_handler(cfg))
    if not handlers:
        return
    root_level = min(h.level for h in handlers)
    logging.basicConfig(level=root_level, handlers=handlers, force=True)
    if root_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _configure_logfire(cfg: LoggingSettings, app: AppSettings) -> None:
    logfire.configure(
        token=cfg.logfire_token,
        service_name=app.service_name or app.app_name,
        service_version=app.service_version,
        min_level=_LOGFIRE_LEVELS.get(cfg.logfire_level, "info"),  # type: ignore[arg-type]
        environment=app.environment,
    )


def _renderer(cfg: LoggingSettings) -> Processor:
    """JSON whenever a file is written (or json_format is set), else the dev console renderer."""
    if cfg.log_to_file or cfg.json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging() -> None:
    """Configure logging from settings. Safe to call more than once."""
    settings = get_settings()
    cfg = settings.logging

    _install_handlers(cfg)
    if cfg.logfire_enabled:
        _configure_logfire(cfg, settings.app)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_context,
        _stringify_decimals,
    ]
    if cfg.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]
    if cfg.log_to_console or cfg.log_to_file:
        processors.append(_renderer(cfg))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
