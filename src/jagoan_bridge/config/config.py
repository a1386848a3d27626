# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. TELEGRAM__CHAT_ID, NOTION__DATABASE_ID.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Identity of the running bridge (log and Logfire metadata) and its local timezone."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "jagoan-bridge"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"
    timezone: str = Field(
        default="Asia/Jakarta",
        description="IANA timezone that defines 'today' for ledger dates and display.",
    )


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
RotateWhen = Literal["S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"]


class LoggingSettings(BaseSettings):
    """Where structlog output goes (console, rotating file, Logfire) and at which level."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: LogLevel = "INFO"
    file_level: LogLevel = "INFO"
    logfire_level: LogLevel = "INFO"

    log_to_console: bool = True
    log_to_file: bool = Field(default=False, description="Also write JSON lines to log_file_path.")
    log_file_path: str = "logs/jagoan_bridge.log"
    log_file_when: RotateWhen = Field(default="midnight", description="TimedRotatingFileHandler 'when'.")
    log_file_interval: int = Field(default=1, ge=1)
    log_file_backup_count: int = Field(default=14, ge=0, description="Rotated files to keep.")
    log_file_utc: bool = True

    json_format: bool = Field(
        default=False,
        description="Render console output as JSON instead of the colored dev renderer.",
    )

    logfire_enabled: bool = False
    logfire_token: Optional[str] = Field(default=None, description="Logfire write token.")


class ServerSettings(BaseSettings):
    """Inbound HTTP receiver (sensor webhook + health)."""

    model_config = SettingsConfigDict(extra="ignore")

    host: str = Field(default="0.0.0.0", description="Bind address.")
    port: int = Field(default=3000, ge=1, le=65535, description="Bind port.")


class CorrelationSettings(BaseSettings):
    """Deduplication window and pending transaction lifetime."""

    model_config = SettingsConfigDict(extra="ignore")

    dedup_window_ms: int = Field(
        default=5000,
        ge=0,
        le=3_600_000,
        description="Trailing window in which a repeated identical amount is suppressed.",
    )
    pending_ttl_seconds: float = Field(
        default=3600.0,
        gt=0,
        le=7 * 24 * 3600,
        description="Maximum age of a pending transaction before it expires.",
    )
    restore_on_ledger_failure: bool = Field(
        default=False,
        description="Put a popped transaction back at the head of the queue when the ledger write fails.",
    )


class TelegramNotificationSettings(BaseSettings):
    """Telegram bot (from env TELEGRAM__*). chat_id is the single authorized identity."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True
    api_key: Optional[str] = Field(default=None, description="Telegram bot API key.")
    chat_id: Optional[str] = Field(default=None, description="Telegram chat ID.")
    listen_replies: bool = Field(
        default=True,
        description="Long-poll the bot for replies that classify pending transactions.",
    )
    messages_per_minute: int = Field(default=30, ge=1, le=120)
    max_retries: int = Field(default=3, ge=1, le=20)
    backoff_base_seconds: float = Field(default=1.0, ge=0.1, le=60.0)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Print notifications to stdout (handy for local runs without a bot)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False


class NotionSettings(BaseSettings):
    """Notion ledger database (from env NOTION__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    api_key: Optional[str] = Field(default=None, description="Notion integration token.")
    database_id: Optional[str] = Field(default=None, description="Ledger database ID.")
    category_page_id: Optional[str] = Field(
        default=None,
        description="Page ID linked as the category of every new record (optional).",
    )
    category_property: str = Field(
        default="Category",
        description="Name of the relation property that holds the category.",
    )
    api_base_url: str = Field(
        default="https://api.notion.com/v1",
        description="Notion API base URL.",
    )
    api_version: str = Field(default="2022-06-28", description="Notion-Version header.")
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Maximum attempts for read-only requests. Page creation is never retried.",
    )

    @computed_field
    @property
    def category_reference(self) -> Optional[str]:
        """Category page id, or None when blank."""
        if not self.category_page_id or not self.category_page_id.strip():
            return None
        return self.category_page_id.strip()


class Settings(BaseSettings):
    """Every bridge setting, read from the environment and .env.

    Sections map to env prefixes: TELEGRAM__CHAT_ID, NOTION__DATABASE_ID,
    CORRELATION__DEDUP_WINDOW_MS and so on. Nothing else reads os.environ.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    correlation: CorrelationSettings = Field(default_factory=CorrelationSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)
    notion: NotionSettings = Field(default_factory=NotionSettings)

    def missing_required(self) -> list[str]:
        """Return env names of required values that are not set (empty list if complete)."""
        required = {
            "TELEGRAM__API_KEY": self.telegram.api_key,
            "TELEGRAM__CHAT_ID": self.telegram.chat_id,
            "NOTION__API_KEY": self.notion.api_key,
            "NOTION__DATABASE_ID": self.notion.database_id,
        }
        return [name for name, value in required.items() if not value or not str(value).strip()]


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings, built on first use.

        ttl = get_settings().correlation.pending_ttl_seconds
    """
    return Settings()
