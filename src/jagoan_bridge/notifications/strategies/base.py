# -*- coding: utf-8 -*-
"""Common interface of outbound chat channels."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from jagoan_bridge.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from jagoan_bridge.config.config import Settings


class BaseNotificationStrategy(ABC):
    """A channel NotificationService fans messages out to.

    Lifecycle: initialize() once before the first send, shutdown() once at exit.
    """

    def __init__(self, settings: "Settings"):
        self.settings = settings

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """True between initialize() and shutdown()."""

    @abstractmethod
    async def initialize(self) -> None: ...

    @abstractmethod
    async def shutdown(self) -> None: ...

    @abstractmethod
    async def send_notification(self, message: NotificationMessage) -> bool:
        """Deliver message. True if delivered, False if it was dropped.

        Implementations bound their own retries; NotificationService also
        survives an exception, but logs it as a failure.
        """
