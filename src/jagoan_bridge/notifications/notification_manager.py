"""Notification service: fire-and-forget fan-out to chat channels."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from jagoan_bridge.notifications.strategies import BaseNotificationStrategy
from jagoan_bridge.notifications.types import NotificationMessage


@dataclass
class NotificationService:
    """Deliver notifications to every configured channel from one background task.

    notify() only enqueues, so the webhook path answers the sensor without
    waiting on chat delivery. A channel that raises or reports failure is
    logged and skipped; the others still receive the message.
    """

    notifiers: list[BaseNotificationStrategy]
    queue_size: int = 200
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    _queue: asyncio.Queue[NotificationMessage] | None = field(init=False, default=None)
    _worker: asyncio.Task[None] | None = field(init=False, default=None)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("NotificationService")

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    async def initialize(self) -> None:
        """Open every channel, then start the delivery worker (if there is any channel)."""
        for notifier in self.notifiers:
            await notifier.initialize()
        if not self.notifiers:
            self._logger.warning("notification_no_channels_configured")
            return
        self._queue = asyncio.Queue(maxsize=self.queue_size)
        self._worker = asyncio.create_task(self._drain(self._queue), name="notification-worker")
        self._logger.debug(
            "notification_service_started",
            notification_channels=[type(n).__name__ for n in self.notifiers],
            notification_queue_size=self.queue_size,
        )

    async def shutdown(self) -> None:
        """Deliver what is already queued, stop the worker, close every channel."""
        queue, worker = self._queue, self._worker
        self._queue, self._worker = None, None
        if queue is not None:
            queue.shutdown()
            await queue.join()
        if worker is not None:
            await worker
        for notifier in self.notifiers:
            await notifier.shutdown()
        self._logger.debug("notification_service_stopped")

    def notify(self, message: NotificationMessage) -> bool:
        """Queue message for delivery without blocking. False when it was dropped.

        Raises:
            RuntimeError: Channels are configured but initialize() has not run.
        """
        if self._queue is None:
            if self.notifiers:
                raise RuntimeError("NotificationService not initialized")
            return False
        try:
            self._queue.put_nowait(message)
        except (asyncio.QueueFull, asyncio.QueueShutDown) as e:
            self._logger.warning(
                "notification_dropped",
                notification_event_type=message.event_type,
                reason="queue_full" if isinstance(e, asyncio.QueueFull) else "shutting_down",
            )
            return False
        return True

    async def _drain(self, queue: asyncio.Queue[NotificationMessage]) -> None:
        while True:
            try:
                message = await queue.get()
            except asyncio.QueueShutDown:
                return
            try:
                for notifier in self.notifiers:
                    await self._deliver(notifier, message)
            finally:
                queue.task_done()

    async def _deliver(self, notifier: BaseNotificationStrategy, message: NotificationMessage) -> None:
        channel = type(notifier).__name__
        try:
            delivered = await notifier.send_notification(message)
        except Exception:
            self._logger.exception(
                "notification_send_failed",
                notification_event_type=message.event_type,
                notification_channel=channel,
            )
            return
        if not delivered:
            self._logger.warning(
                "notification_not_delivered",
                notification_event_type=message.event_type,
                notification_channel=channel,
            )
