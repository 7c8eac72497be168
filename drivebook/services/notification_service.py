# drivebook/services/notification_service.py
"""
Notification Service for DriveBook.

Surfaces local notifications for booking lifecycle changes. Requests
are fire-and-forget: notify() queues delivery on the running event
loop and returns immediately. Delivery failures are logged and
swallowed; they never reach the operation that triggered them.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional, Protocol, Set, runtime_checkable

from redis.asyncio import Redis as AsyncRedis

from ..monitoring.prometheus_metrics import prometheus_metrics
from .base import BaseService

logger = logging.getLogger(__name__)


@runtime_checkable
class NotificationSender(Protocol):
    """Delivers a (title, body) notification to the user's device."""

    name: str

    async def send(self, title: str, body: str) -> None:
        ...


class LoggingNotificationSender:
    """Development sender: logs notifications instead of delivering them."""

    name = "log"

    async def send(self, title: str, body: str) -> None:
        logger.info("Local notification: %s - %s", title, body)


class RedisNotificationSender:
    """Publishes notifications on a Redis Pub/Sub channel for the device notifier."""

    name = "redis"

    def __init__(self, client: AsyncRedis, channel: str):
        self._client = client
        self.channel = channel

    @classmethod
    def from_url(cls, redis_url: str, channel: str) -> "RedisNotificationSender":
        client = AsyncRedis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        logger.info("[REDIS-PUBSUB] Notification publisher initialized on %s", channel)
        return cls(client, channel)

    async def send(self, title: str, body: str) -> None:
        message = json.dumps({"title": title, "body": body})
        receivers = await self._client.publish(self.channel, message)
        logger.debug("Published notification to %s (%s receivers)", self.channel, receivers)

    async def aclose(self) -> None:
        await self._client.aclose()


class NotificationService(BaseService):
    """
    Service layer for notification requests.

    Owns the background delivery tasks so callers can wait for them
    on shutdown (or in tests) via drain().
    """

    def __init__(
        self,
        sender: Optional[NotificationSender] = None,
        enabled: bool = True,
    ):
        super().__init__()
        self.sender: NotificationSender = sender or LoggingNotificationSender()
        self.enabled = enabled
        self._pending: Set["asyncio.Task[None]"] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def notify(self, title: str, body: str) -> None:
        """Request a notification; never raises and never waits for delivery."""
        if not self.enabled:
            self.logger.debug("Notifications disabled, dropping: %s", title)
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.logger.warning("No running event loop, dropping notification: %s", title)
            return

        task = loop.create_task(self._deliver(title, body))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, title: str, body: str) -> None:
        try:
            await self.sender.send(title, body)
        except Exception as e:
            self.logger.error(
                f"Notification error ({self.sender.name}): {str(e)}", exc_info=True
            )
            prometheus_metrics.record_notification(self.sender.name, success=False)
            return
        prometheus_metrics.record_notification(self.sender.name, success=True)

    async def drain(self) -> None:
        """Wait for every queued delivery to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def aclose(self) -> None:
        """Drain pending deliveries and close the sender's client, if it has one."""
        await self.drain()
        close = getattr(self.sender, "aclose", None)
        if close is not None:
            await close()
