"""Tests for NotificationService and its senders."""

from __future__ import annotations

import json
import logging
from unittest.mock import AsyncMock

import pytest

from drivebook.services.notification_service import (
    LoggingNotificationSender,
    NotificationSender,
    NotificationService,
    RedisNotificationSender,
)
from tests.conftest import FailingSender, RecordingSender


@pytest.mark.asyncio
async def test_notify_returns_before_delivery(sender, notification_service):
    notification_service.notify("Booking approved", "Your lesson was approved")

    assert sender.sent == []
    assert notification_service.pending_count == 1

    await notification_service.drain()

    assert sender.sent == [("Booking approved", "Your lesson was approved")]
    assert notification_service.pending_count == 0


@pytest.mark.asyncio
async def test_delivery_failure_is_swallowed(caplog):
    service = NotificationService(sender=FailingSender())

    service.notify("Booking deleted", "The appointment was deleted")
    await service.drain()

    assert "Notification error (failing)" in caplog.text


@pytest.mark.asyncio
async def test_disabled_service_drops_requests():
    sender = RecordingSender()
    service = NotificationService(sender=sender, enabled=False)

    service.notify("New lesson booked", "A trainer scheduled a lesson")
    await service.drain()

    assert sender.sent == []


def test_notify_without_event_loop_is_dropped():
    sender = RecordingSender()
    service = NotificationService(sender=sender)

    service.notify("New booking request", "A student sent a booking request")

    assert service.pending_count == 0
    assert sender.sent == []


@pytest.mark.asyncio
async def test_logging_sender_logs_without_keeping_history(caplog):
    caplog.set_level(logging.INFO, logger="drivebook.services.notification_service")
    sender = LoggingNotificationSender()

    await sender.send("Booking approved", "Your lesson was approved")

    assert isinstance(sender, NotificationSender)
    assert "Local notification: Booking approved - Your lesson was approved" in caplog.text
    assert not hasattr(sender, "sent")


@pytest.mark.asyncio
async def test_redis_sender_publishes_json():
    client = AsyncMock()
    client.publish.return_value = 1
    sender = RedisNotificationSender(client, "drivebook:notifications")

    await sender.send("Booking approved", "Your lesson was approved")

    channel, message = client.publish.await_args.args
    assert channel == "drivebook:notifications"
    assert json.loads(message) == {
        "title": "Booking approved",
        "body": "Your lesson was approved",
    }


@pytest.mark.asyncio
async def test_aclose_drains_then_closes_sender_client():
    client = AsyncMock()
    sender = RedisNotificationSender(client, "drivebook:notifications")
    service = NotificationService(sender=sender)

    service.notify("Booking deleted", "The appointment was deleted")
    await service.aclose()

    client.publish.assert_awaited_once()
    client.aclose.assert_awaited_once()
    assert service.pending_count == 0


@pytest.mark.asyncio
async def test_aclose_with_sender_without_client(sender, notification_service):
    notification_service.notify("Booking approved", "Your lesson was approved")

    await notification_service.aclose()

    assert sender.titles == ["Booking approved"]
