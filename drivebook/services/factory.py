# drivebook/services/factory.py
"""
Service Factory for DriveBook

Builds the scheduling service and its collaborators from settings,
so the API layer and scripts wire things the same way.
"""

import logging

from ..core.config import Settings
from ..core.enums import NotificationBackend, StorageBackend
from ..repositories.kv_store import InMemoryKeyValueStore, KeyValueStore, RedisKeyValueStore
from ..repositories.schedule_repository import ScheduleRepository
from .notification_service import (
    LoggingNotificationSender,
    NotificationSender,
    NotificationService,
    RedisNotificationSender,
)
from .scheduling_service import SchedulingService

logger = logging.getLogger(__name__)


def create_key_value_store(settings: Settings) -> KeyValueStore:
    """Create the storage backend selected by settings."""
    if settings.storage_backend == StorageBackend.REDIS:
        return RedisKeyValueStore.from_url(settings.effective_redis_url)
    return InMemoryKeyValueStore()


def create_notification_sender(settings: Settings) -> NotificationSender:
    """Create the notification sender selected by settings."""
    if settings.notification_backend == NotificationBackend.REDIS:
        return RedisNotificationSender.from_url(
            settings.effective_redis_url, settings.notification_channel
        )
    return LoggingNotificationSender()


def create_scheduling_service(settings: Settings) -> SchedulingService:
    """
    Create a SchedulingService wired from settings.

    The returned service is not loaded yet; callers await load().
    """
    repository = ScheduleRepository(
        create_key_value_store(settings),
        availability_key=settings.availability_key,
        bookings_key=settings.bookings_key,
    )
    notification_service = NotificationService(
        sender=create_notification_sender(settings),
        enabled=settings.notifications_enabled,
    )
    logger.info(
        "Scheduling service configured",
        extra={
            "storage_backend": settings.storage_backend.value,
            "notification_backend": settings.notification_backend.value,
        },
    )
    return SchedulingService(repository, notification_service=notification_service)
