"""Event publisher - turns domain events into notification requests."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, Protocol

if TYPE_CHECKING:
    from drivebook.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class Event(Protocol):
    """Protocol for event types."""

    title: str
    body: str

    def to_dict(self) -> Dict[str, Any]:
        ...


class EventPublisher:
    """Publishes domain events to the notification service."""

    def __init__(self, notification_service: "NotificationService"):
        self.notification_service = notification_service

    def publish(self, event: Event) -> None:
        """
        Request a notification for the event.

        Delivery runs in the background; this returns as soon as the
        request is queued.
        """
        event_type = type(event).__name__
        logger.debug("Publishing %s %s", event_type, event.to_dict())
        self.notification_service.notify(event.title, event.body)

    def publish_all(self, events: Iterable[Event]) -> None:
        for event in events:
            self.publish(event)
