"""Domain events emitted by the scheduling core."""

from drivebook.events.booking_events import (
    BookingApproved,
    BookingDeleted,
    BookingRequested,
    LessonBooked,
)
from drivebook.events.publisher import Event, EventPublisher

__all__ = [
    "BookingRequested",
    "LessonBooked",
    "BookingApproved",
    "BookingDeleted",
    "Event",
    "EventPublisher",
]
