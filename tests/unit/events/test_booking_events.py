"""Tests for booking events and the event publisher."""

from dataclasses import FrozenInstanceError
from unittest.mock import MagicMock

import pytest

from drivebook.events import (
    BookingApproved,
    BookingDeleted,
    BookingRequested,
    EventPublisher,
    LessonBooked,
)
from tests.conftest import FIXED_NOW


@pytest.mark.parametrize(
    "event, title, body",
    [
        (
            BookingRequested("b1", "S1", "T1", FIXED_NOW),
            "New booking request",
            "A student sent a booking request",
        ),
        (
            LessonBooked("b1", "S1", "T1", FIXED_NOW),
            "New lesson booked",
            "A trainer scheduled a lesson",
        ),
        (BookingApproved("b1", "S1", "T1"), "Booking approved", "Your lesson was approved"),
        (BookingDeleted("b1", "S1", "T1"), "Booking deleted", "The appointment was deleted"),
    ],
)
def test_notification_text(event, title, body):
    assert (event.title, event.body) == (title, body)


def test_to_dict_excludes_notification_text():
    event = BookingApproved(booking_id="b1", student_id="S1", trainer_id="T1")

    assert event.to_dict() == {"booking_id": "b1", "student_id": "S1", "trainer_id": "T1"}


def test_events_are_immutable():
    event = BookingDeleted(booking_id="b1", student_id="S1", trainer_id="T1")

    with pytest.raises(FrozenInstanceError):
        event.booking_id = "b2"  # type: ignore[misc]


def test_publisher_forwards_title_and_body():
    notification_service = MagicMock()
    publisher = EventPublisher(notification_service)

    publisher.publish_all(
        [
            BookingApproved("b1", "S1", "T1"),
            BookingDeleted("b1", "S1", "T1"),
        ]
    )

    assert [c.args for c in notification_service.notify.call_args_list] == [
        ("Booking approved", "Your lesson was approved"),
        ("Booking deleted", "The appointment was deleted"),
    ]
