"""Tests for the pure schedule transitions."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest
from pydantic import ValidationError

from drivebook.core.enums import BookingStatus
from drivebook.core.exceptions import (
    NotFoundException,
    RoleRequiredException,
    TrainerNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from drivebook.domain import schedule_state
from drivebook.domain.schedule_state import ScheduleState
from drivebook.events.booking_events import (
    BookingApproved,
    BookingDeleted,
    BookingRequested,
    LessonBooked,
)
from drivebook.models.availability import AvailabilitySlot
from tests.conftest import FIXED_NOW, SLOT_END, SLOT_START


def _book(state, actor, booking_id="b1", student_id="S1"):
    return schedule_state.request_booking(
        state,
        actor,
        student_id,
        SLOT_START,
        SLOT_END,
        booking_id=booking_id,
        created_at=FIXED_NOW,
    )


def test_transitions_leave_input_state_untouched(trainer):
    empty = ScheduleState()

    transition = schedule_state.add_availability(
        empty, trainer, SLOT_START, SLOT_END, slot_id="s1"
    )

    assert empty.availability == ()
    assert len(transition.state.availability) == 1
    assert transition.events == ()


def test_state_is_frozen():
    with pytest.raises(FrozenInstanceError):
        ScheduleState().bookings = ()  # type: ignore[misc]


def test_add_availability_requires_trainer(student):
    with pytest.raises(RoleRequiredException) as exc_info:
        schedule_state.add_availability(
            ScheduleState(), student, SLOT_START, SLOT_END, slot_id="s1"
        )

    assert exc_info.value.details == {"required_role": "trainer", "actual_role": "student"}


def test_role_check_for_anonymous_actor():
    with pytest.raises(RoleRequiredException) as exc_info:
        schedule_state.remove_availability(ScheduleState(), None, "s1")

    assert exc_info.value.details["actual_role"] is None


def test_remove_unknown_slot_is_noop(trainer):
    state = schedule_state.add_availability(
        ScheduleState(), trainer, SLOT_START, SLOT_END, slot_id="s1"
    ).state

    transition = schedule_state.remove_availability(state, trainer, "other")

    assert transition.state == state
    assert transition.result.success is True


def test_update_unknown_slot_raises(trainer):
    with pytest.raises(NotFoundException):
        schedule_state.update_availability_slot(
            ScheduleState(), trainer, "missing", SLOT_START, SLOT_END
        )


def test_student_request_emits_booking_requested(student):
    transition = _book(ScheduleState(), student)

    (event,) = transition.events
    assert isinstance(event, BookingRequested)
    assert event.trainer_id == "T1"
    assert event.title == "New booking request"


def test_trainer_booking_emits_lesson_booked(trainer):
    transition = _book(ScheduleState(), trainer)

    (event,) = transition.events
    assert isinstance(event, LessonBooked)
    assert transition.result.booking.status == BookingStatus.APPROVED


def test_request_without_actor_raises():
    with pytest.raises(UnauthorizedException):
        _book(ScheduleState(), None)


def test_student_without_trainer_raises(orphan_student):
    with pytest.raises(TrainerNotFoundException) as exc_info:
        _book(ScheduleState(), orphan_student, student_id="S2")

    assert exc_info.value.details == {"student_id": "S2"}


def test_approve_emits_booking_approved(trainer, student):
    state = _book(ScheduleState(), student).state

    transition = schedule_state.update_booking_status(
        state, trainer, "b1", BookingStatus.APPROVED
    )

    assert transition.result.booking.status == BookingStatus.APPROVED
    assert isinstance(transition.events[0], BookingApproved)


def test_reject_removes_and_emits_booking_deleted(trainer, student):
    state = _book(ScheduleState(), student).state

    transition = schedule_state.update_booking_status(
        state, trainer, "b1", BookingStatus.REJECTED
    )

    assert transition.state.bookings == ()
    assert isinstance(transition.events[0], BookingDeleted)
    # The result still describes the booking that was removed
    assert transition.result.booking.id == "b1"


def test_status_update_has_no_role_gate(student):
    state = _book(ScheduleState(), student).state

    transition = schedule_state.update_booking_status(
        state, student, "b1", BookingStatus.APPROVED
    )

    assert transition.result.success is True


def test_pending_target_is_rejected_before_lookup(trainer):
    with pytest.raises(ValidationException) as exc_info:
        schedule_state.update_booking_status(
            ScheduleState(), trainer, "missing", BookingStatus.PENDING
        )

    assert exc_info.value.code == "INVALID_STATUS"
    assert exc_info.value.details == {"status": "pending"}


def test_update_booking_emits_nothing(trainer):
    state = _book(ScheduleState(), trainer).state

    transition = schedule_state.update_booking(state, trainer, "b1", "S3", SLOT_START, SLOT_END)

    assert transition.events == ()
    assert transition.state.bookings[0].student_id == "S3"


def test_views_on_empty_state(trainer, student):
    empty = ScheduleState()

    assert schedule_state.my_bookings(empty, trainer) == ()
    assert schedule_state.bookings_for_student(empty, "S1") == ()
    assert schedule_state.bookings_for_trainer(empty, student) == ()
    assert schedule_state.my_trainer_availability(empty, student) == ()
    assert schedule_state.availability_for_trainer(empty, None, "T1") == ()


def test_slots_require_timezone_aware_timestamps():
    with pytest.raises(ValidationError):
        AvailabilitySlot(
            id="s1",
            trainer_id="T1",
            start=SLOT_START.replace(tzinfo=None),
            end=SLOT_END,
        )
