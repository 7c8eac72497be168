# drivebook/domain/schedule_state.py
"""
Pure schedule transitions and views.

Every mutating function takes the current ScheduleState plus the
acting user and returns a Transition: the next state, the result to
hand back to the caller, and the events whose notifications should be
sent. Ids and timestamps are passed in so the functions stay
deterministic. Authorization and precondition failures are raised as
DomainException subclasses; the service turns them into failure
results.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Tuple, Union

from ..core.enums import BookingCreator, BookingStatus, RoleName
from ..core.exceptions import (
    NotFoundException,
    RoleRequiredException,
    TrainerNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from ..events.booking_events import (
    BookingApproved,
    BookingDeleted,
    BookingRequested,
    LessonBooked,
)
from ..models.actor import Actor
from ..models.availability import AvailabilitySlot
from ..models.booking import Booking
from ..schemas.schedule import ScheduleResult

BookingEvent = Union[BookingRequested, LessonBooked, BookingApproved, BookingDeleted]


@dataclass(frozen=True)
class ScheduleState:
    """Immutable snapshot of both collections."""

    availability: Tuple[AvailabilitySlot, ...] = ()
    bookings: Tuple[Booking, ...] = ()


@dataclass(frozen=True)
class Transition:
    state: ScheduleState
    result: ScheduleResult
    events: Tuple[BookingEvent, ...] = ()


def _require_trainer(actor: Optional[Actor], message: str) -> Actor:
    if actor is None or not actor.is_trainer:
        raise RoleRequiredException(
            message,
            required_role=RoleName.TRAINER.value,
            actual_role=actor.role.value if actor else None,
        )
    return actor


def _find_slot(state: ScheduleState, slot_id: str) -> AvailabilitySlot:
    for slot in state.availability:
        if slot.id == slot_id:
            return slot
    raise NotFoundException("Availability slot not found", details={"slot_id": slot_id})


def _find_booking(state: ScheduleState, booking_id: str) -> Booking:
    for booking in state.bookings:
        if booking.id == booking_id:
            return booking
    raise NotFoundException("Booking not found", details={"booking_id": booking_id})


# Availability


def add_availability(
    state: ScheduleState,
    actor: Optional[Actor],
    start: datetime,
    end: datetime,
    *,
    slot_id: str,
) -> Transition:
    trainer = _require_trainer(actor, "Only trainers can add availability")
    slot = AvailabilitySlot(id=slot_id, trainer_id=trainer.id, start=start, end=end)
    return Transition(
        state=replace(state, availability=state.availability + (slot,)),
        result=ScheduleResult.ok(slot=slot),
    )


def remove_availability(
    state: ScheduleState, actor: Optional[Actor], slot_id: str
) -> Transition:
    # Role check only: any trainer may remove any slot.
    _require_trainer(actor, "Only trainers can remove availability")
    remaining = tuple(slot for slot in state.availability if slot.id != slot_id)
    return Transition(
        state=replace(state, availability=remaining),
        result=ScheduleResult.ok(),
    )


def update_availability_slot(
    state: ScheduleState,
    actor: Optional[Actor],
    slot_id: str,
    start: datetime,
    end: datetime,
) -> Transition:
    _require_trainer(actor, "Only trainers can update availability")
    current = _find_slot(state, slot_id)
    updated = AvailabilitySlot.model_validate(
        {**current.model_dump(), "start": start, "end": end}
    )
    return Transition(
        state=replace(
            state,
            availability=tuple(
                updated if slot.id == slot_id else slot for slot in state.availability
            ),
        ),
        result=ScheduleResult.ok(slot=updated),
    )


# Bookings


def request_booking(
    state: ScheduleState,
    actor: Optional[Actor],
    student_id: str,
    start: datetime,
    end: datetime,
    *,
    booking_id: str,
    created_at: datetime,
) -> Transition:
    if actor is None:
        raise UnauthorizedException("Not authenticated")

    trainer_id = (actor.trainer_id or "") if actor.is_student else actor.id
    if not trainer_id:
        raise TrainerNotFoundException(actor.id)

    created_by = BookingCreator.TRAINER if actor.is_trainer else BookingCreator.STUDENT
    booking = Booking(
        id=booking_id,
        student_id=student_id,
        trainer_id=trainer_id,
        start=start,
        end=end,
        status=(
            BookingStatus.APPROVED
            if created_by == BookingCreator.TRAINER
            else BookingStatus.PENDING
        ),
        created_at=created_at,
        created_by=created_by,
    )
    event_type = LessonBooked if created_by == BookingCreator.TRAINER else BookingRequested
    event = event_type(
        booking_id=booking.id,
        student_id=booking.student_id,
        trainer_id=booking.trainer_id,
        created_at=booking.created_at,
    )
    return Transition(
        state=replace(state, bookings=(booking,) + state.bookings),
        result=ScheduleResult.ok(booking=booking),
        events=(event,),
    )


def update_booking_status(
    state: ScheduleState,
    actor: Optional[Actor],
    booking_id: str,
    status: BookingStatus,
) -> Transition:
    if status not in (BookingStatus.APPROVED, BookingStatus.REJECTED):
        raw = getattr(status, "value", status)
        raise ValidationException(
            f"Unsupported booking status: {raw}",
            code="INVALID_STATUS",
            details={"status": raw},
        )

    booking = _find_booking(state, booking_id)

    if status == BookingStatus.REJECTED:
        # Rejection is deletion, from any prior status.
        return Transition(
            state=replace(
                state, bookings=tuple(b for b in state.bookings if b.id != booking_id)
            ),
            result=ScheduleResult.ok(booking=booking),
            events=(
                BookingDeleted(
                    booking_id=booking.id,
                    student_id=booking.student_id,
                    trainer_id=booking.trainer_id,
                ),
            ),
        )

    approved = booking.model_copy(update={"status": BookingStatus.APPROVED})
    return Transition(
        state=replace(
            state,
            bookings=tuple(approved if b.id == booking_id else b for b in state.bookings),
        ),
        result=ScheduleResult.ok(booking=approved),
        events=(
            BookingApproved(
                booking_id=approved.id,
                student_id=approved.student_id,
                trainer_id=approved.trainer_id,
            ),
        ),
    )


def update_booking(
    state: ScheduleState,
    actor: Optional[Actor],
    booking_id: str,
    student_id: str,
    start: datetime,
    end: datetime,
) -> Transition:
    _require_trainer(actor, "Only trainers can update bookings")
    current = _find_booking(state, booking_id)
    updated = Booking.model_validate(
        {**current.model_dump(), "student_id": student_id, "start": start, "end": end}
    )
    return Transition(
        state=replace(
            state,
            bookings=tuple(updated if b.id == booking_id else b for b in state.bookings),
        ),
        result=ScheduleResult.ok(booking=updated),
    )


# Views


def _visible(bookings: Tuple[Booking, ...]) -> Tuple[Booking, ...]:
    return tuple(b for b in bookings if b.status != BookingStatus.REJECTED)


def my_bookings(state: ScheduleState, actor: Optional[Actor]) -> Tuple[Booking, ...]:
    if actor is None:
        return ()
    if actor.is_trainer:
        return _visible(tuple(b for b in state.bookings if b.trainer_id == actor.id))
    return _visible(tuple(b for b in state.bookings if b.student_id == actor.id))


def bookings_for_student(state: ScheduleState, student_id: str) -> Tuple[Booking, ...]:
    return _visible(tuple(b for b in state.bookings if b.student_id == student_id))


def bookings_for_trainer(
    state: ScheduleState, actor: Optional[Actor], trainer_id: Optional[str] = None
) -> Tuple[Booking, ...]:
    target = trainer_id or (actor.trainer_context if actor else None)
    if not target:
        return ()
    return _visible(tuple(b for b in state.bookings if b.trainer_id == target))


def my_trainer_availability(
    state: ScheduleState, actor: Optional[Actor]
) -> Tuple[AvailabilitySlot, ...]:
    if actor is None:
        return ()
    target = actor.trainer_context
    return tuple(slot for slot in state.availability if slot.trainer_id == target)


def availability_for_trainer(
    state: ScheduleState, actor: Optional[Actor], trainer_id: Optional[str] = None
) -> Tuple[AvailabilitySlot, ...]:
    if trainer_id:
        return tuple(slot for slot in state.availability if slot.trainer_id == trainer_id)
    return my_trainer_availability(state, actor)
