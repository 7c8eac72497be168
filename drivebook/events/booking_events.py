"""Booking domain events."""
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict


@dataclass(frozen=True)
class BookingRequested:
    """Fired after a student requests a lesson (booking is pending)."""

    title: ClassVar[str] = "New booking request"
    body: ClassVar[str] = "A student sent a booking request"

    booking_id: str
    student_id: str
    trainer_id: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LessonBooked:
    """Fired after a trainer schedules a lesson (booking is approved)."""

    title: ClassVar[str] = "New lesson booked"
    body: ClassVar[str] = "A trainer scheduled a lesson"

    booking_id: str
    student_id: str
    trainer_id: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BookingApproved:
    """Fired after a booking moves to approved."""

    title: ClassVar[str] = "Booking approved"
    body: ClassVar[str] = "Your lesson was approved"

    booking_id: str
    student_id: str
    trainer_id: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BookingDeleted:
    """Fired after a booking is rejected, which removes it."""

    title: ClassVar[str] = "Booking deleted"
    body: ClassVar[str] = "The appointment was deleted"

    booking_id: str
    student_id: str
    trainer_id: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
