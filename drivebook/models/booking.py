# drivebook/models/booking.py
"""
Booking model for the DriveBook scheduling core.

Represents a proposed or confirmed lesson between one trainer and one
student. Bookings created by trainers start approved; bookings
requested by students start pending. Rejected bookings are deleted,
so a stored booking is always pending or approved.
"""

from pydantic import AwareDatetime, BaseModel, ConfigDict

from ..core.enums import BookingCreator, BookingStatus


class Booking(BaseModel):
    """Lesson appointment between a trainer and a student."""

    model_config = ConfigDict(frozen=True)

    id: str
    student_id: str
    trainer_id: str
    start: AwareDatetime
    end: AwareDatetime
    status: BookingStatus
    created_at: AwareDatetime
    created_by: BookingCreator

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.PENDING
