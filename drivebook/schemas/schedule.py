# drivebook/schemas/schedule.py
"""
Schedule schemas for the DriveBook scheduling core.

Request schemas are where the `end > start` rule lives: the
scheduling service trusts its callers on interval order.
"""

from __future__ import annotations

import datetime
from typing import Any, List, Optional

from pydantic import AwareDatetime, BaseModel, Field, PrivateAttr, field_validator

from ..core.constants import DEFAULT_LESSON_MINUTES
from ..core.enums import BookingStatus
from ..core.exceptions import DomainException
from ..models.availability import AvailabilitySlot
from ..models.booking import Booking
from ._strict_base import StrictModel, StrictRequestModel

DateTimeType = AwareDatetime
DateType = datetime.date


def _check_interval_order(v: DateTimeType, info: Any) -> DateTimeType:
    if (
        isinstance(getattr(info, "data", None), dict)
        and info.data.get("start")
        and v <= info.data["start"]
    ):
        raise ValueError("End time must be after start time")
    return v


class IntervalRequest(StrictRequestModel):
    """Base schema for anything carrying a start/end pair."""

    start: DateTimeType
    end: DateTimeType

    @field_validator("end")
    @classmethod
    def validate_time_order(cls, v: DateTimeType, info: Any) -> DateTimeType:
        """Ensure end time is after start time."""
        return _check_interval_order(v, info)


class AvailabilityCreate(IntervalRequest):
    """Schema for publishing a new availability slot."""


class AvailabilityUpdate(IntervalRequest):
    """Schema for rewriting a slot's interval."""


class BookingRequest(IntervalRequest):
    """Schema for requesting (student) or creating (trainer) a booking."""

    student_id: str = Field(..., min_length=1)


class BookingUpdate(IntervalRequest):
    """Schema for a trainer rewriting a booking's content."""

    student_id: str = Field(..., min_length=1)


class BookingFromSlotRequest(StrictRequestModel):
    """Schema for booking a calendar cell (day + hour + minute)."""

    student_id: str = Field(..., min_length=1)
    day: DateType
    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)
    duration_minutes: int = Field(default=DEFAULT_LESSON_MINUTES, gt=0, le=24 * 60)


class BookingStatusUpdate(StrictRequestModel):
    """Schema for approving or rejecting a booking."""

    status: BookingStatus


class ScheduleResult(BaseModel):
    """
    Outcome of a mutating scheduling operation.

    `success` discriminates the two shapes: successful results may carry
    the affected `booking` or `slot`; failed results carry a
    human-readable `error` and a machine `code`.
    """

    success: bool
    error: Optional[str] = None
    code: Optional[str] = None
    booking: Optional[Booking] = None
    slot: Optional[AvailabilitySlot] = None
    _exception: Optional[DomainException] = PrivateAttr(default=None)

    @classmethod
    def ok(
        cls,
        *,
        booking: Optional[Booking] = None,
        slot: Optional[AvailabilitySlot] = None,
    ) -> "ScheduleResult":
        return cls(success=True, booking=booking, slot=slot)

    @classmethod
    def failure(cls, exc: DomainException) -> "ScheduleResult":
        result = cls(success=False, error=exc.message, code=exc.code)
        result._exception = exc
        return result

    @property
    def exception(self) -> Optional[DomainException]:
        """The domain exception behind a failed result."""
        return self._exception


class LoadStatusResponse(StrictModel):
    is_loaded: bool


class StudentColorResponse(StrictModel):
    student_id: str
    color: str


class AvailabilityListResponse(StrictModel):
    items: List[AvailabilitySlot]


class BookingListResponse(StrictModel):
    items: List[Booking]
