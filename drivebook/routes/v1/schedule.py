# drivebook/routes/v1/schedule.py
"""
Schedule routes - availability and booking endpoints.

Thin layer over SchedulingService: request schemas validate input
(including end > start), failed results become HTTP errors, and reads
go through the service's role-scoped views.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import get_current_actor, get_scheduling_service, require_ready_service
from ...models.actor import Actor
from ...schemas.schedule import (
    AvailabilityCreate,
    AvailabilityListResponse,
    AvailabilityUpdate,
    BookingFromSlotRequest,
    BookingListResponse,
    BookingRequest,
    BookingStatusUpdate,
    BookingUpdate,
    LoadStatusResponse,
    ScheduleResult,
    StudentColorResponse,
)
from ...services.scheduling_service import SchedulingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["schedule"])


def _unwrap(result: ScheduleResult) -> ScheduleResult:
    if not result.success and result.exception is not None:
        raise result.exception.to_http_exception()
    return result


@router.get("/status", response_model=LoadStatusResponse)
def get_status(
    service: SchedulingService = Depends(get_scheduling_service),
) -> LoadStatusResponse:
    return LoadStatusResponse(is_loaded=service.is_loaded)


# Availability


@router.get("/availability", response_model=AvailabilityListResponse)
def list_availability(
    trainer_id: Optional[str] = Query(default=None),
    actor: Optional[Actor] = Depends(get_current_actor),
    service: SchedulingService = Depends(require_ready_service),
) -> AvailabilityListResponse:
    """Slots of an explicit trainer, or of the caller's own trainer context."""
    return AvailabilityListResponse(items=service.availability_for_trainer(actor, trainer_id))


@router.post(
    "/availability", response_model=ScheduleResult, status_code=status.HTTP_201_CREATED
)
async def add_availability(
    payload: AvailabilityCreate,
    actor: Optional[Actor] = Depends(get_current_actor),
    service: SchedulingService = Depends(require_ready_service),
) -> ScheduleResult:
    return _unwrap(await service.add_availability(actor, payload.start, payload.end))


@router.patch("/availability/{slot_id}", response_model=ScheduleResult)
async def update_availability(
    slot_id: str,
    payload: AvailabilityUpdate,
    actor: Optional[Actor] = Depends(get_current_actor),
    service: SchedulingService = Depends(require_ready_service),
) -> ScheduleResult:
    return _unwrap(
        await service.update_availability_slot(actor, slot_id, payload.start, payload.end)
    )


@router.delete("/availability/{slot_id}", response_model=ScheduleResult)
async def remove_availability(
    slot_id: str,
    actor: Optional[Actor] = Depends(get_current_actor),
    service: SchedulingService = Depends(require_ready_service),
) -> ScheduleResult:
    return _unwrap(await service.remove_availability(actor, slot_id))


# Bookings


@router.get("/bookings/me", response_model=BookingListResponse)
def list_my_bookings(
    actor: Optional[Actor] = Depends(get_current_actor),
    service: SchedulingService = Depends(require_ready_service),
) -> BookingListResponse:
    return BookingListResponse(items=service.my_bookings(actor))


@router.get("/bookings/students/{student_id}", response_model=BookingListResponse)
def list_student_bookings(
    student_id: str,
    service: SchedulingService = Depends(require_ready_service),
) -> BookingListResponse:
    return BookingListResponse(items=service.bookings_for_student(student_id))


@router.get("/bookings", response_model=BookingListResponse)
def list_trainer_bookings(
    trainer_id: Optional[str] = Query(default=None),
    actor: Optional[Actor] = Depends(get_current_actor),
    service: SchedulingService = Depends(require_ready_service),
) -> BookingListResponse:
    return BookingListResponse(items=service.bookings_for_trainer(actor, trainer_id))


@router.post("/bookings", response_model=ScheduleResult, status_code=status.HTTP_201_CREATED)
async def request_booking(
    payload: BookingRequest,
    actor: Optional[Actor] = Depends(get_current_actor),
    service: SchedulingService = Depends(require_ready_service),
) -> ScheduleResult:
    return _unwrap(
        await service.request_booking(actor, payload.student_id, payload.start, payload.end)
    )


@router.post(
    "/bookings/from-slot", response_model=ScheduleResult, status_code=status.HTTP_201_CREATED
)
async def request_booking_from_slot(
    payload: BookingFromSlotRequest,
    actor: Optional[Actor] = Depends(get_current_actor),
    service: SchedulingService = Depends(require_ready_service),
) -> ScheduleResult:
    return _unwrap(
        await service.create_booking_from_slot(
            actor,
            payload.student_id,
            payload.day,
            payload.hour,
            payload.minute,
            duration_minutes=payload.duration_minutes,
        )
    )


@router.patch("/bookings/{booking_id}", response_model=ScheduleResult)
async def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    actor: Optional[Actor] = Depends(get_current_actor),
    service: SchedulingService = Depends(require_ready_service),
) -> ScheduleResult:
    return _unwrap(
        await service.update_booking(
            actor, booking_id, payload.student_id, payload.start, payload.end
        )
    )


@router.post("/bookings/{booking_id}/status", response_model=ScheduleResult)
async def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    actor: Optional[Actor] = Depends(get_current_actor),
    service: SchedulingService = Depends(require_ready_service),
) -> ScheduleResult:
    """Approve a booking, or reject it (rejection deletes the booking)."""
    return _unwrap(await service.update_booking_status(actor, booking_id, payload.status))


@router.get("/students/{student_id}/color", response_model=StudentColorResponse)
def get_student_color(
    student_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
) -> StudentColorResponse:
    return StudentColorResponse(student_id=student_id, color=service.student_color(student_id))
