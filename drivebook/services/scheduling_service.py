# drivebook/services/scheduling_service.py
"""
Scheduling Service for DriveBook

Owns the two scheduling collections (availability slots and bookings)
and is their only writer. Handles:
- Publishing, rewriting and removing trainer availability
- Requesting, approving, rejecting and rewriting bookings
- Role-scoped read views over both collections
- Mirroring every change into the schedule repository
- Requesting notifications for booking lifecycle changes

State transitions live in drivebook.domain.schedule_state as pure
functions; this class applies them, persists what changed and hands
the resulting events to the publisher.
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_LESSON_MINUTES
from ..core.enums import BookingStatus
from ..core.exceptions import DomainException, RepositoryException
from ..core.ulid_helper import generate_ulid
from ..domain import schedule_state
from ..domain.schedule_state import ScheduleState, Transition
from ..events import EventPublisher
from ..models.actor import Actor
from ..models.availability import AvailabilitySlot
from ..models.booking import Booking
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.schedule_repository import ScheduleRepository
from ..schemas.schedule import ScheduleResult
from ..utils.colors import student_color
from .base import BaseService
from .notification_service import NotificationService

AVAILABILITY = "availability"
BOOKINGS = "bookings"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SchedulingService(BaseService):
    """
    Service layer for availability and booking operations.

    Mutations never raise for authorization or precondition failures;
    they return a failed ScheduleResult instead. Persistence and
    notification failures are logged and absorbed, leaving the
    in-memory state authoritative.
    """

    def __init__(
        self,
        repository: ScheduleRepository,
        notification_service: Optional[NotificationService] = None,
        event_publisher: Optional[EventPublisher] = None,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = generate_ulid,
    ):
        """
        Initialize scheduling service.

        Args:
            repository: Schedule repository mirroring both collections
            notification_service: Optional notification service instance
            event_publisher: Optional event publisher (defaults to one over
                the notification service)
            clock: Source of booking creation timestamps
            id_factory: Source of new slot and booking ids
        """
        super().__init__()
        self.repository = repository
        self.notification_service = notification_service or NotificationService()
        self.event_publisher = event_publisher or EventPublisher(self.notification_service)
        self._clock = clock
        self._new_id = id_factory
        self._state = ScheduleState()
        self._is_loaded = False
        self._write_lock = asyncio.Lock()

    # Lifecycle

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    @BaseService.measure_operation("load")
    async def load(self) -> None:
        """
        Load both collections from the repository.

        Missing keys load as empty collections. Each collection loads on
        its own: a failure is logged and leaves only that collection
        empty, the other keeps what storage holds. Either way is_loaded
        becomes True.
        """
        self.logger.info("Loading schedule data from storage...")
        try:
            availability, bookings = await asyncio.gather(
                self.repository.load_availability(),
                self.repository.load_bookings(),
                return_exceptions=True,
            )
            self._state = ScheduleState(
                availability=tuple(self._loaded_or_empty(AVAILABILITY, availability)),
                bookings=tuple(self._loaded_or_empty(BOOKINGS, bookings)),
            )
        finally:
            self._is_loaded = True

    def _loaded_or_empty(self, name: str, outcome: Any) -> Sequence[Any]:
        if not isinstance(outcome, BaseException):
            return outcome
        if not isinstance(outcome, RepositoryException):
            raise outcome
        self.logger.error(f"Error loading {name}: {str(outcome)}", exc_info=outcome)
        prometheus_metrics.record_persistence_failure(name, "load")
        return ()

    async def aclose(self) -> None:
        """Wait for outstanding notification deliveries, then release storage and sender clients."""
        await self.notification_service.aclose()
        await self.repository.aclose()

    # Raw collections (read-only snapshots)

    @property
    def availability(self) -> Tuple[AvailabilitySlot, ...]:
        return self._state.availability

    @property
    def bookings(self) -> Tuple[Booking, ...]:
        return self._state.bookings

    # Availability operations

    @BaseService.measure_operation("add_availability")
    async def add_availability(
        self, actor: Optional[Actor], start: datetime, end: datetime
    ) -> ScheduleResult:
        slot_id = self._new_id()
        return await self._apply(
            "add_availability",
            actor,
            lambda state: schedule_state.add_availability(
                state, actor, start, end, slot_id=slot_id
            ),
        )

    @BaseService.measure_operation("remove_availability")
    async def remove_availability(self, actor: Optional[Actor], slot_id: str) -> ScheduleResult:
        return await self._apply(
            "remove_availability",
            actor,
            lambda state: schedule_state.remove_availability(state, actor, slot_id),
        )

    @BaseService.measure_operation("update_availability_slot")
    async def update_availability_slot(
        self, actor: Optional[Actor], slot_id: str, start: datetime, end: datetime
    ) -> ScheduleResult:
        return await self._apply(
            "update_availability_slot",
            actor,
            lambda state: schedule_state.update_availability_slot(
                state, actor, slot_id, start, end
            ),
        )

    # Booking operations

    @BaseService.measure_operation("request_booking")
    async def request_booking(
        self, actor: Optional[Actor], student_id: str, start: datetime, end: datetime
    ) -> ScheduleResult:
        """
        Create a booking.

        Trainers book lessons directly (approved); students request them
        (pending) against their associated trainer.
        """
        booking_id = self._new_id()
        created_at = self._clock()
        return await self._apply(
            "request_booking",
            actor,
            lambda state: schedule_state.request_booking(
                state,
                actor,
                student_id,
                start,
                end,
                booking_id=booking_id,
                created_at=created_at,
            ),
        )

    async def create_booking_from_slot(
        self,
        actor: Optional[Actor],
        student_id: str,
        day: date,
        hour: int,
        minute: int,
        duration_minutes: int = DEFAULT_LESSON_MINUTES,
        tz: tzinfo = timezone.utc,
    ) -> ScheduleResult:
        """Request a booking for a calendar cell: a day plus a start hour and minute."""
        start = datetime.combine(day, time(hour, minute), tzinfo=tz)
        end = start + timedelta(minutes=duration_minutes)
        return await self.request_booking(actor, student_id, start, end)

    @BaseService.measure_operation("update_booking_status")
    async def update_booking_status(
        self, actor: Optional[Actor], booking_id: str, status: BookingStatus
    ) -> ScheduleResult:
        """Approve a booking, or reject it (which deletes it)."""
        return await self._apply(
            "update_booking_status",
            actor,
            lambda state: schedule_state.update_booking_status(state, actor, booking_id, status),
        )

    @BaseService.measure_operation("update_booking")
    async def update_booking(
        self,
        actor: Optional[Actor],
        booking_id: str,
        student_id: str,
        start: datetime,
        end: datetime,
    ) -> ScheduleResult:
        return await self._apply(
            "update_booking",
            actor,
            lambda state: schedule_state.update_booking(
                state, actor, booking_id, student_id, start, end
            ),
        )

    # Views

    def my_bookings(self, actor: Optional[Actor]) -> List[Booking]:
        return list(schedule_state.my_bookings(self._state, actor))

    def bookings_for_student(self, student_id: str) -> List[Booking]:
        return list(schedule_state.bookings_for_student(self._state, student_id))

    def bookings_for_trainer(
        self, actor: Optional[Actor], trainer_id: Optional[str] = None
    ) -> List[Booking]:
        return list(schedule_state.bookings_for_trainer(self._state, actor, trainer_id))

    def my_trainer_availability(self, actor: Optional[Actor]) -> List[AvailabilitySlot]:
        return list(schedule_state.my_trainer_availability(self._state, actor))

    def availability_for_trainer(
        self, actor: Optional[Actor], trainer_id: Optional[str] = None
    ) -> List[AvailabilitySlot]:
        return list(schedule_state.availability_for_trainer(self._state, actor, trainer_id))

    def student_color(self, student_id: str) -> str:
        return student_color(student_id)

    # Internals

    async def _apply(
        self,
        operation: str,
        actor: Optional[Actor],
        build: Callable[[ScheduleState], Transition],
    ) -> ScheduleResult:
        previous = self._state
        try:
            transition = build(previous)
        except DomainException as e:
            self.logger.info(
                f"{operation} rejected: {e.message}",
                extra={"operation": operation, "code": e.code, "actor_id": getattr(actor, "id", None)},
            )
            return ScheduleResult.failure(e)

        # No await between reading and replacing the state
        self._state = transition.state
        self.log_operation(operation, actor_id=getattr(actor, "id", None))

        # Notification requests never wait on storage
        self.event_publisher.publish_all(transition.events)

        changed: List[str] = []
        if transition.state.availability != previous.availability:
            changed.append(AVAILABILITY)
        if transition.state.bookings != previous.bookings:
            changed.append(BOOKINGS)
        await self._persist(changed)

        return transition.result

    async def _persist(self, collections: Iterable[str]) -> None:
        collections = list(collections)
        if not collections:
            return
        if not self._is_loaded:
            self.logger.debug(f"Skipping save of {collections} before initial load")
            return

        async with self._write_lock:
            for name in collections:
                try:
                    # Always write the latest state, not the one that triggered the save
                    if name == AVAILABILITY:
                        await self.repository.save_availability(self._state.availability)
                    else:
                        await self.repository.save_bookings(self._state.bookings)
                except RepositoryException as e:
                    self.logger.error(f"Error saving {name}: {str(e)}", exc_info=True)
                    prometheus_metrics.record_persistence_failure(name, "save")
