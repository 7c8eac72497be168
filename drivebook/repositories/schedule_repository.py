# drivebook/repositories/schedule_repository.py
"""
Schedule Repository for the DriveBook scheduling core.

Mirrors the two in-memory collections into a key-value store as JSON
arrays, one key per collection. The keys are written independently;
there is no transaction spanning both.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..core.constants import DEFAULT_AVAILABILITY_KEY, DEFAULT_BOOKINGS_KEY
from ..core.exceptions import RepositoryException
from ..models.availability import AvailabilitySlot
from ..models.booking import Booking
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T", AvailabilitySlot, Booking)

_availability_adapter: TypeAdapter[List[AvailabilitySlot]] = TypeAdapter(List[AvailabilitySlot])
_bookings_adapter: TypeAdapter[List[Booking]] = TypeAdapter(List[Booking])


class ScheduleRepository:
    """Loads and saves availability slots and bookings."""

    def __init__(
        self,
        store: KeyValueStore,
        availability_key: str = DEFAULT_AVAILABILITY_KEY,
        bookings_key: str = DEFAULT_BOOKINGS_KEY,
    ):
        self.store = store
        self.availability_key = availability_key
        self.bookings_key = bookings_key
        self.logger = logging.getLogger(self.__class__.__name__)

    async def load_availability(self) -> List[AvailabilitySlot]:
        slots = await self._load(self.availability_key, _availability_adapter)
        self.logger.info("Loaded availability: %d slots", len(slots))
        return slots

    async def load_bookings(self) -> List[Booking]:
        bookings = await self._load(self.bookings_key, _bookings_adapter)
        self.logger.info("Loaded bookings: %d bookings", len(bookings))
        return bookings

    async def save_availability(self, slots: Sequence[AvailabilitySlot]) -> None:
        self.logger.debug("Saving availability: %d slots", len(slots))
        await self._save(self.availability_key, _availability_adapter, list(slots))

    async def save_bookings(self, bookings: Sequence[Booking]) -> None:
        self.logger.debug("Saving bookings: %d bookings", len(bookings))
        await self._save(self.bookings_key, _bookings_adapter, list(bookings))

    async def aclose(self) -> None:
        """Release the store's client, for backends that hold one."""
        close = getattr(self.store, "aclose", None)
        if close is not None:
            await close()

    async def _load(self, key: str, adapter: TypeAdapter[List[T]]) -> List[T]:
        try:
            raw = await self.store.get(key)
        except Exception as e:
            raise RepositoryException(f"Failed to read {key}: {str(e)}") from e

        # A missing key is an empty collection, not an error
        if raw is None:
            return []

        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            raise RepositoryException(f"Corrupt payload under {key}: {str(e)}") from e

    async def _save(self, key: str, adapter: TypeAdapter[List[T]], items: List[T]) -> None:
        payload = adapter.dump_json(items).decode("utf-8")
        try:
            await self.store.set(key, payload)
        except Exception as e:
            raise RepositoryException(f"Failed to write {key}: {str(e)}") from e
