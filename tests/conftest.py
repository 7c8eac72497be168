"""Shared fixtures for the scheduling core tests."""

from __future__ import annotations

from datetime import datetime, timezone
import itertools
from typing import Callable, List, Optional, Tuple

import pytest
import pytest_asyncio

from drivebook.core.enums import RoleName
from drivebook.models.actor import Actor
from drivebook.repositories.kv_store import InMemoryKeyValueStore
from drivebook.repositories.schedule_repository import ScheduleRepository
from drivebook.services.notification_service import NotificationService
from drivebook.services.scheduling_service import SchedulingService

FIXED_NOW = datetime(2024, 2, 20, 8, 30, tzinfo=timezone.utc)
SLOT_START = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
SLOT_END = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)


class RecordingSender:
    """Notification sender that remembers what it was asked to deliver."""

    name = "recording"

    def __init__(self) -> None:
        self.sent: List[Tuple[str, str]] = []

    async def send(self, title: str, body: str) -> None:
        self.sent.append((title, body))

    @property
    def titles(self) -> List[str]:
        return [title for title, _ in self.sent]


class FailingSender:
    name = "failing"

    async def send(self, title: str, body: str) -> None:
        raise RuntimeError("device unreachable")


class FailingStore:
    """Key-value store whose every call fails, like a dropped Redis connection."""

    def __init__(self, fail_get: bool = True, fail_set: bool = True):
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.data: dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise ConnectionError("connection refused")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_set:
            raise ConnectionError("connection refused")
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


def make_id_factory(prefix: str = "id") -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def trainer() -> Actor:
    return Actor(id="T1", role=RoleName.TRAINER)


@pytest.fixture
def other_trainer() -> Actor:
    return Actor(id="T2", role=RoleName.TRAINER)


@pytest.fixture
def student() -> Actor:
    return Actor(id="S1", role=RoleName.STUDENT, trainer_id="T1")


@pytest.fixture
def other_student() -> Actor:
    return Actor(id="S3", role=RoleName.STUDENT, trainer_id="T1")


@pytest.fixture
def orphan_student() -> Actor:
    return Actor(id="S2", role=RoleName.STUDENT)


@pytest.fixture
def admin() -> Actor:
    return Actor(id="A1", role=RoleName.ADMIN)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(store: InMemoryKeyValueStore) -> ScheduleRepository:
    return ScheduleRepository(store)


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def notification_service(sender: RecordingSender) -> NotificationService:
    return NotificationService(sender=sender)


@pytest.fixture
def unloaded_service(
    repository: ScheduleRepository, notification_service: NotificationService
) -> SchedulingService:
    return SchedulingService(
        repository,
        notification_service=notification_service,
        clock=lambda: FIXED_NOW,
        id_factory=make_id_factory(),
    )


@pytest_asyncio.fixture
async def service(unloaded_service: SchedulingService) -> SchedulingService:
    await unloaded_service.load()
    yield unloaded_service
    await unloaded_service.aclose()
