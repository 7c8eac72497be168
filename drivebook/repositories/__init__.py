"""Persistence layer for the scheduling collections."""

from .kv_store import InMemoryKeyValueStore, KeyValueStore, RedisKeyValueStore
from .schedule_repository import ScheduleRepository

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "RedisKeyValueStore",
    "ScheduleRepository",
]
