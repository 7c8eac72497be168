# drivebook/repositories/kv_store.py
"""
Key-value storage backends for the scheduling collections.

InMemoryKeyValueStore is the development and test backend.
RedisKeyValueStore keeps the collections in Redis so they survive
process restarts.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol, runtime_checkable

from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """String-keyed storage of serialized collections."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


class InMemoryKeyValueStore:
    """
    Simple in-memory store.

    Mimics the Redis string interface for development and tests.
    Contents are lost when the process exits.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        logger.info("InMemoryKeyValueStore initialized (development mode)")

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
        logger.debug(f"Stored {key} ({len(value)} bytes)")

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
        logger.debug(f"Deleted key: {key}")

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def clear(self) -> None:
        self._data.clear()


class RedisKeyValueStore:
    """Redis-backed store using the asyncio client."""

    def __init__(self, client: AsyncRedis):
        self._client = client

    @classmethod
    def from_url(cls, redis_url: str) -> "RedisKeyValueStore":
        client = AsyncRedis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        logger.info("[REDIS-STORE] Async Redis client initialized")
        return cls(client)

    async def get(self, key: str) -> Optional[str]:
        value = await self._client.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def set(self, key: str, value: str) -> None:
        await self._client.set(key, value)

    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    async def aclose(self) -> None:
        await self._client.aclose()
        logger.info("[REDIS-STORE] Async Redis client closed")
