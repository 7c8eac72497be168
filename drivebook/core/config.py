# drivebook/core/config.py
"""Runtime configuration for the DriveBook scheduling core."""

from __future__ import annotations

import logging
import os
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_AVAILABILITY_KEY,
    DEFAULT_BOOKINGS_KEY,
    DEFAULT_NOTIFICATION_CHANNEL,
)
from .enums import NotificationBackend, StorageBackend

logger = logging.getLogger(__name__)


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


class Settings(BaseSettings):
    """Runtime settings loaded from environment."""

    environment: str = "development"
    log_level: str = "INFO"

    storage_backend: StorageBackend = StorageBackend.MEMORY
    redis_url: Optional[str] = None
    availability_key: str = DEFAULT_AVAILABILITY_KEY
    bookings_key: str = DEFAULT_BOOKINGS_KEY

    notifications_enabled: bool = True
    notification_backend: NotificationBackend = NotificationBackend.LOG
    notification_channel: str = DEFAULT_NOTIFICATION_CHANNEL

    slow_operation_threshold_seconds: float = Field(default=1.0, gt=0)

    model_config = SettingsConfigDict(env_prefix="DRIVEBOOK_", env_file=".env", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("availability_key", "bookings_key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Storage keys must not be empty")
        return v

    @property
    def is_testing(self) -> bool:
        return self.environment == "test" or is_running_tests()

    @property
    def effective_redis_url(self) -> str:
        return self.redis_url or "redis://localhost:6379"


settings = Settings()
