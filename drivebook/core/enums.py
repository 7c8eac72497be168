# drivebook/core/enums.py
"""
Core enums for the DriveBook scheduling core.

Values are the lowercase strings stored in persisted collections.
"""

from enum import Enum


class RoleName(str, Enum):
    """Roles an authenticated actor can carry."""

    ADMIN = "admin"
    TRAINER = "trainer"
    STUDENT = "student"


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "pending"  # Requested by a student, awaiting trainer approval
    APPROVED = "approved"
    REJECTED = "rejected"  # Never stored; rejecting deletes the booking


class BookingCreator(str, Enum):
    """Which side initiated a booking."""

    TRAINER = "trainer"
    STUDENT = "student"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    REDIS = "redis"


class NotificationBackend(str, Enum):
    LOG = "log"
    REDIS = "redis"
