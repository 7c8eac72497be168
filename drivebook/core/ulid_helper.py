"""ULID identifiers for availability slots and bookings."""

from ulid import ULID


def generate_ulid() -> str:
    """New 26-character id; lexicographic order follows creation time."""
    return str(ULID())
