"""DriveBook scheduling core: trainer availability and lesson bookings."""

__version__ = "1.0.0"
