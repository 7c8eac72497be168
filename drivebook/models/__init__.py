from .actor import Actor
from .availability import AvailabilitySlot
from .booking import Booking

__all__ = ["Actor", "AvailabilitySlot", "Booking"]
