# drivebook/models/availability.py
"""
Availability model for the DriveBook scheduling core.

A slot is a trainer-declared open window for lessons. Slots and
bookings are independent collections: removing a slot never touches
the bookings that fall inside it.
"""

from pydantic import AwareDatetime, BaseModel, ConfigDict


class AvailabilitySlot(BaseModel):
    """Open interval during which a trainer accepts lessons."""

    model_config = ConfigDict(frozen=True)

    id: str
    trainer_id: str
    start: AwareDatetime
    end: AwareDatetime
