"""Authenticated actor performing a scheduling operation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..core.enums import RoleName


class Actor(BaseModel):
    """
    The current user as seen by the scheduling core.

    Identity and sessions live elsewhere; the core only reads the id,
    the role and, for students, the associated trainer.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: RoleName
    trainer_id: Optional[str] = None

    @property
    def is_trainer(self) -> bool:
        return self.role == RoleName.TRAINER

    @property
    def is_student(self) -> bool:
        return self.role == RoleName.STUDENT

    @property
    def trainer_context(self) -> Optional[str]:
        """Trainer whose schedule this actor works against."""
        if self.is_trainer:
            return self.id
        return self.trainer_id
