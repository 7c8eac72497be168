"""Base classes for schedule request and response schemas."""

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Response payloads: unknown fields are a bug, and payloads are read-only once built."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class StrictRequestModel(BaseModel):
    """Request bodies: unknown fields are rejected and ids arrive trimmed."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)
