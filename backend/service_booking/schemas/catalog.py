"""Schemas for the branch service catalog."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ServiceRead(BaseModel):
    """Service offered at a branch."""

    id: int
    name: str
    capacity_per_day: int

    model_config = ConfigDict(from_attributes=True)
