"""Pydantic schemas for bookings."""
from __future__ import annotations

from datetime import date, datetime, timezone

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from service_booking.models.booking import BookingStatus


class BookingRecord(BaseModel):
    """Immutable snapshot of a booking row.

    Transitions never mutate a record; they build a new one with
    ``model_copy(update=...)`` and hand it to the store.
    """

    id: int | None = None
    service_id: int
    car_id: int
    branch_id: int
    booking_date: date
    status: BookingStatus = BookingStatus.PENDING
    comments: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _coerce_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite hands back naive timestamps
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class BookingCreate(BaseModel):
    """Payload for creating bookings."""

    car_id: int = Field(gt=0)
    service_id: int = Field(gt=0)
    branch_id: int = Field(gt=0)
    booking_date: date | None = None
    comments: str | None = Field(default=None, max_length=1024)


class BookingRescheduleRequest(BaseModel):
    """Payload for rescheduling a pending booking."""

    booking_date: date | None = None
    new_comments: str | None = Field(
        default=None,
        max_length=1024,
        validation_alias=AliasChoices("new_comments", "newComments"),
    )


class AvailableDatesRead(BaseModel):
    """Nearest dates with free capacity for a branch and service."""

    branch_id: int
    service_id: int
    capacity_per_day: int
    available_dates: list[date]
