"""Booking models."""
from __future__ import annotations

import enum
from datetime import date

from sqlalchemy import Date, Enum, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from service_booking.db.base import Base
from service_booking.models.mixins import TimestampMixin


class BookingStatus(str, enum.Enum):
    """Lifecycle states for bookings."""

    PENDING = "PENDING"
    RESCHEDULED = "RESCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


_PENDING_ONLY = text("status = 'PENDING'")


class Booking(TimestampMixin, Base):
    """A service appointment for a vehicle at a branch."""

    __tablename__ = "bookings"
    __table_args__ = (
        # one pending booking per car, enforced by the database
        Index(
            "uq_booking_pending_car",
            "car_id",
            unique=True,
            sqlite_where=_PENDING_ONLY,
            postgresql_where=_PENDING_ONLY,
        ),
        Index("ix_booking_slot", "branch_id", "service_id", "booking_date", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    service_id: Mapped[int] = mapped_column(
        ForeignKey("services.id", ondelete="RESTRICT"), nullable=False
    )
    car_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    branch_id: Mapped[int] = mapped_column(Integer, nullable=False)
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status", native_enum=False, length=16),
        default=BookingStatus.PENDING,
        nullable=False,
    )
    comments: Mapped[str | None] = mapped_column(String(1024))
