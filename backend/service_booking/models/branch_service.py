"""Per-branch daily capacity rules by service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from service_booking.db.base import Base
from service_booking.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from service_booking.models.service_offering import ServiceOffering


class BranchServiceCapacity(TimestampMixin, Base):
    """Maximum pending bookings per day for a service at a branch."""

    __tablename__ = "branch_services"
    __table_args__ = (
        UniqueConstraint("branch_id", "service_id", name="uq_branch_service"),
        CheckConstraint("capacity_per_day > 0", name="ck_branch_service_capacity"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    branch_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    service_id: Mapped[int] = mapped_column(
        ForeignKey("services.id", ondelete="CASCADE"), nullable=False
    )
    capacity_per_day: Mapped[int] = mapped_column(Integer, nullable=False)

    service: Mapped["ServiceOffering"] = relationship(
        "ServiceOffering", back_populates="capacity_rules"
    )
