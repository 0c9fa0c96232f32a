"""Catalog of services a branch can offer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from service_booking.db.base import Base

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from service_booking.models.branch_service import BranchServiceCapacity


class ServiceOffering(Base):
    """A bookable service such as an oil change or a brake inspection."""

    __tablename__ = "services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)

    capacity_rules: Mapped[list["BranchServiceCapacity"]] = relationship(
        "BranchServiceCapacity", back_populates="service"
    )
