"""Common API dependencies."""

from __future__ import annotations

from typing import Annotated
from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from service_booking.core.config import get_settings
from service_booking.db.session import get_session
from service_booking.repositories import SqlAlchemyBookingStore, SqlAlchemyCapacityLookup
from service_booking.services.booking_service import BookingCoordinator, BookingPolicy


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


async def get_booking_coordinator(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> BookingCoordinator:
    """Wire the coordinator to store and capacity lookups sharing one session."""
    return BookingCoordinator(
        SqlAlchemyBookingStore(session),
        SqlAlchemyCapacityLookup(session),
        policy=BookingPolicy.from_settings(get_settings()),
    )
