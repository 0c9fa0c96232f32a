"""Test fixtures for the booking backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from datetime import UTC, date, datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from service_booking.core.config import get_settings
from service_booking.db.base import Base
from service_booking.db.session import dispose_engine, get_sessionmaker
from service_booking.main import app
from service_booking.models import (
    Booking,
    BookingStatus,
    BranchServiceCapacity,
    ServiceOffering,
)

MAIN_BRANCH_ID = 10
ANNEX_BRANCH_ID = 20


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def catalog(reset_database: None, db_url: str) -> dict[str, int]:
    """Seed services and branch capacities.

    The main branch takes 2 oil changes and 1 brake inspection a day; the
    annex offers oil changes only. Tyre rotation has no capacity rule.
    """
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        oil = ServiceOffering(name="Oil change")
        brakes = ServiceOffering(name="Brake inspection")
        tyres = ServiceOffering(name="Tyre rotation")
        session.add_all([oil, brakes, tyres])
        await session.flush()

        session.add_all(
            [
                BranchServiceCapacity(
                    branch_id=MAIN_BRANCH_ID, service_id=oil.id, capacity_per_day=2
                ),
                BranchServiceCapacity(
                    branch_id=MAIN_BRANCH_ID, service_id=brakes.id, capacity_per_day=1
                ),
                BranchServiceCapacity(
                    branch_id=ANNEX_BRANCH_ID, service_id=oil.id, capacity_per_day=3
                ),
            ]
        )
        await session.commit()
        return {
            "branch_id": MAIN_BRANCH_ID,
            "annex_branch_id": ANNEX_BRANCH_ID,
            "oil_service_id": oil.id,
            "brake_service_id": brakes.id,
            "tyre_service_id": tyres.id,
        }


@pytest_asyncio.fixture()
async def app_context(catalog: dict[str, int]) -> AsyncIterator[dict[str, object]]:
    """Yield an async client and the seeded catalog ids."""
    context: dict[str, object] = dict(catalog)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context


async def add_booking(
    db_url: str,
    *,
    car_id: int,
    service_id: int,
    branch_id: int,
    booking_date: date,
    status: BookingStatus = BookingStatus.PENDING,
) -> int:
    """Insert a booking row directly, bypassing the coordinator."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = Booking(
            car_id=car_id,
            service_id=service_id,
            branch_id=branch_id,
            booking_date=booking_date,
            status=status,
            created_at=datetime.now(UTC),
            updated_at=datetime.now(UTC),
        )
        session.add(booking)
        await session.commit()
        return booking.id


async def set_status(db_url: str, booking_id: int, status: BookingStatus) -> None:
    """Force a booking into ``status``, as the workshop does on completion."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        booking = await session.get(Booking, booking_id)
        assert booking is not None
        booking.status = status
        await session.commit()


async def fetch_bookings(db_url: str, car_id: int) -> list[Booking]:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        result = await session.execute(
            select(Booking).where(Booking.car_id == car_id).order_by(Booking.id)
        )
        return list(result.scalars().all())
