"""Catalog seeding script tests."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from scripts.seed_capacity_rules import seed_capacity
from service_booking.db.session import get_sessionmaker
from service_booking.models import BranchServiceCapacity, ServiceOffering

pytestmark = pytest.mark.asyncio


async def test_seed_is_idempotent(reset_database: None, db_url: str) -> None:
    services = {"Oil change": 5, "Clutch repair": 1}

    assert await seed_capacity([1, 2], services) == 4
    assert await seed_capacity([1, 2], services) == 0

    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        service_count = await session.scalar(select(func.count(ServiceOffering.id)))
        rule = await session.scalar(
            select(BranchServiceCapacity)
            .join(ServiceOffering)
            .where(
                BranchServiceCapacity.branch_id == 2,
                ServiceOffering.name == "Clutch repair",
            )
        )
    assert service_count == 2
    assert rule is not None
    assert rule.capacity_per_day == 1
