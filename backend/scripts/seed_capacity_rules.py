"""Seed the service catalog and default branch capacities."""
from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence

from sqlalchemy import select

from service_booking.core.logging import configure_logging
from service_booking.db.session import get_sessionmaker
from service_booking.models import BranchServiceCapacity, ServiceOffering

logger = logging.getLogger(__name__)

DEFAULT_SERVICES: dict[str, int] = {
    "Oil change": 8,
    "Brake inspection": 4,
    "Tyre rotation": 6,
    "Annual service": 3,
}


async def seed_capacity(branch_ids: Sequence[int], services: dict[str, int]) -> int:
    """Create missing services and branch capacity rules; existing rows are kept."""
    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        offerings: dict[str, ServiceOffering] = {
            offering.name: offering
            for offering in (await session.execute(select(ServiceOffering))).scalars()
        }
        for name in services:
            if name not in offerings:
                offerings[name] = ServiceOffering(name=name)
                session.add(offerings[name])
        await session.flush()

        created = 0
        for branch_id in branch_ids:
            for name, capacity in services.items():
                service_id = offerings[name].id
                existing = await session.execute(
                    select(BranchServiceCapacity).where(
                        BranchServiceCapacity.branch_id == branch_id,
                        BranchServiceCapacity.service_id == service_id,
                    )
                )
                if existing.scalar_one_or_none() is None:
                    session.add(
                        BranchServiceCapacity(
                            branch_id=branch_id,
                            service_id=service_id,
                            capacity_per_day=capacity,
                        )
                    )
                    created += 1
        await session.commit()
    logger.info("Seeded %s capacity rule(s) for %s branch(es).", created, len(branch_ids))
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("branch_ids", nargs="+", type=int, help="Branch ids to seed")
    args = parser.parse_args()
    configure_logging()
    asyncio.run(seed_capacity(args.branch_ids, DEFAULT_SERVICES))


if __name__ == "__main__":
    main()
