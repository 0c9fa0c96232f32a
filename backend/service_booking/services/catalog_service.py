"""Branch service catalog lookups."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from service_booking.models.branch_service import BranchServiceCapacity
from service_booking.models.service_offering import ServiceOffering
from service_booking.schemas.catalog import ServiceRead


async def list_services_for_branch(
    session: AsyncSession,
    *,
    branch_id: int,
) -> list[ServiceRead]:
    """Return the services a branch offers with their daily capacity."""
    result = await session.execute(
        select(
            ServiceOffering.id,
            ServiceOffering.name,
            BranchServiceCapacity.capacity_per_day,
        )
        .join(BranchServiceCapacity, BranchServiceCapacity.service_id == ServiceOffering.id)
        .where(BranchServiceCapacity.branch_id == branch_id)
        .order_by(ServiceOffering.name)
    )
    return [
        ServiceRead(id=service_id, name=name, capacity_per_day=capacity)
        for service_id, name, capacity in result.all()
    ]
