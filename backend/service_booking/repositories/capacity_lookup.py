"""Capacity rules backed by the ``branch_services`` table."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from service_booking.core.exceptions import CapacityRuleNotFoundError
from service_booking.models.branch_service import BranchServiceCapacity


class SqlAlchemyCapacityLookup:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_max_capacity(self, branch_id: int, service_id: int) -> int:
        result = await self._session.execute(
            select(BranchServiceCapacity.capacity_per_day).where(
                BranchServiceCapacity.branch_id == branch_id,
                BranchServiceCapacity.service_id == service_id,
            )
        )
        capacity = result.scalar_one_or_none()
        if capacity is None:
            raise CapacityRuleNotFoundError(branch_id, service_id)
        return capacity
