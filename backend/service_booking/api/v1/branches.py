"""Branch service catalog API."""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from service_booking.api import deps
from service_booking.schemas.catalog import ServiceRead
from service_booking.services import catalog_service

router = APIRouter()


@router.get(
    "/{branch_id}/services",
    response_model=list[ServiceRead],
    summary="List services offered by a branch",
)
async def list_branch_services(
    branch_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[ServiceRead]:
    return await catalog_service.list_services_for_branch(session, branch_id=branch_id)
