"""Liveness and database readiness probes."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from service_booking.api import deps
from service_booking.core.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", summary="Booking API liveness")
async def healthcheck() -> dict[str, str]:
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": settings.app_env,
    }


@router.get("/ready", summary="Booking store readiness")
async def readiness(
    response: Response,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> dict[str, str]:
    """Report whether the booking database answers a trivial query."""
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Booking store readiness check failed: %s", exc)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "unavailable", "database": "unreachable"}
    return {"status": "ok", "database": "ok"}
