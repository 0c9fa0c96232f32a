"""Versioned API router."""

from fastapi import APIRouter

from . import bookings, branches, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(branches.router, prefix="/branches", tags=["branches"])
