"""Booking management API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from service_booking.api import deps
from service_booking.core.exceptions import BookingError
from service_booking.schemas.booking import (
    AvailableDatesRead,
    BookingCreate,
    BookingRecord,
    BookingRescheduleRequest,
)
from service_booking.services.booking_service import BookingCoordinator

router = APIRouter()

Coordinator = Annotated[BookingCoordinator, Depends(deps.get_booking_coordinator)]


@router.post(
    "",
    response_model=BookingRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Create booking",
)
async def create_booking(payload: BookingCreate, coordinator: Coordinator) -> BookingRecord:
    try:
        return await coordinator.create_booking(
            payload.car_id,
            payload.service_id,
            payload.branch_id,
            requested_date=payload.booking_date,
            comments=payload.comments,
        )
    except BookingError as exc:
        raise exc.to_http_exception() from exc


@router.get(
    "/availability",
    response_model=AvailableDatesRead,
    summary="Nearest dates with free capacity",
)
async def get_available_dates(
    coordinator: Coordinator,
    branch_id: Annotated[int, Query(gt=0)],
    service_id: Annotated[int, Query(gt=0)],
) -> AvailableDatesRead:
    try:
        return await coordinator.get_available_dates(branch_id, service_id)
    except BookingError as exc:
        raise exc.to_http_exception() from exc


@router.get(
    "/car/{car_id}",
    response_model=list[BookingRecord],
    summary="List bookings for a vehicle",
)
async def list_bookings_for_car(car_id: int, coordinator: Coordinator) -> list[BookingRecord]:
    try:
        return await coordinator.get_bookings_by_vehicle(car_id)
    except BookingError as exc:
        raise exc.to_http_exception() from exc


@router.get(
    "/last/{car_id}",
    response_model=BookingRecord,
    summary="Most recent booking for a vehicle",
)
async def get_last_booking(car_id: int, coordinator: Coordinator) -> BookingRecord:
    try:
        return await coordinator.get_last_booking(car_id)
    except BookingError as exc:
        raise exc.to_http_exception() from exc


@router.post(
    "/reschedule/{old_booking_id}",
    response_model=BookingRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Reschedule a pending booking",
)
async def reschedule_booking(
    old_booking_id: int,
    payload: BookingRescheduleRequest,
    coordinator: Coordinator,
) -> BookingRecord:
    try:
        return await coordinator.reschedule_booking(
            old_booking_id,
            payload.booking_date,
            payload.new_comments,
        )
    except BookingError as exc:
        raise exc.to_http_exception() from exc


@router.patch(
    "/cancel/{booking_id}",
    response_model=BookingRecord,
    summary="Cancel a pending booking",
)
async def cancel_booking(booking_id: int, coordinator: Coordinator) -> BookingRecord:
    try:
        return await coordinator.cancel_booking(booking_id)
    except BookingError as exc:
        raise exc.to_http_exception() from exc
