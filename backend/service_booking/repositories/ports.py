"""Interfaces the booking coordinator depends on."""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from datetime import date
from typing import Protocol

from service_booking.schemas.booking import BookingRecord


class CapacityLookup(Protocol):
    async def get_max_capacity(self, branch_id: int, service_id: int) -> int:
        """Return the daily capacity, raising ``CapacityRuleNotFoundError``."""
        ...


class BookingStore(Protocol):
    """Durable booking records plus the transaction boundary around them."""

    def transaction(self) -> AbstractAsyncContextManager[None]: ...

    async def find_by_id(self, booking_id: int) -> BookingRecord | None: ...

    async def find_by_car_id(self, car_id: int) -> Sequence[BookingRecord]: ...

    async def find_recent_by_car_id(
        self, car_id: int, limit: int
    ) -> Sequence[BookingRecord]: ...

    async def count_active(
        self, branch_id: int, service_id: int, booking_date: date
    ) -> int: ...

    async def exists_pending(self, car_id: int) -> bool: ...

    async def save(self, record: BookingRecord) -> BookingRecord: ...

    async def lock_vehicle(self, car_id: int) -> None: ...

    async def lock_slot(
        self, branch_id: int, service_id: int, booking_date: date
    ) -> None: ...
