"""Tests for the nearest-available-date search."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from service_booking.services.availability_service import find_available_dates

pytestmark = pytest.mark.asyncio

_START = date(2026, 3, 3)


class _CountingStore:
    """Minimal store answering ``count_active`` from a fixed table."""

    def __init__(self, counts: dict[date, int]) -> None:
        self.counts = counts
        self.queried: list[date] = []

    async def count_active(self, branch_id: int, service_id: int, booking_date: date) -> int:
        self.queried.append(booking_date)
        return self.counts.get(booking_date, 0)


async def test_returns_nearest_dates_below_capacity() -> None:
    store = _CountingStore(
        {
            _START: 2,
            _START + timedelta(days=2): 2,
            _START + timedelta(days=3): 1,
        }
    )

    found = await find_available_dates(
        store,  # type: ignore[arg-type]
        branch_id=10,
        service_id=1,
        max_capacity=2,
        count=3,
        start=_START,
        horizon_days=30,
    )

    assert found == [
        _START + timedelta(days=1),
        _START + timedelta(days=3),
        _START + timedelta(days=4),
    ]
    assert found == sorted(found)
    assert all(store.counts.get(day, 0) < 2 for day in found)
    # scanning stops once enough dates are collected
    assert store.queried[-1] == _START + timedelta(days=4)


async def test_stops_at_horizon() -> None:
    store = _CountingStore({_START + timedelta(days=offset): 5 for offset in range(10)})

    found = await find_available_dates(
        store,  # type: ignore[arg-type]
        branch_id=10,
        service_id=1,
        max_capacity=5,
        count=3,
        start=_START,
        horizon_days=10,
    )

    assert found == []
    assert len(store.queried) == 10


async def test_zero_count_skips_queries() -> None:
    store = _CountingStore({})

    found = await find_available_dates(
        store,  # type: ignore[arg-type]
        branch_id=10,
        service_id=1,
        max_capacity=2,
        count=0,
        start=_START,
        horizon_days=10,
    )

    assert found == []
    assert store.queried == []
