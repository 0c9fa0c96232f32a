"""Search for the nearest dates with free capacity."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, timedelta

from service_booking.repositories.ports import BookingStore


def candidate_dates(start: date, horizon_days: int) -> Iterator[date]:
    """Yield ``horizon_days`` consecutive dates beginning at ``start``."""
    current = start
    for _ in range(horizon_days):
        yield current
        current += timedelta(days=1)


async def find_available_dates(
    store: BookingStore,
    *,
    branch_id: int,
    service_id: int,
    max_capacity: int,
    count: int,
    start: date,
    horizon_days: int,
) -> list[date]:
    """Return up to ``count`` dates, ascending, whose pending count is below capacity.

    The scan never looks further than ``horizon_days`` from ``start``; an empty
    result means the horizon was exhausted and the caller decides what to do.
    """
    available: list[date] = []
    if count <= 0:
        return available
    for candidate in candidate_dates(start, horizon_days):
        active = await store.count_active(branch_id, service_id, candidate)
        if active < max_capacity:
            available.append(candidate)
            if len(available) == count:
                break
    return available
