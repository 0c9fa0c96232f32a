"""Booking coordinator: create, reschedule and cancel as single transactions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import cast

from service_booking.core.config import Settings
from service_booking.core.exceptions import (
    BookingError,
    BookingNotFoundError,
    CapacityExceededError,
    NoAvailabilityError,
)
from service_booking.models.booking import BookingStatus
from service_booking.models.mixins import utcnow
from service_booking.repositories.ports import BookingStore, CapacityLookup
from service_booking.schemas.booking import AvailableDatesRead, BookingRecord
from service_booking.services.availability_service import find_available_dates
from service_booking.services.booking_rules import (
    check_can_cancel,
    check_can_create,
    check_can_reschedule,
    check_required_ids,
    check_reschedule_limit,
    select_booking_date,
    successor_of,
    transition,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class BookingPolicy:
    """Tunable limits applied by the coordinator."""

    offer_count: int = 3
    horizon_days: int = 180
    max_consecutive_reschedules: int = 3
    history_window: int = 3
    fallback_to_tomorrow: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> BookingPolicy:
        return cls(
            offer_count=settings.booking_offer_count,
            horizon_days=settings.availability_horizon_days,
            max_consecutive_reschedules=settings.max_consecutive_reschedules,
            history_window=settings.reschedule_history_window,
            fallback_to_tomorrow=settings.availability_fallback_to_tomorrow,
        )


def _raise_if(error: BookingError | None) -> None:
    if error is not None:
        raise error


def _require_ids(**ids: int | None) -> tuple[int, ...]:
    """Return the ids in keyword order once they are known to be present and positive."""
    _raise_if(check_required_ids(**ids))
    return tuple(cast(int, value) for value in ids.values())


@contextmanager
def _rejections_logged(operation: str, subject: object) -> Iterator[None]:
    try:
        yield
    except BookingError as exc:
        logger.info("%s rejected for %s: %s", operation, subject, exc.code)
        raise


class BookingCoordinator:
    """Runs each booking operation inside one store transaction.

    Eligibility reads (pending check, capacity, availability, reschedule
    history) happen before any write, and the slot count is checked again
    after the write so a concurrent booking cannot push a day over capacity.
    """

    def __init__(
        self,
        store: BookingStore,
        capacity: CapacityLookup,
        *,
        policy: BookingPolicy | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._capacity = capacity
        self._policy = policy or BookingPolicy()
        self._clock = clock

    async def create_booking(
        self,
        car_id: int | None,
        service_id: int | None,
        branch_id: int | None,
        requested_date: date | None = None,
        comments: str | None = None,
    ) -> BookingRecord:
        with _rejections_logged("create", f"car {car_id}"):
            car_id, service_id, branch_id = _require_ids(
                car_id=car_id, service_id=service_id, branch_id=branch_id
            )
            async with self._store.transaction():
                await self._store.lock_vehicle(car_id)
                _raise_if(
                    check_can_create(
                        car_id=car_id,
                        pending_exists=await self._store.exists_pending(car_id),
                    )
                )
                max_capacity, offered = await self._offer_dates(branch_id, service_id)
                chosen = select_booking_date(requested_date, offered)
                if isinstance(chosen, BookingError):
                    raise chosen

                now = self._clock()
                saved = await self._insert_pending(
                    BookingRecord(
                        service_id=service_id,
                        car_id=car_id,
                        branch_id=branch_id,
                        booking_date=chosen,
                        status=BookingStatus.PENDING,
                        comments=comments,
                        created_at=now,
                        updated_at=now,
                    ),
                    max_capacity=max_capacity,
                )
        logger.info(
            "Booking %s created for car %s on %s", saved.id, car_id, saved.booking_date
        )
        return saved

    async def reschedule_booking(
        self,
        old_booking_id: int | None,
        requested_date: date | None,
        new_comments: str | None = None,
    ) -> BookingRecord:
        with _rejections_logged("reschedule", f"booking {old_booking_id}"):
            (old_booking_id,) = _require_ids(old_booking_id=old_booking_id)
            async with self._store.transaction():
                old = await self._get_booking(old_booking_id)
                _raise_if(check_can_reschedule(old))
                await self._store.lock_vehicle(old.car_id)
                # re-read under the vehicle lock
                old = await self._get_booking(old_booking_id)
                _raise_if(check_can_reschedule(old))

                history = await self._reschedule_history(old)
                _raise_if(
                    check_reschedule_limit(
                        history, limit=self._policy.max_consecutive_reschedules
                    )
                )

                max_capacity, offered = await self._offer_dates(
                    old.branch_id, old.service_id
                )
                chosen = select_booking_date(requested_date, offered)
                if isinstance(chosen, BookingError):
                    raise chosen

                now = self._clock()
                retired = await self._store.save(
                    transition(old, BookingStatus.RESCHEDULED, at=now)
                )
                saved = await self._insert_pending(
                    successor_of(old, booking_date=chosen, comments=new_comments, at=now),
                    max_capacity=max_capacity,
                )
        logger.info(
            "Booking %s rescheduled as %s for car %s on %s",
            retired.id,
            saved.id,
            saved.car_id,
            saved.booking_date,
        )
        return saved

    async def cancel_booking(self, booking_id: int | None) -> BookingRecord:
        with _rejections_logged("cancel", f"booking {booking_id}"):
            (booking_id,) = _require_ids(booking_id=booking_id)
            async with self._store.transaction():
                record = await self._get_booking(booking_id)
                await self._store.lock_vehicle(record.car_id)
                record = await self._get_booking(booking_id)
                _raise_if(check_can_cancel(record))
                saved = await self._store.save(
                    transition(record, BookingStatus.CANCELLED, at=self._clock())
                )
        logger.info("Booking %s cancelled for car %s", saved.id, saved.car_id)
        return saved

    async def get_bookings_by_vehicle(self, car_id: int | None) -> list[BookingRecord]:
        (car_id,) = _require_ids(car_id=car_id)
        async with self._store.transaction():
            return list(await self._store.find_by_car_id(car_id))

    async def get_last_booking(self, car_id: int | None) -> BookingRecord:
        (car_id,) = _require_ids(car_id=car_id)
        async with self._store.transaction():
            recent = await self._store.find_recent_by_car_id(car_id, 1)
        if not recent:
            raise BookingNotFoundError(
                f"No bookings found for car ID {car_id}", {"car_id": car_id}
            )
        return recent[0]

    async def get_available_dates(
        self, branch_id: int | None, service_id: int | None
    ) -> AvailableDatesRead:
        branch_id, service_id = _require_ids(branch_id=branch_id, service_id=service_id)
        async with self._store.transaction():
            max_capacity, offered = await self._offer_dates(branch_id, service_id)
        return AvailableDatesRead(
            branch_id=branch_id,
            service_id=service_id,
            capacity_per_day=max_capacity,
            available_dates=offered,
        )

    async def _get_booking(self, booking_id: int) -> BookingRecord:
        record = await self._store.find_by_id(booking_id)
        if record is None:
            raise BookingNotFoundError(
                f"Booking not found with ID: {booking_id}", {"booking_id": booking_id}
            )
        return record

    async def _reschedule_history(self, current: BookingRecord) -> Sequence[BookingRecord]:
        """Most recent bookings before ``current``, newest first."""
        window = self._policy.history_window
        recent = await self._store.find_recent_by_car_id(current.car_id, window + 1)
        return [booking for booking in recent if booking.id != current.id][:window]

    async def _offer_dates(self, branch_id: int, service_id: int) -> tuple[int, list[date]]:
        max_capacity = await self._capacity.get_max_capacity(branch_id, service_id)
        tomorrow = self._clock().date() + timedelta(days=1)
        offered = await find_available_dates(
            self._store,
            branch_id=branch_id,
            service_id=service_id,
            max_capacity=max_capacity,
            count=self._policy.offer_count,
            start=tomorrow,
            horizon_days=self._policy.horizon_days,
        )
        if offered:
            return max_capacity, offered
        if not self._policy.fallback_to_tomorrow:
            raise NoAvailabilityError(branch_id, service_id, self._policy.horizon_days)
        # Legacy behaviour: offer tomorrow even though the scan found it full.
        # _insert_pending still re-counts, so the fallback cannot overbook.
        logger.warning(
            "No capacity for branch %s service %s within %s days; offering %s",
            branch_id,
            service_id,
            self._policy.horizon_days,
            tomorrow,
        )
        return max_capacity, [tomorrow]

    async def _insert_pending(
        self, record: BookingRecord, *, max_capacity: int
    ) -> BookingRecord:
        await self._store.lock_slot(record.branch_id, record.service_id, record.booking_date)
        saved = await self._store.save(record)
        active = await self._store.count_active(
            record.branch_id, record.service_id, record.booking_date
        )
        if active > max_capacity:
            raise CapacityExceededError(
                record.branch_id, record.service_id, record.booking_date
            )
        return saved
