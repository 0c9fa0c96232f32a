"""SQLAlchemy implementation of the booking store."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import date

from sqlalchemy import exists, func, select, text
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from service_booking.core.exceptions import (
    BookingError,
    BookingNotFoundError,
    ConflictError,
    PendingBookingExistsError,
    StoreUnavailableError,
)
from service_booking.models.booking import Booking, BookingStatus
from service_booking.models.mixins import utcnow
from service_booking.schemas.booking import BookingRecord

logger = logging.getLogger(__name__)

_PENDING_INDEX_MARKERS = ("uq_booking_pending_car", "bookings.car_id")


def _advisory_key(*parts: object) -> int:
    digest = hashlib.blake2b(
        ":".join(str(part) for part in parts).encode(), digest_size=8
    ).digest()
    return int.from_bytes(digest, "big", signed=True)


def _to_record(row: Booking) -> BookingRecord:
    return BookingRecord.model_validate(row)


class SqlAlchemyBookingStore:
    """Booking store bound to a single ``AsyncSession``.

    The session must not already be inside a transaction when
    ``transaction()`` is entered; one store serves one operation.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            async with self._session.begin():
                yield
        except BookingError:
            raise
        except IntegrityError as exc:
            logger.warning("Booking transaction rejected by constraint: %s", exc.orig)
            raise ConflictError(
                "The booking conflicts with existing data and was not saved."
            ) from exc
        except (OperationalError, PoolTimeoutError) as exc:
            logger.warning("Booking store unavailable: %s", exc)
            raise StoreUnavailableError(
                "The booking store is temporarily unavailable. Please retry."
            ) from exc

    async def find_by_id(self, booking_id: int) -> BookingRecord | None:
        row = await self._session.get(Booking, booking_id, populate_existing=True)
        return _to_record(row) if row is not None else None

    async def find_by_car_id(self, car_id: int) -> Sequence[BookingRecord]:
        result = await self._session.execute(
            select(Booking)
            .where(Booking.car_id == car_id)
            .order_by(Booking.created_at, Booking.id)
        )
        return [_to_record(row) for row in result.scalars().all()]

    async def find_recent_by_car_id(
        self, car_id: int, limit: int
    ) -> Sequence[BookingRecord]:
        result = await self._session.execute(
            select(Booking)
            .where(Booking.car_id == car_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .limit(limit)
        )
        return [_to_record(row) for row in result.scalars().all()]

    async def count_active(
        self, branch_id: int, service_id: int, booking_date: date
    ) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(Booking)
            .where(
                Booking.branch_id == branch_id,
                Booking.service_id == service_id,
                Booking.booking_date == booking_date,
                Booking.status == BookingStatus.PENDING,
            )
        )
        return result.scalar_one()

    async def exists_pending(self, car_id: int) -> bool:
        result = await self._session.execute(
            select(
                exists().where(
                    Booking.car_id == car_id,
                    Booking.status == BookingStatus.PENDING,
                )
            )
        )
        return bool(result.scalar())

    async def save(self, record: BookingRecord) -> BookingRecord:
        """Insert a new record or persist the mutable fields of an existing one."""
        if record.id is None:
            row = Booking(**record.model_dump(exclude={"id"}, exclude_none=True))
            self._session.add(row)
        else:
            existing = await self._session.get(Booking, record.id)
            if existing is None:
                raise BookingNotFoundError(
                    f"Booking not found with ID: {record.id}",
                    {"booking_id": record.id},
                )
            row = existing
            row.status = record.status
            row.comments = record.comments
            row.updated_at = record.updated_at or utcnow()
        try:
            await self._session.flush()
        except IntegrityError as exc:
            message = str(exc.orig)
            if any(marker in message for marker in _PENDING_INDEX_MARKERS):
                raise PendingBookingExistsError(record.car_id) from exc
            raise
        return _to_record(row)

    async def lock_vehicle(self, car_id: int) -> None:
        await self._advisory_lock(_advisory_key("vehicle", car_id))

    async def lock_slot(
        self, branch_id: int, service_id: int, booking_date: date
    ) -> None:
        await self._advisory_lock(
            _advisory_key("slot", branch_id, service_id, booking_date.isoformat())
        )

    async def _advisory_lock(self, key: int) -> None:
        # SQLite serialises writers with its database lock
        if self._session.get_bind().dialect.name != "postgresql":
            return
        await self._session.execute(
            text("SELECT pg_advisory_xact_lock(:key)"), {"key": key}
        )
