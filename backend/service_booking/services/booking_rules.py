"""Booking state machine and business rules.

Each check returns the error it found, or ``None`` when the booking may
proceed. Nothing here touches the store.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime

from service_booking.core.exceptions import (
    BookingAlreadyCancelledError,
    BookingError,
    BookingValidationError,
    DateUnavailableError,
    InvalidStatusTransitionError,
    PendingBookingExistsError,
    RescheduleLimitReachedError,
)
from service_booking.models.booking import BookingStatus
from service_booking.schemas.booking import BookingRecord

_ALLOWED_STATUS_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {
        BookingStatus.RESCHEDULED,
        BookingStatus.CANCELLED,
        BookingStatus.COMPLETED,
    },
    BookingStatus.RESCHEDULED: set(),
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELLED: set(),
}


def check_required_ids(**ids: int | None) -> BookingError | None:
    missing = sorted(name for name, value in ids.items() if value is None)
    if missing:
        return BookingValidationError(
            f"Missing required field(s): {', '.join(missing)}",
            {"missing": missing},
        )
    invalid = sorted(name for name, value in ids.items() if value is not None and value <= 0)
    if invalid:
        return BookingValidationError(
            f"Identifier(s) must be positive: {', '.join(invalid)}",
            {"invalid": invalid},
        )
    return None


def count_consecutive_reschedules(bookings: Iterable[BookingRecord]) -> int:
    """Count the leading run of RESCHEDULED bookings, newest first.

    The run ends at the first booking with any other status; a COMPLETED
    visit therefore clears the penalty.
    """
    count = 0
    for booking in bookings:
        if booking.status != BookingStatus.RESCHEDULED:
            break
        count += 1
    return count


def validate_transition(
    current: BookingStatus, target: BookingStatus
) -> BookingError | None:
    allowed = _ALLOWED_STATUS_TRANSITIONS.get(current, set())
    if target not in allowed:
        return InvalidStatusTransitionError(
            f"Invalid status transition from {current.value} to {target.value}",
            {"from": current.value, "to": target.value},
        )
    return None


def transition(
    record: BookingRecord, target: BookingStatus, *, at: datetime
) -> BookingRecord:
    """Return a copy of ``record`` moved to ``target`` and stamped ``at``."""
    error = validate_transition(record.status, target)
    if error is not None:
        raise error
    return record.model_copy(update={"status": target, "updated_at": at})


def successor_of(
    record: BookingRecord,
    *,
    booking_date: date,
    comments: str | None,
    at: datetime,
) -> BookingRecord:
    """Build the unsaved PENDING booking that replaces a rescheduled one."""
    return BookingRecord(
        service_id=record.service_id,
        car_id=record.car_id,
        branch_id=record.branch_id,
        booking_date=booking_date,
        status=BookingStatus.PENDING,
        comments=comments,
        created_at=at,
        updated_at=at,
    )


def check_can_create(*, car_id: int, pending_exists: bool) -> BookingError | None:
    if pending_exists:
        return PendingBookingExistsError(car_id)
    return None


def check_can_reschedule(record: BookingRecord) -> BookingError | None:
    if record.status != BookingStatus.PENDING:
        return InvalidStatusTransitionError(
            "Only PENDING bookings can be rescheduled.",
            {"booking_id": record.id, "status": record.status.value},
        )
    return None


def check_reschedule_limit(
    history: Sequence[BookingRecord], *, limit: int
) -> BookingError | None:
    if count_consecutive_reschedules(history) >= limit:
        return RescheduleLimitReachedError(limit)
    return None


def check_can_cancel(record: BookingRecord) -> BookingError | None:
    if record.status == BookingStatus.CANCELLED:
        return BookingAlreadyCancelledError(record.id)
    if record.status != BookingStatus.PENDING:
        return InvalidStatusTransitionError(
            f"Booking ID {record.id} cannot be cancelled as its status is not PENDING.",
            {"booking_id": record.id, "status": record.status.value},
        )
    return None


def select_booking_date(
    requested: date | None, available: Sequence[date]
) -> date | BookingError:
    """Pick the requested date if it is offered, else the nearest one.

    A requested date outside ``available`` is an error listing the offer.
    """
    if requested is None:
        if not available:
            return DateUnavailableError(None, available)
        return available[0]
    if requested in available:
        return requested
    return DateUnavailableError(requested, available)
