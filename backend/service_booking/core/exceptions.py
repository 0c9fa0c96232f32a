"""
Domain-specific exceptions for the booking engine.

Every failure carries a stable ``code`` so callers can tell a conflict from a
missing record or a broken business rule without parsing messages. The API
layer renders them through ``to_http_exception``.
"""

from __future__ import annotations

from datetime import date
from typing import Any, ClassVar, Sequence

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class BookingError(Exception):
    """Base exception for all booking engine errors."""

    code: ClassVar[str] = "booking_error"
    status_code: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
    retryable: ClassVar[bool] = False

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "code": self.code,
                "message": self.message,
                "details": self.details,
            },
            headers={"Retry-After": "1"} if self.retryable else None,
        )


class BookingValidationError(BookingError):
    """Required input is missing or malformed."""

    code = "validation_error"
    status_code = HTTP_422_UNPROCESSABLE


class ConflictError(BookingError):
    """The request conflicts with the current state of a booking."""

    code = "conflict"
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(BookingError):
    """A referenced record does not exist."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class BusinessRuleViolation(BookingError):
    """The request breaks a booking business rule."""

    code = "business_rule_violation"
    status_code = status.HTTP_400_BAD_REQUEST


class StoreUnavailableError(BookingError):
    """The booking store timed out or refused the transaction; safe to retry."""

    code = "store_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    retryable = True


class PendingBookingExistsError(ConflictError):
    code = "pending_booking_exists"

    def __init__(self, car_id: int) -> None:
        super().__init__(
            f"Car ID {car_id} already has a pending booking and cannot book again.",
            {"car_id": car_id},
        )


class BookingAlreadyCancelledError(ConflictError):
    code = "booking_already_cancelled"

    def __init__(self, booking_id: int | None) -> None:
        super().__init__(
            f"Booking ID {booking_id} is already cancelled.",
            {"booking_id": booking_id},
        )


class BookingNotFoundError(NotFoundError):
    code = "booking_not_found"


class CapacityRuleNotFoundError(NotFoundError):
    code = "capacity_rule_not_found"

    def __init__(self, branch_id: int, service_id: int) -> None:
        super().__init__(
            f"Capacity rule not found for Branch ID {branch_id} "
            f"and Service ID {service_id}.",
            {"branch_id": branch_id, "service_id": service_id},
        )


class DateUnavailableError(BusinessRuleViolation):
    code = "date_unavailable"

    def __init__(self, requested: date | None, available: Sequence[date]) -> None:
        offered = ", ".join(day.isoformat() for day in available)
        requested_label = requested.isoformat() if requested is not None else "None"
        super().__init__(
            f"Requested date {requested_label} is not available. "
            f"Please choose one of the nearest available dates: {offered}",
            {
                "requested_date": requested.isoformat() if requested else None,
                "available_dates": [day.isoformat() for day in available],
            },
        )
        self.available_dates = list(available)


class RescheduleLimitReachedError(BusinessRuleViolation):
    code = "reschedule_limit_reached"

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"You have reached the maximum of {limit} consecutive reschedules. "
            "Please visit the Automotive Group.",
            {"limit": limit},
        )


class InvalidStatusTransitionError(BusinessRuleViolation):
    code = "invalid_status_transition"


class NoAvailabilityError(BusinessRuleViolation):
    code = "no_availability"

    def __init__(self, branch_id: int, service_id: int, horizon_days: int) -> None:
        super().__init__(
            f"No available dates for Branch ID {branch_id} and Service ID "
            f"{service_id} within the next {horizon_days} days.",
            {
                "branch_id": branch_id,
                "service_id": service_id,
                "horizon_days": horizon_days,
            },
        )


class CapacityExceededError(BusinessRuleViolation):
    code = "capacity_exceeded"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, branch_id: int, service_id: int, booking_date: date) -> None:
        super().__init__(
            f"Capacity limit reached for Branch ID {branch_id}, Service ID "
            f"{service_id} on {booking_date.isoformat()}.",
            {
                "branch_id": branch_id,
                "service_id": service_id,
                "booking_date": booking_date.isoformat(),
            },
        )


__all__ = [
    "BookingAlreadyCancelledError",
    "BookingError",
    "BookingNotFoundError",
    "BookingValidationError",
    "BusinessRuleViolation",
    "CapacityExceededError",
    "CapacityRuleNotFoundError",
    "ConflictError",
    "DateUnavailableError",
    "InvalidStatusTransitionError",
    "NoAvailabilityError",
    "NotFoundError",
    "PendingBookingExistsError",
    "RescheduleLimitReachedError",
    "StoreUnavailableError",
]
