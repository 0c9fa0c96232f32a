"""Error rendering and log redaction."""

from __future__ import annotations

import logging

from service_booking.core.exceptions import (
    BookingAlreadyCancelledError,
    ConflictError,
    StoreUnavailableError,
)
from service_booking.security.logging_filters import SensitiveFilter, redact


def test_conflict_renders_code_and_message() -> None:
    exc = BookingAlreadyCancelledError(5).to_http_exception()

    assert exc.status_code == 409
    assert exc.detail == {
        "code": "booking_already_cancelled",
        "message": "Booking ID 5 is already cancelled.",
        "details": {"booking_id": 5},
    }
    assert exc.headers is None
    assert isinstance(BookingAlreadyCancelledError(5), ConflictError)


def test_store_unavailable_is_retryable() -> None:
    exc = StoreUnavailableError("busy").to_http_exception()

    assert exc.status_code == 503
    assert exc.headers == {"Retry-After": "1"}


def test_database_password_is_redacted() -> None:
    message = "connect failed for postgresql+asyncpg://booking:s3cret@db:5432/booking"

    assert redact(message) == (
        "connect failed for postgresql+asyncpg://booking:**REDACTED**@db:5432/booking"
    )

    record = logging.LogRecord("test", logging.WARNING, __file__, 1, message, None, None)
    assert SensitiveFilter().filter(record) is True
    assert "s3cret" not in record.getMessage()


def test_password_in_log_arguments_is_redacted() -> None:
    record = logging.LogRecord(
        "service_booking.repositories.booking_store",
        logging.WARNING,
        __file__,
        1,
        "Booking store unavailable: %s",
        ("connect to postgresql://booking:s3cret@db/booking failed",),
        None,
    )

    assert SensitiveFilter().filter(record) is True
    assert record.getMessage() == (
        "Booking store unavailable: connect to "
        "postgresql://booking:**REDACTED**@db/booking failed"
    )


def test_plain_log_arguments_are_left_alone() -> None:
    record = logging.LogRecord(
        "test", logging.INFO, __file__, 1, "Booking %s created", (12,), None
    )

    SensitiveFilter().filter(record)

    assert record.args == (12,)
    assert record.getMessage() == "Booking 12 created"
