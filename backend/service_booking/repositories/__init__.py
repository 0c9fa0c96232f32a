"""Persistence collaborators used by the booking coordinator."""

from service_booking.repositories.booking_store import SqlAlchemyBookingStore
from service_booking.repositories.capacity_lookup import SqlAlchemyCapacityLookup
from service_booking.repositories.ports import BookingStore, CapacityLookup

__all__ = [
    "BookingStore",
    "CapacityLookup",
    "SqlAlchemyBookingStore",
    "SqlAlchemyCapacityLookup",
]
