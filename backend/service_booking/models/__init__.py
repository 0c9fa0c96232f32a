"""ORM models package export."""

from service_booking.models.booking import Booking, BookingStatus
from service_booking.models.branch_service import BranchServiceCapacity
from service_booking.models.service_offering import ServiceOffering

__all__ = [
    "Booking",
    "BookingStatus",
    "BranchServiceCapacity",
    "ServiceOffering",
]
