# app/services/availability_service.py
"""
Vehicle availability over a date range.
Dates are ISO strings compared lexically — "2024-06-01" < "2024-06-10" holds
without parsing, which is what the stored data relies on.
"""

from typing import Iterable, List
from app.models.booking import Booking


def overlaps(booking: Booking, pickup_date: str, return_date: str) -> bool:
    """Inclusive overlap: the ranges share at least one day, endpoints included."""
    if booking.pickup_date is None or booking.return_date is None:
        return False
    return pickup_date <= str(booking.return_date) and return_date >= str(booking.pickup_date)


def find_conflicts(bookings: Iterable[Booking], vehicle: str,
                   pickup_date: str, return_date: str) -> List[Booking]:
    return [b for b in bookings
            if b.vehicle == vehicle and overlaps(b, pickup_date, return_date)]


def is_available(bookings: Iterable[Booking], vehicle: str,
                 pickup_date: str, return_date: str) -> bool:
    """True when no booking for this vehicle overlaps [pickup_date, return_date]."""
    return not find_conflicts(bookings, vehicle, pickup_date, return_date)
