# app/models/booking.py
"""
Booking record — the only entity in the system.
Stored as a camelCase JSON object inside the bookings file.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

STATUS_PENDING = "Pending"
STATUS_ACCEPTED = "Accepted"

# attribute name → JSON key
_FIELD_MAP = {
    "id": "id",
    "vehicle": "vehicle",
    "pickup_date": "pickupDate",
    "return_date": "returnDate",
    "location": "location",
    "name": "name",
    "email": "email",
    "contact": "contact",
    "status": "status",
    "created_at": "createdAt",
}


@dataclass
class Booking:
    id: Any                  # int for new bookings; files written by hand may hold anything
    vehicle: Optional[str]
    pickup_date: Optional[str]   # ISO date string, compared lexically
    return_date: Optional[str]
    location: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    contact: Optional[str] = None
    status: Optional[str] = STATUS_PENDING
    created_at: Optional[str] = None
    # Unknown keys from the file, written back untouched
    extra: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> "Booking":
        known = {attr: data.get(key) for attr, key in _FIELD_MAP.items()}
        extra = {k: v for k, v in data.items() if k not in _FIELD_MAP.values()}
        return cls(**known, extra=extra)

    def to_dict(self) -> dict:
        data = {key: getattr(self, attr) for attr, key in _FIELD_MAP.items()}
        data.update(self.extra)
        return data

    def matches_id(self, booking_id) -> bool:
        """Ids compare as strings so path params ("3") match stored ints (3)."""
        return str(self.id) == str(booking_id)

    def __repr__(self):
        return f"<Booking {self.id} vehicle={self.vehicle} status={self.status}>"
