# app/services/booking_service.py
"""
Booking lifecycle: create → Pending, accept → Accepted, free-form status
updates, delete. Every mutation is persisted by the store before any email
goes out, so a mail failure never loses a booking.

Notification policy differs per operation:
  create — REQUIRED: a failed staff notice fails the request (booking stays saved)
  accept — BEST_EFFORT: a failed confirmation is reported as a warning only
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from app.config import settings
from app.models.booking import Booking, STATUS_ACCEPTED, STATUS_PENDING
from app.services.notification_service import build_confirmation, build_staff_notice, send_email
from app.store import BookingStore
from app.utils.logger import get_logger

logger = get_logger(__name__)


class NotifyPolicy(str, Enum):
    REQUIRED = "required"
    BEST_EFFORT = "best_effort"


CREATE_NOTIFY_POLICY = NotifyPolicy.REQUIRED
ACCEPT_NOTIFY_POLICY = NotifyPolicy.BEST_EFFORT


class BookingNotFound(Exception):
    def __init__(self, booking_id):
        super().__init__("Booking not found")
        self.booking_id = booking_id


class InvalidBookingInput(Exception):
    pass


class NotificationFailure(Exception):
    """Raised after the booking was persisted but a REQUIRED notice failed."""

    def __init__(self, booking: Booking, error: Optional[str]):
        super().__init__(error or "Failed to send notification")
        self.booking = booking
        self.error = error


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def create_booking(store: BookingStore, vehicle: str, pickup_date: str, return_date: str,
                         name: str, contact: str, location: Optional[str] = None,
                         email: Optional[str] = None) -> Booking:
    location = location.strip() if location and location.strip() else settings.DEFAULT_LOCATION
    booking = Booking(
        id=None,
        vehicle=vehicle,
        pickup_date=pickup_date,
        return_date=return_date,
        location=location,
        name=name,
        email=email or settings.NO_EMAIL_PLACEHOLDER,
        contact=contact,
        status=STATUS_PENDING,
        created_at=_utc_now_iso(),
    )
    store.add(booking)
    logger.info(f"[BOOKING] Created #{booking.id}: {vehicle} {pickup_date} → {return_date} for {name}")

    outcome = await send_email(build_staff_notice(booking))
    if not outcome.success and CREATE_NOTIFY_POLICY is NotifyPolicy.REQUIRED:
        logger.error(f"[BOOKING] #{booking.id} saved but staff notice failed: {outcome.error}")
        raise NotificationFailure(booking, outcome.error)
    return booking


def list_bookings(store: BookingStore, query: Optional[str] = None,
                  status: Optional[str] = None) -> list[Booking]:
    """Filter by case-insensitive text over name/contact/vehicle/location and exact status."""
    result = store.all()
    if query:
        ql = query.lower()
        result = [b for b in result
                  if any(value is not None and ql in str(value).lower()
                         for value in (b.name, b.contact, b.vehicle, b.location))]
    if status:
        result = [b for b in result if b.status == status]
    return result


def update_status(store: BookingStore, booking_id, status: Optional[str]) -> Booking:
    if store.get(booking_id) is None:
        raise BookingNotFound(booking_id)
    if not status:
        raise InvalidBookingInput("Invalid status")
    booking = store.update(booking_id, status=status)
    if booking is None:
        raise BookingNotFound(booking_id)
    logger.info(f"[BOOKING] #{booking_id} status → {status}")
    return booking


async def accept_booking(store: BookingStore, booking_id) -> dict:
    booking = store.update(booking_id, status=STATUS_ACCEPTED)
    if booking is None:
        raise BookingNotFound(booking_id)
    logger.info(f"[BOOKING] #{booking_id} accepted")

    if not (isinstance(booking.email, str) and "@" in booking.email):
        return {"success": True, "message": "Booking accepted (no email sent, email not provided)"}

    outcome = await send_email(build_confirmation(booking))
    if outcome.success:
        return {"success": True, "message": "Booking accepted and confirmation email sent to customer"}

    logger.warning(f"[BOOKING] #{booking_id} accepted but confirmation failed: {outcome.error}")
    if ACCEPT_NOTIFY_POLICY is NotifyPolicy.REQUIRED:
        raise NotificationFailure(booking, outcome.error)
    return {"success": True, "message": "Booking accepted but email failed to send",
            "error": outcome.error}


def delete_booking(store: BookingStore, booking_id):
    if not store.remove(booking_id):
        raise BookingNotFound(booking_id)
    logger.info(f"[BOOKING] #{booking_id} deleted")
