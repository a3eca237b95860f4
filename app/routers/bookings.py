# app/routers/bookings.py
"""
Booking endpoints — public booking form + staff dashboard.
Domain errors (not found, invalid status, failed staff notice) are turned
into JSON responses by the handlers registered in app.main.
"""

from fastapi import APIRouter, Depends
from typing import Optional
from app.store import BookingStore, get_store
from app.schemas.booking import (
    AvailabilityOut, AvailabilityRequest, BookingCreate, BookingOut, StatusUpdate,
)
from app.services.availability_service import find_conflicts
from app.services import booking_service
from app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/check-availability", response_model=AvailabilityOut, summary="Check vehicle availability")
def check_availability(body: AvailabilityRequest, store: BookingStore = Depends(get_store)):
    """A vehicle is available when no booking for it overlaps the requested dates (inclusive)."""
    conflicts = find_conflicts(store.all(), body.vehicle, body.pickup_date, body.return_date)
    if conflicts:
        logger.debug(f"{body.vehicle} busy {body.pickup_date}→{body.return_date}: "
                     f"conflicts with {[b.id for b in conflicts]}")
    return {"available": not conflicts}


@router.post("/book", summary="Create a booking and notify staff")
async def book(body: BookingCreate, store: BookingStore = Depends(get_store)):
    logger.info(f"Received booking: {body.model_dump(by_alias=True)}")
    await booking_service.create_booking(
        store,
        vehicle=body.vehicle,
        pickup_date=body.pickup_date,
        return_date=body.return_date,
        name=body.name,
        contact=body.contact,
        location=body.location,
        email=body.email,
    )
    return {"success": True}


@router.get("/bookings", response_model=list[BookingOut], summary="List bookings — searchable")
def get_bookings(q: Optional[str] = None, status: Optional[str] = None,
                 store: BookingStore = Depends(get_store)):
    """q matches name, contact, vehicle or location (case-insensitive); status must match exactly."""
    return [b.to_dict() for b in booking_service.list_bookings(store, q, status)]


@router.patch("/bookings/{booking_id}", summary="Set a booking's status")
def patch_booking(booking_id: str, body: Optional[StatusUpdate] = None,
                  store: BookingStore = Depends(get_store)):
    booking_service.update_status(store, booking_id, body.status if body else None)
    return {"success": True}


@router.post("/bookings/{booking_id}/accept", summary="Accept a booking and email the customer")
async def accept_booking(booking_id: str, store: BookingStore = Depends(get_store)):
    return await booking_service.accept_booking(store, booking_id)


@router.delete("/bookings/{booking_id}", summary="Delete a booking")
def delete_booking(booking_id: str, store: BookingStore = Depends(get_store)):
    booking_service.delete_booking(store, booking_id)
    return {"success": True}
