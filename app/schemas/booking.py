# app/schemas/booking.py
from pydantic import BaseModel, Field
from typing import Any, Optional

# Dates stay strings (lexical comparison) but must lead with an ISO YYYY-MM-DD
ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}"


class AvailabilityRequest(BaseModel):
    vehicle: str
    pickup_date: str = Field(alias="pickupDate", pattern=ISO_DATE_PATTERN)
    return_date: str = Field(alias="returnDate", pattern=ISO_DATE_PATTERN)

    class Config:
        populate_by_name = True


class AvailabilityOut(BaseModel):
    available: bool


class BookingCreate(BaseModel):
    vehicle: str
    pickup_date: str = Field(alias="pickupDate", pattern=ISO_DATE_PATTERN)
    return_date: str = Field(alias="returnDate", pattern=ISO_DATE_PATTERN)
    location: Optional[str] = None
    name: str
    email: Optional[str] = None
    contact: str

    class Config:
        populate_by_name = True


class StatusUpdate(BaseModel):
    status: Optional[str] = None     # missing/empty → 400, not 422


class BookingOut(BaseModel):
    # Hand-edited files may hold numbers or extra keys; they are returned as stored
    id: Any = None
    vehicle: Any = None
    pickup_date: Any = Field(default=None, alias="pickupDate")
    return_date: Any = Field(default=None, alias="returnDate")
    location: Any = None
    name: Any = None
    email: Any = None
    contact: Any = None
    status: Any = None
    created_at: Any = Field(default=None, alias="createdAt")

    class Config:
        populate_by_name = True
        extra = "allow"
