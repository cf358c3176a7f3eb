from pydantic import BaseModel, ConfigDict, field_validator
from datetime import date, datetime
from typing import List, Optional


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class BookingCreate(BaseModel):
    # Presence is checked by the admission service, not by the schema
    guest_name: Optional[str] = None
    room_number: Optional[str] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None

    @field_validator("guest_name", "room_number")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    guest_name: str
    room_number: str
    check_in: date
    check_out: date
    checkout_date: Optional[date] = None
    status: str
    created_at: datetime


class ActiveBookingResponse(BookingResponse):
    room_type: Optional[str] = None


class AvailabilityRequest(BaseModel):
    room_number: Optional[str] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None

    @field_validator("room_number")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class Period(BaseModel):
    check_in: date
    check_out: date


class AvailabilityResponse(BaseModel):
    available: bool
    room_number: str
    period: Optional[Period] = None
    conflicting_bookings: List[BookingResponse] = []
    current_bookings: List[BookingResponse] = []


class CheckoutResponse(BaseModel):
    message: str
    checkout_date: date


class VacateResponse(BaseModel):
    message: str
    vacate_date: date
