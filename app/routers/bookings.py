from typing import List
from fastapi import APIRouter, Depends, status
from datetime import date
from sqlalchemy.orm import Session
from app.db import get_db
from app.schemas.booking import (
    ActiveBookingResponse,
    AvailabilityRequest,
    AvailabilityResponse,
    BookingCreate,
    BookingResponse,
    CheckoutResponse,
    Period,
    VacateResponse,
)
from app.services import admission, ledger, lifecycle, occupancy
from app.services.errors import NotFoundError, ValidationError
from app.utils.auth import get_current_user
from app.utils.validation_helpers import validate_stay_dates
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)


@router.post(
    "/",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
    description="Book a room for a guest between two dates. Requires authentication."
)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Book a room for a guest.
    Requires authentication.

    - **guest_name**: Name of the guest.
    - **room_number**: Number of the room to book.
    - **check_in**: First night of the stay; today or later.
    - **check_out**: Departure day; strictly after check-in.

    The room is free again on the check-out day. Returns the created booking.
    """
    logger.debug(f"Creating booking for user: {current_user['username']}, room: {booking.room_number}")
    return admission.create_booking(
        db,
        booking.guest_name,
        booking.room_number,
        booking.check_in,
        booking.check_out,
    )


@router.get(
    "/",
    response_model=List[ActiveBookingResponse],
    summary="List active bookings",
    description="Retrieve the active bookings, newest first."
)
def get_bookings(db: Session = Depends(get_db)):
    rows = ledger.list_active_bookings(db)
    logger.debug(f"Retrieved {len(rows)} active bookings")
    return [
        ActiveBookingResponse(
            **BookingResponse.model_validate(booking).model_dump(),
            room_type=room_type,
        )
        for booking, room_type in rows
    ]


@router.post(
    "/check-availability",
    response_model=AvailabilityResponse,
    summary="Check room availability",
    description="Check a room for a date range, or for today when no dates are given."
)
def check_availability(request: AvailabilityRequest, db: Session = Depends(get_db)):
    """
    Check whether a room is free.

    - **room_number**: Room to check.
    - **check_in**, **check_out**: Optional period. Give both or neither.

    With a period, returns the bookings it conflicts with. Without one,
    returns the bookings occupying the room today.
    """
    if not request.room_number:
        raise ValidationError("Room number is required")

    if request.check_in is not None and request.check_out is not None:
        validate_stay_dates(request.check_in, request.check_out, date.today())
        available, conflicts = occupancy.availability_for_range(
            db, request.room_number, request.check_in, request.check_out
        )
        logger.debug(f"Room {request.room_number} has {len(conflicts)} conflicts for {request.check_in} to {request.check_out}")
        return AvailabilityResponse(
            available=available,
            room_number=request.room_number,
            period=Period(check_in=request.check_in, check_out=request.check_out),
            conflicting_bookings=[BookingResponse.model_validate(b) for b in conflicts],
        )

    if request.check_in is not None or request.check_out is not None:
        raise ValidationError("Both check-in and check-out dates are required for a period check")

    available, current = occupancy.current_availability(db, request.room_number, date.today())
    return AvailabilityResponse(
        available=available,
        room_number=request.room_number,
        current_bookings=[BookingResponse.model_validate(b) for b in current],
    )


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking by ID",
    description="Retrieve a specific booking by its ID, whatever its status."
)
def get_booking(booking_id: int, db: Session = Depends(get_db)):
    booking = ledger.get_booking(db, booking_id)
    if not booking:
        logger.error(f"Booking not found: {booking_id}")
        raise NotFoundError("Booking not found")
    return booking


@router.delete(
    "/{booking_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel a booking",
    description="Delete a booking record entirely. Requires authentication."
)
def delete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    logger.debug(f"User {current_user['username']} cancelling booking {booking_id}")
    lifecycle.cancel(db, booking_id)
    return None


@router.post(
    "/{booking_id}/checkout",
    response_model=CheckoutResponse,
    summary="Check a guest out",
    description="Close an active booking as checked out today. Requires authentication."
)
def checkout_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    logger.debug(f"User {current_user['username']} checking out booking {booking_id}")
    booking = lifecycle.checkout(db, booking_id)
    return CheckoutResponse(message="Guest checked out successfully", checkout_date=booking.checkout_date)


@router.post(
    "/{booking_id}/manual-vacate",
    response_model=VacateResponse,
    summary="Vacate a room early",
    description="Close an active booking as manually vacated today. Requires authentication."
)
def vacate_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    logger.debug(f"User {current_user['username']} vacating booking {booking_id}")
    booking = lifecycle.manual_vacate(db, booking_id)
    return VacateResponse(message="Room manually vacated successfully", vacate_date=booking.checkout_date)
