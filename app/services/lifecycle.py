"""
Lifecycle transitions of existing bookings.
"""
import logging
from datetime import date
from typing import Optional
from sqlalchemy.orm import Session
from app.db import transaction
from app.models.booking import Booking, BookingStatus
from app.services.errors import NotFoundError
from app.services import ledger

logger = logging.getLogger(__name__)


def _transition(db: Session, booking_id: int, new_status: BookingStatus, today: Optional[date]) -> Booking:
    with transaction(db):
        moved = ledger.transition_active(db, booking_id, new_status, today or date.today())
        if not moved:
            logger.warning(f"No active booking {booking_id} to mark {new_status.value}")
            raise NotFoundError("Active booking not found")
        booking = ledger.get_booking(db, booking_id)
        # Keep the loaded row readable after commit, even if it is cancelled next
        db.expunge(booking)

    logger.info(f"Booking {booking_id} is now {new_status.value}")
    return booking


def checkout(db: Session, booking_id: int, today: Optional[date] = None) -> Booking:
    """Guest checked out; the room is free again from today."""
    return _transition(db, booking_id, BookingStatus.CHECKED_OUT, today)


def manual_vacate(db: Session, booking_id: int, today: Optional[date] = None) -> Booking:
    """Staff freed the room before the booked period ended."""
    return _transition(db, booking_id, BookingStatus.MANUALLY_VACATED, today)


def cancel(db: Session, booking_id: int) -> None:
    """Remove a booking record entirely, whatever its status."""
    with transaction(db):
        if not ledger.delete_booking(db, booking_id):
            logger.warning(f"Cannot cancel missing booking {booking_id}")
            raise NotFoundError("Booking not found")
    logger.info(f"Cancelled booking {booking_id}")
