"""
Booking admission: decides whether a reservation request may be accepted.
"""
import logging
from datetime import date
from typing import Optional
from sqlalchemy.orm import Session
from app.db import transaction
from app.models.booking import Booking
from app.services.availability import find_conflicts
from app.services.errors import AvailabilityError, UnknownRoomError
from app.services.ledger import insert_booking
from app.services.registry import lock_room
from app.utils.validation_helpers import require_fields, validate_stay_dates

logger = logging.getLogger(__name__)


def create_booking(
    db: Session,
    guest_name: Optional[str],
    room_number: Optional[str],
    check_in: Optional[date],
    check_out: Optional[date],
    today: Optional[date] = None,
) -> Booking:
    """
    Admit a new active booking for a room.

    Field and date checks happen before the transaction starts. The room
    lock, the overlap check and the insert then run in a single
    transaction, so two overlapping requests for the same room cannot both
    be admitted.

    Raises ValidationError, DateRangeError, UnknownRoomError or
    AvailabilityError; nothing is written in those cases.
    """
    require_fields(
        guest_name=guest_name,
        room_number=room_number,
        check_in=check_in,
        check_out=check_out,
    )
    guest_name = guest_name.strip()
    validate_stay_dates(check_in, check_out, today or date.today())

    with transaction(db):
        if not lock_room(db, room_number):
            logger.warning(f"Booking rejected, room does not exist: {room_number}")
            raise UnknownRoomError("Room does not exist")

        conflicts = find_conflicts(db, room_number, check_in, check_out)
        if conflicts:
            logger.warning(
                f"Booking rejected, room {room_number} has {len(conflicts)} "
                f"overlapping bookings for {check_in} to {check_out}"
            )
            # Detach so the caller can still read them after rollback
            for conflict in conflicts:
                db.expunge(conflict)
            raise AvailabilityError("Room is not available for the selected dates", conflicts)

        booking = insert_booking(db, guest_name, room_number, check_in, check_out)

    db.refresh(booking)
    logger.info(
        f"Created booking {booking.id} for {booking.guest_name} in room "
        f"{booking.room_number} ({booking.check_in} to {booking.check_out})"
    )
    return booking
