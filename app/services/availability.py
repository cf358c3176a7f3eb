from datetime import date
from typing import List
from sqlalchemy.orm import Session
from app.models.booking import Booking
from app.services.ledger import active_bookings_for_room


def dates_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    """Half-open [start, end) ranges overlap; touching ranges do not."""
    return start1 < end2 and start2 < end1


def find_conflicts(db: Session, room_number: str, start: date, end: date) -> List[Booking]:
    """
    Active bookings of the room that overlap [start, end).

    Read only. The caller guarantees start < end.
    """
    return (
        active_bookings_for_room(db, room_number)
        .filter(Booking.check_in < end, Booking.check_out > start)
        .order_by(Booking.check_in, Booking.id)
        .all()
    )
