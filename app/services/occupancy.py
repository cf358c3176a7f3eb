"""
Occupancy projection: which rooms are occupied on a given day.
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import and_
from sqlalchemy.orm import Session
from app.models.booking import Booking, BookingStatus
from app.models.room import Room
from app.services.availability import find_conflicts
from app.services.ledger import active_bookings_for_room

OCCUPIED = "occupied"
AVAILABLE = "available"


@dataclass
class RoomOccupancy:
    room_number: str
    room_type: str
    status: str
    booking_id: Optional[int] = None
    guest_name: Optional[str] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None


def room_status(db: Session, as_of: Optional[date] = None) -> List[RoomOccupancy]:
    """Every room, ordered by number, with its occupant on as_of if any."""
    as_of = as_of or date.today()
    rows = (
        db.query(Room, Booking)
        .outerjoin(
            Booking,
            and_(
                Booking.room_number == Room.room_number,
                Booking.status == BookingStatus.ACTIVE.value,
                Booking.check_in <= as_of,
                Booking.check_out > as_of,
            ),
        )
        .order_by(Room.room_number)
        .all()
    )

    projection = []
    for room, booking in rows:
        if booking is None:
            projection.append(
                RoomOccupancy(room.room_number, room.room_type, AVAILABLE)
            )
        else:
            projection.append(
                RoomOccupancy(
                    room.room_number,
                    room.room_type,
                    OCCUPIED,
                    booking_id=booking.id,
                    guest_name=booking.guest_name,
                    check_in=booking.check_in,
                    check_out=booking.check_out,
                )
            )
    return projection


def current_availability(db: Session, room_number: str, today: Optional[date] = None) -> Tuple[bool, List[Booking]]:
    today = today or date.today()
    current = (
        active_bookings_for_room(db, room_number)
        .filter(Booking.check_in <= today, Booking.check_out > today)
        .all()
    )
    return not current, current


def availability_for_range(db: Session, room_number: str, start: date, end: date) -> Tuple[bool, List[Booking]]:
    conflicts = find_conflicts(db, room_number, start, end)
    return not conflicts, conflicts
