"""
Booking ledger: storage access for booking records.
"""
from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import update
from sqlalchemy.orm import Session
from app.models.booking import Booking, BookingStatus
from app.models.room import Room


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    # Bulk updates skip the identity map, so always reload the row
    return db.query(Booking).populate_existing().filter(Booking.id == booking_id).first()


def active_bookings_for_room(db: Session, room_number: str):
    """Query of the bookings still holding the room."""
    return db.query(Booking).filter(
        Booking.room_number == room_number,
        Booking.status == BookingStatus.ACTIVE.value,
    )


def insert_booking(db: Session, guest_name: str, room_number: str, check_in: date, check_out: date) -> Booking:
    booking = Booking(
        guest_name=guest_name,
        room_number=room_number,
        check_in=check_in,
        check_out=check_out,
        status=BookingStatus.ACTIVE.value,
    )
    db.add(booking)
    db.flush()
    return booking


def list_active_bookings(db: Session) -> List[Tuple[Booking, Optional[str]]]:
    """Active bookings with their room type, newest first."""
    return (
        db.query(Booking, Room.room_type)
        .outerjoin(Room, Room.room_number == Booking.room_number)
        .filter(Booking.status == BookingStatus.ACTIVE.value)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )


def transition_active(db: Session, booking_id: int, new_status: BookingStatus, on: date) -> bool:
    """
    Move an active booking to new_status in one conditional UPDATE.

    Returns False when no active booking with that id exists, which also
    covers a concurrent transition that won first.
    """
    result = db.execute(
        update(Booking)
        .where(
            Booking.id == booking_id,
            Booking.status == BookingStatus.ACTIVE.value,
        )
        .values(status=new_status.value, checkout_date=on)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def delete_booking(db: Session, booking_id: int) -> bool:
    deleted = (
        db.query(Booking)
        .filter(Booking.id == booking_id)
        .delete(synchronize_session=False)
    )
    return deleted == 1
