"""
Room registry: the set of rooms and their category.
"""
import logging
from typing import List, Optional
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.db import transaction
from app.models.booking import Booking, BookingStatus
from app.models.room import ROOM_TYPES, Room
from app.services.errors import ActiveBookingsError, DuplicateError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def lock_room(db: Session, room_number: str) -> bool:
    """
    Take the write lock on a room row inside the current transaction.

    The no-op UPDATE is a row lock on server databases and acquires the
    database write lock on SQLite, so every later read in the transaction
    runs with no other writer for this room. Returns False when the room
    does not exist.
    """
    result = db.execute(
        update(Room)
        .where(Room.room_number == room_number)
        .values(room_number=Room.room_number)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def get_room(db: Session, room_number: str) -> Room:
    room = db.query(Room).filter(Room.room_number == room_number).first()
    if not room:
        raise NotFoundError("Room not found")
    return room


def list_rooms(db: Session, room_type: Optional[str] = None) -> List[Room]:
    query = db.query(Room)
    if room_type is not None:
        query = query.filter(Room.room_type == room_type)
    return query.order_by(Room.room_number).all()


def add_room(db: Session, room_number: str, room_type: str) -> Room:
    if room_type not in ROOM_TYPES:
        raise ValidationError(f"Room type must be one of: {', '.join(ROOM_TYPES)}")
    room = Room(room_number=room_number, room_type=room_type)
    try:
        with transaction(db):
            db.add(room)
    except IntegrityError:
        logger.warning(f"Room number already exists: {room_number}")
        raise DuplicateError("Room number already exists")
    db.refresh(room)
    logger.info(f"Added room {room.room_number} ({room.room_type})")
    return room


def remove_room(db: Session, room_number: str) -> None:
    """Delete a room unless an active booking still references it."""
    with transaction(db):
        if not lock_room(db, room_number):
            raise NotFoundError("Room not found")
        active = (
            db.query(Booking)
            .filter(
                Booking.room_number == room_number,
                Booking.status == BookingStatus.ACTIVE.value,
            )
            .count()
        )
        if active > 0:
            logger.warning(f"Refusing to remove room {room_number} with {active} active bookings")
            raise ActiveBookingsError(
                "Cannot remove room with active bookings. Please vacate all guests first."
            )
        db.query(Room).filter(Room.room_number == room_number).delete(
            synchronize_session=False
        )
    logger.info(f"Removed room {room_number}")
