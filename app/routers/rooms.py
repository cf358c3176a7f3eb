import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.schemas.room import RoomCreate, RoomResponse, RoomStatusResponse, RoomType
from app.services import occupancy, registry
from app.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/rooms",
    tags=["rooms"],
)


@router.post("/", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(room: RoomCreate, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    """
    Register a new room.
    Requires authentication.
    """
    logger.debug(f"User {current_user['username']} adding room {room.room_number}")
    return registry.add_room(db, room.room_number, room.room_type.value)


@router.get("/", response_model=List[RoomResponse])
def get_rooms(room_type: Optional[RoomType] = None, db: Session = Depends(get_db)):
    """
    Retrieve all rooms ordered by room number, optionally of one type.
    """
    return registry.list_rooms(db, room_type.value if room_type else None)


@router.get("/by-type/{room_type}", response_model=List[RoomResponse])
def get_rooms_by_type(room_type: RoomType, db: Session = Depends(get_db)):
    """
    Retrieve the rooms of one type.
    """
    return registry.list_rooms(db, room_type.value)


@router.get("/status", response_model=List[RoomStatusResponse])
def get_room_status(db: Session = Depends(get_db)):
    """
    Current occupancy of every room.
    """
    today = date.today()
    rooms = occupancy.room_status(db, today)
    logger.debug(f"Room status for {today}: {sum(r.status == occupancy.OCCUPIED for r in rooms)} occupied")
    return rooms


@router.get("/{room_number}", response_model=RoomResponse)
def get_room(room_number: str, db: Session = Depends(get_db)):
    """
    Retrieve a specific room by its number.
    """
    return registry.get_room(db, room_number)


@router.delete("/{room_number}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(room_number: str, db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    """
    Remove a room. Rooms with active bookings cannot be removed.
    Requires authentication.
    """
    logger.debug(f"User {current_user['username']} removing room {room_number}")
    registry.remove_room(db, room_number)
    return None
