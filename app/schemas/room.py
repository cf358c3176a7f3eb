import enum
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class RoomType(str, enum.Enum):
    AC = "AC"
    NON_AC = "Non-AC"


class RoomBase(BaseModel):
    room_number: str = Field(..., min_length=1)
    room_type: RoomType = RoomType.NON_AC


class RoomCreate(RoomBase):
    pass


class RoomResponse(RoomBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class RoomStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    room_number: str
    room_type: str
    status: str
    booking_id: Optional[int] = None
    guest_name: Optional[str] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None
