from sqlalchemy import Column, Integer, String, CheckConstraint
from app.db import Base


ROOM_TYPES = ("AC", "Non-AC")
DEFAULT_ROOM_TYPE = "Non-AC"


class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    room_number = Column(String, unique=True, index=True, nullable=False)
    room_type = Column(String, nullable=False, default=DEFAULT_ROOM_TYPE)

    __table_args__ = (
        CheckConstraint("room_type in ('AC', 'Non-AC')", name="room_type_valid"),
    )
