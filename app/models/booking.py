import enum
from sqlalchemy import Column, Integer, String, Date, DateTime, CheckConstraint, Index, func
from app.db import Base


class BookingStatus(str, enum.Enum):
    ACTIVE = "active"
    CHECKED_OUT = "checked-out"
    MANUALLY_VACATED = "manually-vacated"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    guest_name = Column(String, nullable=False)
    # Plain column, not a foreign key: history outlives the room
    room_number = Column(String, nullable=False)
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    checkout_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default=BookingStatus.ACTIVE.value)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("check_out > check_in", name="booking_dates_valid"),
        CheckConstraint(
            "status in ('active', 'checked-out', 'manually-vacated')",
            name="booking_status_valid",
        ),
        Index("ix_bookings_room_status", "room_number", "status"),
        # Cancelled ids are never handed out again
        {"sqlite_autoincrement": True},
    )
