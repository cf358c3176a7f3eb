import logging
from sqlalchemy.orm import Session
from app.models.room import Room
from app.models.user import User
from app.utils.auth import get_password_hash

logger = logging.getLogger(__name__)

DEMO_USERNAME = "admin"
DEMO_PASSWORD = "password"

DEMO_ROOMS = [
    ("101", "AC"),
    ("102", "Non-AC"),
    ("103", "Non-AC"),
    ("104", "AC"),
    ("105", "Non-AC"),
    ("201", "AC"),
    ("202", "Non-AC"),
    ("203", "Non-AC"),
    ("204", "AC"),
    ("205", "Non-AC"),
    ("301", "AC"),
    ("302", "Non-AC"),
    ("303", "Non-AC"),
    ("304", "AC"),
    ("305", "Non-AC"),
]


def seed_demo_data(db: Session):
    """Insert the demo admin and rooms that are not there yet."""
    if not db.query(User).filter(User.username == DEMO_USERNAME).first():
        db.add(User(username=DEMO_USERNAME, hashed_password=get_password_hash(DEMO_PASSWORD)))
        logger.info(f"Seeded demo user '{DEMO_USERNAME}'")

    existing = {number for (number,) in db.query(Room.room_number).all()}
    missing = [(number, kind) for number, kind in DEMO_ROOMS if number not in existing]
    for number, kind in missing:
        db.add(Room(room_number=number, room_type=kind))
    if missing:
        logger.info(f"Seeded {len(missing)} demo rooms")
    db.commit()
