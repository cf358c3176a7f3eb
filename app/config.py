import os
from dotenv import load_dotenv


load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/hotel_booking.db")

# JWT configuration
SECRET_KEY = os.getenv("SECRET_KEY", "hotel-booker-secret-key-change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "1") not in ("0", "false", "False", "")

# Seconds a SQLite writer waits for the database lock before failing
SQLITE_BUSY_TIMEOUT = float(os.getenv("SQLITE_BUSY_TIMEOUT", "30"))
