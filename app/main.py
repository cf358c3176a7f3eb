import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from app import config
from app.routers import auth, rooms, bookings
from app.db import init_database
from app.schemas.booking import BookingResponse
from app.services.errors import (
    ActiveBookingsError,
    AvailabilityError,
    BookingError,
    DuplicateError,
    NotFoundError,
)

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    AvailabilityError: status.HTTP_409_CONFLICT,
    DuplicateError: status.HTTP_409_CONFLICT,
    ActiveBookingsError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


@asynccontextmanager
async def lifespan(_: FastAPI):
    "lifespan for initing database"
    init_database()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Hotel room booker",
    description="Hotel room inventory and reservations based on FastAPI.",
    version="0.1.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    content = {"detail": exc.message}
    if isinstance(exc, AvailabilityError):
        content["conflicting_bookings"] = [
            BookingResponse.model_validate(b).model_dump(mode="json") for b in exc.conflicts
        ]
    return JSONResponse(status_code=code, content=content)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error"},
    )


@app.get("/")
def root():
    return {"message": "Hotel Management API Server"}


app.include_router(auth.router)
app.include_router(rooms.router)
app.include_router(bookings.router)
