class BookingError(Exception):
    """Base class for business rule failures of the booking core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """A required field is missing or malformed."""


class DateRangeError(BookingError):
    """Check-out is not after check-in, or check-in lies in the past."""


class UnknownRoomError(BookingError):
    pass


class AvailabilityError(BookingError):
    """The room is already booked for part of the requested period."""

    def __init__(self, message: str, conflicts):
        super().__init__(message)
        self.conflicts = list(conflicts)


class DuplicateError(BookingError):
    pass


class ActiveBookingsError(BookingError):
    pass


class NotFoundError(BookingError):
    pass
