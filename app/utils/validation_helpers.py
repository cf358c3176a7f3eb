from datetime import date
from app.services.errors import DateRangeError, ValidationError


def validate_stay_dates(check_in: date, check_out: date, today: date):
    if check_in < today:
        raise DateRangeError("Check-in date cannot be in the past")
    if check_out <= check_in:
        raise DateRangeError("Check-out date must be after check-in date")


def require_fields(**fields):
    """Reject missing values and blank strings."""
    missing = [
        name
        for name, value in fields.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(f"All fields are required (missing: {', '.join(missing)})")
