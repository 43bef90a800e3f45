"""Request parameter parsing shared by the route modules."""
import datetime
from typing import Any, Optional
from ...exceptions import ValidationError


def parse_timestamp(value: Any, field: str) -> datetime.datetime:
    """Parse an ISO-8601 timestamp from a query string or JSON body."""
    if not isinstance(value, str):
        raise ValidationError(f"Missing or invalid {field}", field=field)
    try:
        return datetime.datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value!r}", field=field)


def parse_optional_timestamp(value: Any, field: str) -> Optional[datetime.datetime]:
    if value is None or value == "":
        return None
    return parse_timestamp(value, field)


def parse_date(value: Optional[str], field: str = "date") -> datetime.date:
    """Parse YYYY-MM-DD, defaulting to today."""
    if not value:
        return datetime.date.today()
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid date format: {value!r}", field=field)


# SQLite INTEGER is a signed 64-bit value
SQLITE_MAX_INT = 2**63 - 1


def parse_int(value: Optional[str], field: str, default: int, minimum: int = 0,
              maximum: int = SQLITE_MAX_INT) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value!r}", field=field)
    if number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}", field=field)
    if number > maximum:
        raise ValidationError(f"{field} must be at most {maximum}", field=field)
    return number
