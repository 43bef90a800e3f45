"""Turning new-event form input into event fields."""
import datetime
from typing import Any, Dict, Optional
from ..exceptions import ValidationError

INPUT_FORMAT = "%Y-%m-%dT%H:%M"

END_NONE = "none"
END_DURATION = "duration"
END_TIME = "end"
END_MODES = (END_NONE, END_DURATION, END_TIME)


def to_input_value(value: datetime.datetime) -> str:
    """Format for a datetime-local input, minute precision."""
    return value.strftime(INPUT_FORMAT)


def parse_input_value(text: str) -> datetime.datetime:
    """Parse a datetime-local value such as '2025-01-05T09:30'."""
    try:
        return datetime.datetime.fromisoformat(text)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date/time: {text!r}")


def resolve_end_time(start: datetime.datetime, mode: str,
                     end_time: Optional[datetime.datetime] = None,
                     duration: float = 0) -> Optional[datetime.datetime]:
    """
    Apply the end-time toggle of the event form.

    none      - the event keeps running until ended
    duration  - start plus `duration` minutes (running if not positive)
    end       - the explicit end time, if given
    """
    if mode not in END_MODES:
        raise ValidationError(f"Unknown end mode: {mode}", field="mode")
    if mode == END_TIME:
        return end_time
    if mode == END_DURATION and duration > 0:
        try:
            return start + datetime.timedelta(minutes=duration)
        except OverflowError:
            raise ValidationError(f"Duration out of range: {duration}", field="duration")
    return None


def build_event_fields(name: Optional[str], start: Optional[str], mode: str = END_NONE,
                       end: Optional[str] = None, duration: Any = 0) -> Dict[str, Any]:
    """Validate raw form values and return create_event keyword arguments."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Event name is required", field="name")
    if not start:
        raise ValidationError("Start time is required", field="start_time")

    start_time = parse_input_value(start)
    end_time = parse_input_value(end) if end else None
    try:
        minutes = float(duration or 0)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid duration: {duration!r}", field="duration")

    return {
        "name": name.strip(),
        "start_time": start_time,
        "end_time": resolve_end_time(start_time, mode, end_time, minutes),
    }
