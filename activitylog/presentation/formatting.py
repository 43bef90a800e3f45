"""Display-only formatting of events, dates and durations."""
import datetime
from typing import Dict, List, Optional, Tuple
from ..models import Event


def format_duration(minutes: float) -> str:
    """125 -> '2h 5m', 45 -> '45m'."""
    hours = int(minutes // 60)
    mins = int(minutes % 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_elapsed(start: datetime.datetime, now: Optional[datetime.datetime] = None) -> str:
    """Running clock 'HH:MM:SS' from start to now. Future starts show zero."""
    if now is None:
        now = datetime.datetime.now()
    seconds = int((now - start).total_seconds())
    if seconds < 0:
        return "00:00:00"
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_date_label(value: datetime.datetime, today: Optional[datetime.date] = None) -> str:
    """'Today', 'Yesterday', otherwise e.g. 'Mon, Jan 5'."""
    if today is None:
        today = datetime.date.today()
    day = value.date() if isinstance(value, datetime.datetime) else value
    if day == today:
        return "Today"
    if day == today - datetime.timedelta(days=1):
        return "Yesterday"
    return f"{day:%a}, {day:%b} {day.day}"


def format_clock(value: datetime.datetime) -> str:
    return value.strftime("%H:%M")


def format_start_display(value: datetime.datetime) -> str:
    """Short start stamp shown next to the running event, e.g. 'Jan 5, 09:30'."""
    return f"{value:%b} {value.day}, {value:%H:%M}"


def event_duration_minutes(event: Event) -> int:
    """Duration of a finished event. Running events report 0."""
    if event.end_time is None:
        return 0
    return event.duration_minutes()


def group_events_by_date(events: List[Event],
                         today: Optional[datetime.date] = None) -> List[Tuple[str, List[Event]]]:
    """
    Group a flat event list by start day.

    Events are chronological within a day. Days are newest first, with
    'Today' and 'Yesterday' always leading.
    """
    if today is None:
        today = datetime.date.today()
    yesterday = today - datetime.timedelta(days=1)

    groups: Dict[datetime.date, List[Event]] = {}
    for event in events:
        groups.setdefault(event.start_time.date(), []).append(event)

    def rank(day: datetime.date) -> Tuple[int, int]:
        if day == today:
            return (0, 0)
        if day == yesterday:
            return (1, 0)
        return (2, -day.toordinal())

    result: List[Tuple[str, List[Event]]] = []
    for day in sorted(groups, key=rank):
        day_events = sorted(groups[day], key=lambda e: e.start_time)
        result.append((format_date_label(day, today), day_events))
    return result
