"""JSON-ready view models built from events and aggregates."""
import datetime
from typing import Any, Dict, List, Optional
from ..models import Event
from .formatting import (
    event_duration_minutes,
    format_clock,
    format_duration,
    format_elapsed,
    format_start_display,
    group_events_by_date,
)


def current_event_view(event: Optional[Event],
                       now: Optional[datetime.datetime] = None) -> Dict[str, Any]:
    """Header strip for the running event."""
    if event is None:
        return {
            "active": False,
            "message": "No active event",
            "elapsed": "00:00:00",
            "started": "",
        }
    return {
        "active": True,
        "id": event.id,
        "name": event.name,
        "elapsed": format_elapsed(event.start_time, now),
        "started": format_start_display(event.start_time),
    }


def aggregation_view(rows: List[Dict[str, Any]], title: str) -> Dict[str, Any]:
    return {
        "title": title,
        "items": [
            {"name": r["name"], "duration": r["duration"], "display": format_duration(r["duration"])}
            for r in rows
        ],
        "empty": not rows,
    }


def _event_row(event: Event) -> Dict[str, Any]:
    duration = event_duration_minutes(event)
    if event.end_time:
        span = f"{format_clock(event.start_time)} - {format_clock(event.end_time)}"
    else:
        span = f"{format_clock(event.start_time)} (ongoing)"
    return {
        "id": event.id,
        "name": event.name,
        "span": span,
        "duration": format_duration(duration) if duration > 0 else None,
        "active": event.is_open,
    }


def detailed_view(events: List[Event], today: Optional[datetime.date] = None) -> Dict[str, Any]:
    """Chronological event log grouped under day headings."""
    groups = group_events_by_date(events, today)
    return {
        "title": "Detailed Events",
        "groups": [
            {"label": label, "events": [_event_row(e) for e in day_events]}
            for label, day_events in groups
        ],
        "empty": not groups,
    }
