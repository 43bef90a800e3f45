"""Service for duration aggregations over day and week windows."""
import datetime
from typing import Any, Dict, List, Optional, Tuple
from ..db.event_repository import EventRepository
from ..models import Event


def day_bounds(day: datetime.date) -> Tuple[datetime.datetime, datetime.datetime]:
    """Local calendar day, 00:00:00.000 through 23:59:59.999."""
    start = datetime.datetime.combine(day, datetime.time.min)
    end = datetime.datetime.combine(day, datetime.time(23, 59, 59, 999000))
    return start, end


def week_bounds(day: datetime.date) -> Tuple[datetime.datetime, datetime.datetime]:
    """Monday 00:00:00.000 through Sunday 23:59:59.999 of the week containing `day`."""
    monday = day - datetime.timedelta(days=day.weekday())
    sunday = monday + datetime.timedelta(days=6)
    return day_bounds(monday)[0], day_bounds(sunday)[1]


def _as_date(value: Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


class AnalyticsService:
    """Handles per-name duration totals."""

    def __init__(self) -> None:
        self.repo = EventRepository()

    def get_day_aggregation(self, day: Any,
                            now: Optional[datetime.datetime] = None) -> List[Dict[str, Any]]:
        """
        Minutes spent per event name for events starting on `day`.

        Running events count up to `now`.
        """
        start, end = day_bounds(_as_date(day))
        return self.aggregate(start, end, now)

    def get_week_aggregation(self, day: Any,
                             now: Optional[datetime.datetime] = None) -> List[Dict[str, Any]]:
        """Minutes spent per event name over the Monday-Sunday week containing `day`."""
        start, end = week_bounds(_as_date(day))
        return self.aggregate(start, end, now)

    def aggregate(self, start: datetime.datetime, end: datetime.datetime,
                  now: Optional[datetime.datetime] = None) -> List[Dict[str, Any]]:
        if now is None:
            now = datetime.datetime.now()
        events = self.repo.find_events_in_period(start, end)
        return self._sum_by_name(events, now)

    def _sum_by_name(self, events: List[Event], now: datetime.datetime) -> List[Dict[str, Any]]:
        totals: Dict[str, int] = {}
        for event in events:
            totals[event.name] = totals.get(event.name, 0) + event.duration_minutes(now)

        ranked = sorted(totals.items(), key=lambda x: (-x[1], x[0]))
        return [{"name": name, "duration": minutes} for name, minutes in ranked]
