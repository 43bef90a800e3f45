"""Service for starting, ending and editing events."""
import datetime
import logging
from typing import Any, Dict, List, Optional
from ..db.event_repository import EventRepository
from ..exceptions import EventNotFoundError, ValidationError
from ..models import Event

logger = logging.getLogger(__name__)


def normalize_timestamp(value: datetime.datetime) -> datetime.datetime:
    """Convert aware datetimes to naive local time, the storage convention."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Event name must not be empty", field="name")
    return name.strip()


def _validate_range(start_time: datetime.datetime, end_time: Optional[datetime.datetime]) -> None:
    if end_time is not None and end_time < start_time:
        raise ValidationError("End time must not be before start time", field="end_time")


class EventService:
    """Handles the event lifecycle on top of the repository."""

    def __init__(self) -> None:
        self.repo = EventRepository()

    def get_current_event(self) -> Optional[Event]:
        """Return the running event, if there is one."""
        return self.repo.find_current()

    def create_event(self, name: str, start_time: Optional[datetime.datetime] = None,
                     end_time: Optional[datetime.datetime] = None) -> Event:
        """
        Start a new event.

        Any event still running is ended at the new event's start time, so
        at most one event is ever open. The close and the insert happen in a
        single transaction.
        """
        name = _validate_name(name)
        now = datetime.datetime.now()
        start_time = normalize_timestamp(start_time) if start_time else now
        end_time = normalize_timestamp(end_time) if end_time else None
        _validate_range(start_time, end_time)

        event, closed = self.repo.close_open_and_insert(name, start_time, end_time, now)
        if closed:
            logger.info("Ended event %d (%s) at %s", closed.id, closed.name, start_time.isoformat())
            if closed.end_time is not None and closed.end_time < closed.start_time:
                logger.warning(
                    "Event %d (%s) was ended before it started: %s < %s",
                    closed.id, closed.name, closed.end_time.isoformat(), closed.start_time.isoformat()
                )
        logger.info("Created event %d (%s)", event.id, event.name)
        return event

    def end_event(self, event_id: int, end_time: Optional[datetime.datetime] = None) -> Event:
        """Set the end time of an event. Raises EventNotFoundError for unknown ids."""
        end_time = normalize_timestamp(end_time) if end_time else datetime.datetime.now()

        existing = self.repo.find_by_id(event_id)
        if existing is None:
            raise EventNotFoundError(event_id)
        _validate_range(existing.start_time, end_time)

        event = self.repo.update(event_id, {"end_time": end_time})
        if event is None:
            raise EventNotFoundError(event_id)
        logger.info("Ended event %d (%s)", event.id, event.name)
        return event

    def update_event(self, event_id: int, **fields: Any) -> Event:
        """
        Apply a partial update of name, start_time and/or end_time.

        Passing end_time=None explicitly reopens the event.
        """
        unknown = set(fields) - set(EventRepository.UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown fields: {', '.join(sorted(unknown))}", field=sorted(unknown)[0]
            )

        changes: Dict[str, Any] = {}
        if "name" in fields:
            changes["name"] = _validate_name(fields["name"])
        for key in ("start_time", "end_time"):
            if key not in fields:
                continue
            value = fields[key]
            if value is None and key == "start_time":
                raise ValidationError("Start time is required", field="start_time")
            changes[key] = normalize_timestamp(value) if value is not None else None

        existing = self.repo.find_by_id(event_id)
        if existing is None:
            raise EventNotFoundError(event_id)
        _validate_range(
            changes.get("start_time", existing.start_time),
            changes["end_time"] if "end_time" in changes else existing.end_time,
        )

        event = self.repo.update(event_id, changes)
        if event is None:
            raise EventNotFoundError(event_id)
        logger.info("Updated event %d: %s", event_id, ", ".join(sorted(changes)) or "touch")
        return event

    def delete_event(self, event_id: int) -> None:
        """Delete an event. Deleting a missing id is not an error."""
        self.repo.delete(event_id)
        logger.info("Deleted event %d", event_id)

    def clear_events(self) -> int:
        """Remove every event."""
        removed = self.repo.delete_all()
        logger.info("Cleared %d events", removed)
        return removed

    def get_frequent_event_names(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Most used event names, for one-tap restarts."""
        return [
            {"name": name, "count": count}
            for name, count in self.repo.count_by_name(limit)
        ]

    def get_events_by_date_range(self, start: datetime.datetime,
                                 end: datetime.datetime) -> List[Event]:
        """Events that started within [start, end], newest first."""
        return self.repo.find_events_in_period(normalize_timestamp(start), normalize_timestamp(end))

    def get_all_events(self, limit: int = 50, offset: int = 0) -> List[Event]:
        """Page through all events, newest first."""
        return self.repo.find_all(limit, offset)
