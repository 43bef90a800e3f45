"""
Data models for the application.
"""
import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional

TIMESPEC = "milliseconds"


def to_db_timestamp(value: datetime.datetime) -> str:
    """Serialize a timestamp the way it is stored in the events table."""
    return value.isoformat(timespec=TIMESPEC)


def from_db_timestamp(value: Optional[str]) -> Optional[datetime.datetime]:
    if value is None:
        return None
    return datetime.datetime.fromisoformat(value)


@dataclass
class Event:
    """Represents a single tracked activity."""
    id: int
    name: str
    start_time: datetime.datetime
    end_time: Optional[datetime.datetime]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @property
    def is_open(self) -> bool:
        """An event without an end time is still running."""
        return self.end_time is None

    def duration_minutes(self, now: Optional[datetime.datetime] = None) -> int:
        """
        Whole minutes between start and end.

        Open events are measured against `now`, so the value keeps growing
        while the event runs. Never negative.
        """
        effective_end = self.end_time
        if effective_end is None:
            effective_end = now or datetime.datetime.now()
        seconds = (effective_end - self.start_time).total_seconds()
        return max(0, int(seconds // 60))

    @classmethod
    def from_row(cls, row: Any) -> "Event":
        """Build an Event from an `events` table row."""
        return cls(
            id=row["id"],
            name=row["name"],
            start_time=from_db_timestamp(row["start_time"]),  # type: ignore[arg-type]
            end_time=from_db_timestamp(row["end_time"]),
            created_at=from_db_timestamp(row["created_at"]),  # type: ignore[arg-type]
            updated_at=from_db_timestamp(row["updated_at"]),  # type: ignore[arg-type]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "start_time": to_db_timestamp(self.start_time),
            "end_time": to_db_timestamp(self.end_time) if self.end_time else None,
            "created_at": to_db_timestamp(self.created_at),
            "updated_at": to_db_timestamp(self.updated_at),
        }
