"""Repository for event data access."""
import datetime
import sqlite3
from typing import Any, Dict, List, Optional, Tuple
from ..exceptions import ValidationError
from ..models import Event, to_db_timestamp
from .connection import get_cursor

COLUMNS = "id, name, start_time, end_time, created_at, updated_at"


class EventRepository:
    """Repository for event CRUD operations."""

    UPDATABLE_FIELDS = ('name', 'start_time', 'end_time')

    @staticmethod
    def _fetch_by_id(cur: sqlite3.Cursor, event_id: int) -> Optional[Event]:
        cur.execute(f"SELECT {COLUMNS} FROM events WHERE id = ?", (event_id,))
        row = cur.fetchone()
        return Event.from_row(row) if row else None

    @staticmethod
    def _fetch_current(cur: sqlite3.Cursor) -> Optional[Event]:
        cur.execute(f"""
            SELECT {COLUMNS}
            FROM events
            WHERE end_time IS NULL
            ORDER BY start_time DESC, id DESC
            LIMIT 1
        """)
        row = cur.fetchone()
        return Event.from_row(row) if row else None

    @staticmethod
    def _insert(cur: sqlite3.Cursor, name: str, start_time: datetime.datetime,
                end_time: Optional[datetime.datetime], now: datetime.datetime) -> int:
        cur.execute(
            """
            INSERT INTO events (name, start_time, end_time, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                name,
                to_db_timestamp(start_time),
                to_db_timestamp(end_time) if end_time else None,
                to_db_timestamp(now),
                to_db_timestamp(now),
            )
        )
        return int(cur.lastrowid)  # type: ignore[arg-type]

    @staticmethod
    def find_by_id(event_id: int) -> Optional[Event]:
        """Find a single event by id."""
        with get_cursor() as cur:
            return EventRepository._fetch_by_id(cur, event_id)

    @staticmethod
    def find_current() -> Optional[Event]:
        """Find the most recently started event that has not ended."""
        with get_cursor() as cur:
            return EventRepository._fetch_current(cur)

    @staticmethod
    def insert(name: str, start_time: datetime.datetime,
               end_time: Optional[datetime.datetime] = None,
               now: Optional[datetime.datetime] = None) -> Event:
        """Insert an event as-is, without touching any open event."""
        if now is None:
            now = datetime.datetime.now()
        with get_cursor() as cur:
            new_id = EventRepository._insert(cur, name, start_time, end_time, now)
            return EventRepository._fetch_by_id(cur, new_id)  # type: ignore[return-value]

    @staticmethod
    def close_open_and_insert(name: str, start_time: datetime.datetime,
                              end_time: Optional[datetime.datetime],
                              now: datetime.datetime) -> Tuple[Event, Optional[Event]]:
        """
        End the open event at `start_time`, then insert the new one.

        Both statements run in one write transaction. Returns the inserted
        event and the event that was closed, if any.
        """
        with get_cursor(immediate=True) as cur:
            closed = EventRepository._fetch_current(cur)
            if closed:
                cur.execute(
                    "UPDATE events SET end_time = ?, updated_at = ? WHERE id = ?",
                    (to_db_timestamp(start_time), to_db_timestamp(now), closed.id)
                )
                closed = EventRepository._fetch_by_id(cur, closed.id)

            new_id = EventRepository._insert(cur, name, start_time, end_time, now)
            inserted = EventRepository._fetch_by_id(cur, new_id)
            return inserted, closed  # type: ignore[return-value]

    @staticmethod
    def update(event_id: int, fields: Dict[str, Any],
               now: Optional[datetime.datetime] = None) -> Optional[Event]:
        """
        Apply a partial update and refresh updated_at.

        Returns the updated event, or None when the id does not exist.
        Clearing end_time is refused while another event is running; the
        check and the write share one write transaction.
        """
        if now is None:
            now = datetime.datetime.now()
        unknown = set(fields) - set(EventRepository.UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        assignments: List[str] = []
        params: List[Any] = []
        for column in EventRepository.UPDATABLE_FIELDS:
            if column not in fields:
                continue
            value = fields[column]
            if isinstance(value, datetime.datetime):
                value = to_db_timestamp(value)
            assignments.append(f"{column} = ?")
            params.append(value)
        assignments.append("updated_at = ?")
        params.append(to_db_timestamp(now))

        reopening = "end_time" in fields and fields["end_time"] is None
        with get_cursor(immediate=reopening) as cur:
            if reopening:
                current = EventRepository._fetch_current(cur)
                if current is not None and current.id != event_id:
                    raise ValidationError(
                        f"Cannot reopen while event {current.id} is running", field="end_time"
                    )
            cur.execute(
                "UPDATE events SET {} WHERE id = ?".format(', '.join(assignments)),
                tuple(params) + (event_id,)
            )
            if cur.rowcount == 0:
                return None
            return EventRepository._fetch_by_id(cur, event_id)

    @staticmethod
    def delete(event_id: int) -> None:
        """Delete an event. Missing ids are ignored."""
        with get_cursor() as cur:
            cur.execute("DELETE FROM events WHERE id = ?", (event_id,))

    @staticmethod
    def delete_all() -> int:
        """Delete every event and return how many rows were removed."""
        with get_cursor() as cur:
            cur.execute("DELETE FROM events")
            return cur.rowcount

    @staticmethod
    def count_by_name(limit: int) -> List[Tuple[str, int]]:
        """Event names ranked by how often they were used."""
        with get_cursor() as cur:
            cur.execute("""
                SELECT name, COUNT(*) AS count
                FROM events
                GROUP BY name
                ORDER BY count DESC, name ASC
                LIMIT ?
            """, (limit,))
            return [(r["name"], r["count"]) for r in cur.fetchall()]

    @staticmethod
    def find_events_in_period(start: datetime.datetime, end: datetime.datetime) -> List[Event]:
        """Find all events that started within [start, end], newest first."""
        with get_cursor() as cur:
            cur.execute(f"""
                SELECT {COLUMNS}
                FROM events
                WHERE start_time >= ? AND start_time <= ?
                ORDER BY start_time DESC, id DESC
            """, (to_db_timestamp(start), to_db_timestamp(end)))
            return [Event.from_row(r) for r in cur.fetchall()]

    @staticmethod
    def find_all(limit: int = 50, offset: int = 0) -> List[Event]:
        """Page through every event, newest first."""
        with get_cursor() as cur:
            cur.execute(f"""
                SELECT {COLUMNS}
                FROM events
                ORDER BY start_time DESC, id DESC
                LIMIT ? OFFSET ?
            """, (limit, offset))
            return [Event.from_row(r) for r in cur.fetchall()]
