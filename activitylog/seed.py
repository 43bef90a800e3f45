"""
Reset the events table to a small set of illustrative events.
"""
import datetime
import logging
from typing import List, Optional, Tuple

from .db import ensure_db_exists
from .db.event_repository import EventRepository

logger = logging.getLogger(__name__)

# (name, day offset from today, start hour, end hour)
SAMPLE_EVENTS: List[Tuple[str, int, int, int]] = [
    ("Morning Meeting", 0, 9, 10),
    ("Development Work", 0, 10, 12),
    ("Lunch Break", 0, 12, 13),
    ("Code Review", 0, 14, 15),
    ("Development Work", 0, 15, 17),
    ("Morning Meeting", -1, 9, 10),
    ("Client Call", -1, 11, 12),
    ("Development Work", -1, 13, 16),
]


def seed(today: Optional[datetime.date] = None) -> int:
    """Clear all events and insert the samples. Returns the number inserted."""
    if today is None:
        today = datetime.date.today()
    midnight = datetime.datetime.combine(today, datetime.time.min)

    ensure_db_exists()
    removed = EventRepository.delete_all()
    logger.info("Removed %d existing events", removed)

    for name, day_offset, start_hour, end_hour in SAMPLE_EVENTS:
        day = midnight + datetime.timedelta(days=day_offset)
        EventRepository.insert(
            name,
            day + datetime.timedelta(hours=start_hour),
            day + datetime.timedelta(hours=end_hour),
        )

    logger.info("Seeded %d events", len(SAMPLE_EVENTS))
    return len(SAMPLE_EVENTS)
