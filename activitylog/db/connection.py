"""Database connection management."""
import logging
import sqlite3
import os
from contextlib import contextmanager
from typing import Iterator

from ..config import DB_PATH

logger = logging.getLogger(__name__)


def get_connection() -> sqlite3.Connection:
    """Create and return a database connection."""
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(immediate: bool = False) -> Iterator[sqlite3.Cursor]:
    """
    Context manager for database operations.

    Everything executed on the cursor commits together. With `immediate`
    the write lock is taken up front so reads and writes inside the block
    cannot interleave with another writer.
    """
    conn = get_connection()
    try:
        cursor = conn.cursor()
        if immediate:
            cursor.execute("BEGIN IMMEDIATE")
        yield cursor
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def ensure_db_exists() -> None:
    """Ensure database directory and table exist."""
    directory = os.path.dirname(DB_PATH)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with get_cursor() as cur:
        cur.execute("""
            CREATE TABLE IF NOT EXISTS events (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                start_time TEXT NOT NULL,
                end_time TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        cur.execute("""
            CREATE INDEX IF NOT EXISTS idx_events_start_time
            ON events(start_time)
        """)
        # Partial scans for the open event
        cur.execute("""
            CREATE INDEX IF NOT EXISTS idx_events_end_time
            ON events(end_time)
        """)
    logger.debug("Schema ready at %s", DB_PATH)
