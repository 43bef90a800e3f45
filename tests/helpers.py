"""Shared fixtures: a throwaway SQLite database per test."""
import datetime
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch
from activitylog.db import connection


class DatabaseTestCase(unittest.TestCase):
    """Points the connection module at a fresh database file."""

    def setUp(self) -> None:
        self.tmp_dir = tempfile.mkdtemp()
        self.db_patcher = patch.object(connection, 'DB_PATH', os.path.join(self.tmp_dir, "events.db"))
        self.db_patcher.start()
        connection.ensure_db_exists()
        self.base_time = datetime.datetime(2025, 1, 15, 9, 0, 0)  # a Wednesday

    def tearDown(self) -> None:
        self.db_patcher.stop()
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def at(self, hours: float = 0, minutes: float = 0) -> datetime.datetime:
        """Timestamp relative to base_time."""
        return self.base_time + datetime.timedelta(hours=hours, minutes=minutes)
