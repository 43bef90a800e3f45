"""Unit tests for EventService."""
import datetime
import sqlite3
import unittest
from unittest.mock import MagicMock, patch
from activitylog.exceptions import EventNotFoundError, ValidationError
from activitylog.services.event_service import EventService, normalize_timestamp
from tests.helpers import DatabaseTestCase


class TestEventLifecycle(DatabaseTestCase):
    """Test starting, ending and editing events."""

    def setUp(self) -> None:
        super().setUp()
        self.service = EventService()

    def test_focus_then_break(self) -> None:
        """Starting Break ends Focus at Break's start."""
        focus = self.service.create_event("Focus", self.at())
        self.assertEqual(self.service.get_current_event().id, focus.id)  # type: ignore[union-attr]

        brk = self.service.create_event("Break", self.at(minutes=50))

        focus_after = self.service.repo.find_by_id(focus.id)
        self.assertEqual(focus_after.end_time, brk.start_time)  # type: ignore[union-attr]
        self.assertEqual(self.service.get_current_event().id, brk.id)  # type: ignore[union-attr]

    @patch('activitylog.services.event_service.datetime')
    def test_default_start_closes_previous_at_now(self, mock_dt: MagicMock) -> None:
        mock_dt.datetime.now.return_value = self.at()
        focus = self.service.create_event("Focus")

        mock_dt.datetime.now.return_value = self.at(minutes=25)
        brk = self.service.create_event("Break")

        self.assertEqual(focus.start_time, self.at())
        self.assertEqual(brk.start_time, self.at(minutes=25))
        self.assertEqual(self.service.repo.find_by_id(focus.id).end_time, self.at(minutes=25))  # type: ignore[union-attr]

    def test_never_two_open_events(self) -> None:
        for i, name in enumerate(["A", "B", "C", "D"]):
            self.service.create_event(name, self.at(hours=i))

        open_events = [e for e in self.service.get_all_events(100) if e.is_open]

        self.assertEqual([e.name for e in open_events], ["D"])

    def test_retroactive_event_with_end_time(self) -> None:
        event = self.service.create_event("Lunch", self.at(hours=3), self.at(hours=4))

        self.assertFalse(event.is_open)
        self.assertIsNone(self.service.get_current_event())

    def test_only_previously_open_event_is_closed(self) -> None:
        done = self.service.create_event("Done", self.at(), self.at(hours=1))
        running = self.service.create_event("Running", self.at(hours=1))

        self.service.create_event("Next", self.at(hours=2))

        self.assertEqual(self.service.repo.find_by_id(done.id).end_time, self.at(hours=1))  # type: ignore[union-attr]
        self.assertEqual(self.service.repo.find_by_id(running.id).end_time, self.at(hours=2))  # type: ignore[union-attr]

    def test_end_event_clears_current(self) -> None:
        event = self.service.create_event("Focus", self.at())

        ended = self.service.end_event(event.id, self.at(hours=1))

        self.assertEqual(ended.end_time, self.at(hours=1))
        self.assertIsNone(self.service.get_current_event())

    def test_end_event_defaults_to_now(self) -> None:
        event = self.service.create_event("Focus", datetime.datetime.now() - datetime.timedelta(minutes=5))

        ended = self.service.end_event(event.id)

        self.assertIsNotNone(ended.end_time)
        self.assertGreaterEqual(ended.end_time, ended.start_time)  # type: ignore[operator]

    def test_end_missing_event(self) -> None:
        with self.assertRaises(EventNotFoundError) as ctx:
            self.service.end_event(42, self.at())
        self.assertEqual(ctx.exception.event_id, 42)

    def test_end_before_start_rejected(self) -> None:
        event = self.service.create_event("Focus", self.at(hours=1))

        with self.assertRaises(ValidationError):
            self.service.end_event(event.id, self.at())

    def test_empty_name_rejected(self) -> None:
        for name in ("", "   "):
            with self.assertRaises(ValidationError) as ctx:
                self.service.create_event(name, self.at())
            self.assertEqual(ctx.exception.field, "name")
        self.assertEqual(self.service.get_all_events(), [])

    def test_name_is_trimmed(self) -> None:
        self.assertEqual(self.service.create_event("  Focus ", self.at()).name, "Focus")

    def test_inverted_range_rejected_on_create(self) -> None:
        self.service.create_event("Running", self.at())

        with self.assertRaises(ValidationError):
            self.service.create_event("Backwards", self.at(hours=2), self.at(hours=1))
        # Rejected before anything was written
        self.assertEqual(self.service.get_current_event().name, "Running")  # type: ignore[union-attr]

    def test_update_event_partial(self) -> None:
        event = self.service.create_event("Focus", self.at(), self.at(hours=1))

        updated = self.service.update_event(event.id, name="Deep Focus")

        self.assertEqual(updated.name, "Deep Focus")
        self.assertEqual(updated.start_time, self.at())
        self.assertEqual(updated.end_time, self.at(hours=1))
        self.assertGreaterEqual(updated.updated_at, event.updated_at)

    def test_update_event_times(self) -> None:
        event = self.service.create_event("Focus", self.at(), self.at(hours=1))

        updated = self.service.update_event(event.id, start_time=self.at(minutes=15), end_time=self.at(hours=2))

        self.assertEqual(updated.start_time, self.at(minutes=15))
        self.assertEqual(updated.end_time, self.at(hours=2))

    def test_update_can_reopen(self) -> None:
        event = self.service.create_event("Focus", self.at(), self.at(hours=1))

        updated = self.service.update_event(event.id, end_time=None)

        self.assertTrue(updated.is_open)

    def test_reopen_rejected_while_another_runs(self) -> None:
        done = self.service.create_event("Done", self.at(), self.at(hours=1))
        self.service.create_event("Running", self.at(hours=2))

        with self.assertRaises(ValidationError):
            self.service.update_event(done.id, end_time=None)

    def test_reopen_checked_inside_write_transaction(self) -> None:
        """A start landing between lookup and write still blocks the reopen."""
        done = self.service.create_event("Done", self.at(), self.at(hours=1))
        real_find_by_id = self.service.repo.find_by_id

        def find_then_start_other(event_id: int) -> object:
            result = real_find_by_id(event_id)
            EventService().create_event("Other", self.at(hours=2))
            return result

        with patch.object(self.service.repo, 'find_by_id', side_effect=find_then_start_other):
            with self.assertRaises(ValidationError):
                self.service.update_event(done.id, end_time=None)

        open_events = [e.name for e in self.service.get_all_events(100) if e.is_open]
        self.assertEqual(open_events, ["Other"])

    def test_retroactive_start_before_running_event_warns(self) -> None:
        running = self.service.create_event("Running", self.at(hours=2))

        with self.assertLogs('activitylog.services.event_service', level='WARNING') as logs:
            self.service.create_event("Earlier", self.at(hours=1), self.at(hours=1, minutes=30))

        closed = self.service.repo.find_by_id(running.id)
        self.assertEqual(closed.end_time, self.at(hours=1))  # type: ignore[union-attr]
        self.assertLess(closed.end_time, closed.start_time)  # type: ignore[union-attr, operator]
        self.assertIn("ended before it started", logs.output[0])

    def test_update_validation(self) -> None:
        event = self.service.create_event("Focus", self.at(), self.at(hours=1))

        with self.assertRaises(ValidationError):
            self.service.update_event(event.id, colour="red")
        with self.assertRaises(ValidationError):
            self.service.update_event(event.id, start_time=self.at(hours=2))
        with self.assertRaises(ValidationError):
            self.service.update_event(event.id, start_time=None)
        with self.assertRaises(ValidationError):
            self.service.update_event(event.id, name="")

    def test_update_missing_event(self) -> None:
        with self.assertRaises(EventNotFoundError):
            self.service.update_event(7, name="Ghost")

    def test_delete_event(self) -> None:
        keep = self.service.create_event("Keep", self.at(), self.at(hours=1))
        drop = self.service.create_event("Drop", self.at(hours=1), self.at(hours=2))

        self.service.delete_event(drop.id)
        self.service.delete_event(drop.id)
        self.service.delete_event(12345)

        self.assertEqual([e.id for e in self.service.get_all_events()], [keep.id])

    def test_frequent_event_names(self) -> None:
        for hour in (0, 2, 4):
            self.service.create_event("Development Work", self.at(hours=hour), self.at(hours=hour + 1))
        self.service.create_event("Lunch Break", self.at(hours=6), self.at(hours=7))

        self.assertEqual(
            self.service.get_frequent_event_names(1),
            [{"name": "Development Work", "count": 3}]
        )

    def test_events_by_date_range(self) -> None:
        self.service.create_event("Early", self.at(hours=-2), self.at(hours=-1))
        inside = self.service.create_event("Inside", self.at(), self.at(hours=1))

        events = self.service.get_events_by_date_range(self.at(), self.at(hours=2))

        self.assertEqual([e.id for e in events], [inside.id])

    def test_aware_timestamps_are_stored_as_local(self) -> None:
        aware = datetime.datetime(2025, 1, 15, 9, 0, tzinfo=datetime.timezone.utc)

        event = self.service.create_event("UTC", aware)

        self.assertIsNone(event.start_time.tzinfo)
        self.assertEqual(event.start_time, normalize_timestamp(aware))

    def test_clear_events(self) -> None:
        self.service.create_event("A", self.at())
        self.service.create_event("B", self.at(hours=1))

        self.assertEqual(self.service.clear_events(), 2)
        self.assertIsNone(self.service.get_current_event())


class TestStoreErrors(unittest.TestCase):
    """Store failures reach the caller untouched."""

    def test_store_error_propagates(self) -> None:
        with patch.object(EventService, '__init__', lambda x: None):
            service = EventService()
            service.repo = MagicMock()
            service.repo.find_current.side_effect = sqlite3.OperationalError("database is locked")

            with self.assertRaises(sqlite3.OperationalError):
                service.get_current_event()


if __name__ == "__main__":
    unittest.main()
