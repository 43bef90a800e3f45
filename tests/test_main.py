"""Tests for the command line entrypoint."""
import unittest
from unittest.mock import MagicMock, patch
from click.testing import CliRunner
from activitylog import main as cli_main
from activitylog.services import EventService
from tests.helpers import DatabaseTestCase


class TestCli(DatabaseTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.runner = CliRunner()
        self.logging_patcher = patch.object(cli_main, 'configure_logging')
        self.mock_configure_logging = self.logging_patcher.start()

    def tearDown(self) -> None:
        self.logging_patcher.stop()
        super().tearDown()

    def test_init_db(self) -> None:
        result = self.runner.invoke(cli_main.cli, ["init-db"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Database initialized", result.output)
        self.mock_configure_logging.assert_called_once_with(None)

    def test_seed(self) -> None:
        result = self.runner.invoke(cli_main.cli, ["seed"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Seeded 8 events", result.output)
        self.assertEqual(len(EventService().get_all_events(limit=100)), 8)

    @patch('activitylog.web.create_app')
    def test_serve_uses_explicit_port(self, mock_create_app: MagicMock) -> None:
        result = self.runner.invoke(cli_main.cli, ["serve", "--host", "127.0.0.1", "--port", "6123"])

        self.assertEqual(result.exit_code, 0, result.output)
        mock_create_app.return_value.run.assert_called_once_with(
            host="127.0.0.1", port=6123, debug=False, use_reloader=False
        )


if __name__ == "__main__":
    unittest.main()
