"""Tests for console output formatting."""

import unittest
from unittest.mock import patch

from playtime.output import ConsoleReporter


class TestConsoleReporter(unittest.TestCase):
    """Test cases for ConsoleReporter class."""

    def setUp(self):
        """Set up test fixtures."""
        self.reporter = ConsoleReporter(verbose=False)

    @patch("builtins.print")
    def test_short_session_one_second(self, mock_print):
        """Test that a one-second threshold uses the singular unit."""
        self.reporter.log_short_session(1000)
        mock_print.assert_called_once_with(
            "warning: process terminated after less than 1 second"
        )

    @patch("builtins.print")
    def test_short_session_other_thresholds(self, mock_print):
        """Test that other thresholds use the plural unit."""
        self.reporter.log_short_session(2500)
        mock_print.assert_called_with(
            "warning: process terminated after less than 2.5 seconds"
        )
        self.reporter.log_short_session(500)
        mock_print.assert_called_with(
            "warning: process terminated after less than 0.5 seconds"
        )

    @patch("builtins.print")
    def test_confirmations_quiet(self, mock_print):
        """Test that add/remove confirmations are silenced when not verbose."""
        self.reporter.log_app_added("factorio")
        self.reporter.log_app_removed("factorio")
        mock_print.assert_not_called()

    @patch("builtins.print")
    def test_confirmations_verbose(self, mock_print):
        """Test add confirmation in verbose mode."""
        ConsoleReporter(verbose=True).log_app_added("factorio")
        mock_print.assert_called_once_with("added factorio to the config file")


if __name__ == "__main__":
    unittest.main()
