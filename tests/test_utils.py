"""Tests for utils module functionality."""

import os
import unittest
from datetime import datetime
from pathlib import Path
from unittest.mock import patch
from zoneinfo import ZoneInfo

from playtime.span import Span
from playtime.utils import (
    describe_exit_status,
    format_span,
    format_zoned,
    get_config_directory,
)


class TestGetConfigDirectory(unittest.TestCase):
    """Test cases for get_config_directory function."""

    @patch("sys.platform", "linux")
    def test_linux_xdg_config_home(self):
        """Test that an absolute XDG_CONFIG_HOME is used."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": "/srv/xdg"}):
            self.assertEqual(get_config_directory(), Path("/srv/xdg"))

    @patch("sys.platform", "linux")
    @patch("playtime.utils._home_directory", return_value=Path("/home/player"))
    def test_linux_default(self, _mock_home):
        """Test the ~/.config fallback, ignoring a relative XDG path."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": "relative/xdg"}):
            self.assertEqual(get_config_directory(), Path("/home/player/.config"))

    @patch("sys.platform", "darwin")
    @patch("playtime.utils._home_directory", return_value=Path("/Users/player"))
    def test_macos(self, _mock_home):
        """Test macOS-specific path on darwin platform."""
        result = get_config_directory()
        self.assertEqual(result, Path("/Users/player/Library/Application Support"))

    @patch("sys.platform", "win32")
    def test_windows(self):
        """Test that APPDATA is used on Windows."""
        with patch.dict(os.environ, {"APPDATA": "/appdata/roaming"}):
            self.assertEqual(get_config_directory(), Path("/appdata/roaming"))

    @patch("sys.platform", "win32")
    def test_windows_without_appdata(self):
        """Test that a missing APPDATA gives no directory."""
        with patch.dict(os.environ, {"APPDATA": ""}):
            self.assertIsNone(get_config_directory())

    @patch("sys.platform", "linux")
    @patch("playtime.utils._home_directory", return_value=None)
    def test_unknown_home(self, _mock_home):
        """Test that an unknown home directory gives no directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}):
            self.assertIsNone(get_config_directory())


class TestFormatting(unittest.TestCase):
    """Test cases for display formatting."""

    def test_format_span_carries_minutes(self):
        """Test that 124 minutes display as 2 hours 4 minutes."""
        self.assertEqual(format_span(Span(minutes=124)), "02h 04m 00s")

    def test_format_span_examples(self):
        """Test assorted spans."""
        self.assertEqual(format_span(Span()), "00h 00m 00s")
        self.assertEqual(format_span(Span(minutes=90, seconds=75)), "01h 31m 15s")
        self.assertEqual(format_span(Span(days=1, hours=2)), "26h 00m 00s")
        self.assertEqual(format_span(Span(hours=123, minutes=5, seconds=3)), "123h 05m 03s")

    def test_format_span_truncates_fraction(self):
        """Test that sub-second parts are not displayed."""
        self.assertEqual(format_span(Span(seconds=59, milliseconds=999)), "00h 00m 59s")

    def test_format_zoned(self):
        """Test the timestamp display format."""
        timestamp = datetime(2024, 8, 10, 23, 14, tzinfo=ZoneInfo("America/New_York"))
        self.assertEqual(format_zoned(timestamp), "2024-08-10 at 23:14 EDT")

    def test_format_zoned_uses_minutes(self):
        """Test that minutes, not seconds, follow the hour."""
        timestamp = datetime(2024, 1, 2, 3, 4, 56, tzinfo=ZoneInfo("Europe/Berlin"))
        self.assertEqual(format_zoned(timestamp), "2024-01-02 at 03:04 CET")

    def test_describe_exit_status(self):
        """Test exit code descriptions."""
        self.assertEqual(describe_exit_status(0), "exit status: 0")
        self.assertEqual(describe_exit_status(2), "exit status: 2")
        self.assertEqual(describe_exit_status(-9), "signal: 9")


if __name__ == "__main__":
    unittest.main()
