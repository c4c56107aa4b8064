#!/usr/bin/env python3
"""
Platform helpers and display formatting for Playtime.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .span import Span

TIMESTAMP_DISPLAY_FORMAT = "%Y-%m-%d at %H:%M %Z"


def _home_directory() -> Optional[Path]:
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def get_config_directory() -> Optional[Path]:
    """Get the per-user configuration directory for the current platform.

    Returns:
        ``~/Library/Application Support`` on macOS, ``%APPDATA%`` on Windows,
        ``$XDG_CONFIG_HOME`` or ``~/.config`` elsewhere. None when the
        directory cannot be determined.
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else None

    home = _home_directory()

    if sys.platform == "darwin":
        return home / "Library" / "Application Support" if home else None

    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config and os.path.isabs(xdg_config):
        return Path(xdg_config)
    return home / ".config" if home else None


def format_span(span: Span) -> str:
    """Format a span as ``HHh MMm SSs`` with hours as the largest unit."""
    rounded = span.round(largest="hours")
    return f"{rounded.hours:02}h {rounded.minutes:02}m {rounded.seconds:02}s"


def format_zoned(timestamp: datetime) -> str:
    """Format a timestamp for display, e.g. ``2024-08-10 at 23:14 EDT``."""
    return timestamp.strftime(TIMESTAMP_DISPLAY_FORMAT)


def describe_exit_status(returncode: int) -> str:
    """Describe a subprocess return code the way a shell user expects."""
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status: {returncode}"
