#!/usr/bin/env python3
"""
Console output for Playtime commands.
"""

import sys
from typing import Sequence

from .models import Session
from .span import Span
from .utils import describe_exit_status, format_span, format_zoned


class ConsoleReporter:
    """Prints command results; confirmations are silenced when not verbose."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def log_app_added(self, name: str) -> None:
        if self.verbose:
            print(f"added {name} to the config file")

    def log_app_removed(self, name: str) -> None:
        if self.verbose:
            print(f"removed {name} from the config file")

    def log_no_apps(self) -> None:
        print("no apps added to the config file")

    def log_app_summary(self, name: str, exe: str, total: Span, recent: Span) -> None:
        print(name)
        print(f" executable: {exe}")
        print(f" recorded total: {format_span(total)}")
        print(f" recorded recently: {format_span(recent)}")

    def log_launch(self, name: str, exe: str) -> None:
        if self.verbose:
            print(f"starting {name} ({exe})")

    def log_process_exit(self, returncode: int) -> None:
        print(f"process exited with status: {describe_exit_status(returncode)}")

    def log_short_session(self, min_duration_ms: int) -> None:
        seconds = min_duration_ms / 1000
        unit = "second" if seconds == 1 else "seconds"
        print(f"warning: process terminated after less than {seconds:g} {unit}")

    def log_session_recorded(self, duration: Span) -> None:
        print(f"session duration: {format_span(duration)}")

    def log_sessions(self, name: str, sessions: Sequence[Session]) -> None:
        print(f"sessions for {name}")
        if not sessions:
            print(" no sessions recorded")
        for session in sessions:
            print(
                f" played on {format_zoned(session.timestamp)} "
                f"for {format_span(session.duration)}"
            )

    def log_error(self, error: Exception) -> None:
        print(f"error: {error}", file=sys.stderr)

    def log_interrupted(self) -> None:
        print("\nReceived interrupt signal", file=sys.stderr)
