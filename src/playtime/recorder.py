#!/usr/bin/env python3
"""
Session recording for Playtime.
Launches an app, waits for it to exit and decides whether the run counts.
"""

import subprocess  # nosec B404 - launching the user's own registered apps
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from .errors import PlaytimeIOError
from .models import App, Session
from .span import Span
from .zoned import now


class RecorderState(Enum):
    IDLE = "idle"
    LAUNCHING = "launching"
    MEASURING = "measuring"
    RECORDING = "recording"
    DISCARDING = "discarding"


@dataclass(frozen=True)
class RecordingResult:
    """Outcome of one launch."""

    returncode: int
    started: datetime
    duration: Span
    recorded: bool


def run_executable(exe: str) -> int:
    """Run `exe` with no arguments, inheriting stdio, and wait for it.

    Raises:
        PlaytimeIOError: If the process cannot be spawned.
    """
    try:
        completed = subprocess.run([exe], check=False)  # nosec B603
    except OSError as e:
        raise PlaytimeIOError(e) from e
    return completed.returncode


class SessionRecorder:
    """Times a single run of an app and appends it to the app's ledger."""

    def __init__(
        self,
        min_duration_ms: int = 1000,
        launcher: Optional[Callable[[str], int]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            min_duration_ms: Runs shorter than this are discarded.
            launcher: Runs an executable and returns its exit code.
            clock: Returns the current timezone-aware time.
        """
        self.min_duration_ms = min_duration_ms
        self.launcher = launcher or run_executable
        self.clock = clock or now
        self.state = RecorderState.IDLE

    def record(self, app: App) -> RecordingResult:
        """Launch `app`, block until it exits and record the session.

        The session is appended to ``app.sessions`` only when the run lasted
        at least ``min_duration_ms``. Persisting is left to the caller.
        """
        self.state = RecorderState.LAUNCHING
        try:
            started = self.clock()
            returncode = self.launcher(app.exe)

            self.state = RecorderState.MEASURING
            ended = self.clock()
            duration = Span.between(started, ended)

            if duration.total_milliseconds() < self.min_duration_ms:
                self.state = RecorderState.DISCARDING
                return RecordingResult(returncode, started, duration, recorded=False)

            self.state = RecorderState.RECORDING
            app.record(Session(timestamp=started, duration=duration))
            return RecordingResult(returncode, started, duration, recorded=True)
        finally:
            self.state = RecorderState.IDLE
