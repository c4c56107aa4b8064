#!/usr/bin/env python3
"""
Playtime command operations.
Each operation loads the config, works on it in memory and saves it back
when something changed.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from .models import App, Config, Session
from .output import ConsoleReporter
from .recorder import RecordingResult, SessionRecorder
from .settings import Settings
from .span import Span
from .storage import ConfigStore
from .zoned import checked_sub, now


@dataclass(frozen=True)
class AppSummary:
    """Totals shown by the list command."""

    name: str
    exe: str
    total: Span
    recent: Span


def summarize_app(app: App, since: datetime) -> AppSummary:
    return AppSummary(
        name=app.name,
        exe=app.exe,
        total=app.total_time(),
        recent=app.time_since(since),
    )


def recent_cutoff(current: datetime, days: int) -> datetime:
    """Start of the "recent" window: `days` calendar days before `current`."""
    return checked_sub(current, Span(days=days))


class Playtime:
    """
    Playtime - Orchestrates the registry, the config store and the recorder.

    Uses composition so tests can swap the store, reporter, recorder or clock.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[ConfigStore] = None,
        reporter: Optional[ConsoleReporter] = None,
        recorder: Optional[SessionRecorder] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings or Settings()
        self.store = store or ConfigStore(self.settings.config_dir)
        self.reporter = reporter or ConsoleReporter(verbose=self.settings.verbose)
        self.clock = clock or now
        self.recorder = recorder or SessionRecorder(
            min_duration_ms=self.settings.min_session_ms, clock=self.clock
        )

    def load(self) -> Config:
        return self.store.read()

    def add(self, name: str, exe: str) -> App:
        config = self.load()
        app = config.add(name, exe)
        self.store.save(config)
        self.reporter.log_app_added(name)
        return app

    def remove(self, name: str) -> App:
        config = self.load()
        app = config.remove(name)
        self.store.save(config)
        self.reporter.log_app_removed(name)
        return app

    def list_apps(self) -> List[AppSummary]:
        """Show every app with its total and recent playtime. Read-only."""
        config = self.load()
        if not config.apps:
            self.reporter.log_no_apps()
            return []

        since = recent_cutoff(self.clock(), self.settings.recent_days)
        summaries = [summarize_app(app, since) for app in config.apps]
        for summary in summaries:
            self.reporter.log_app_summary(
                summary.name, summary.exe, summary.total, summary.recent
            )
        return summaries

    def start(self, name: str) -> RecordingResult:
        """Launch an app and record the session if it ran long enough."""
        config = self.load()
        app = config.find(name)

        self.reporter.log_launch(app.name, app.exe)
        result = self.recorder.record(app)
        self.reporter.log_process_exit(result.returncode)

        if not result.recorded:
            self.reporter.log_short_session(self.recorder.min_duration_ms)
            return result

        self.reporter.log_session_recorded(result.duration)
        self.store.save(config)
        return result

    def sessions(self, name: str) -> List[Session]:
        config = self.load()
        app = config.find(name)
        self.reporter.log_sessions(app.name, app.sessions)
        return list(app.sessions)
