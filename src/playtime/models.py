"""Data model for Playtime: the app registry and each app's session ledger."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from .errors import AppExistsError, AppNotFoundError, SpanError
from .span import Span, sum_spans


@dataclass(frozen=True)
class Session:
    """One recorded play: when it started and how long it lasted."""

    timestamp: datetime
    duration: Span


@dataclass
class App:
    """A launchable application and its recorded sessions."""

    name: str
    exe: str
    sessions: List[Session] = field(default_factory=list)

    def total_time(self) -> Span:
        """Checked sum of every session duration."""
        return sum_spans(session.duration for session in self.sessions)

    def time_since(self, since: datetime) -> Span:
        """Checked sum of sessions that started strictly after `since`.

        Timestamps are compared as UTC instants, so sessions recorded in a
        different zone (or either side of a DST fold) are ordered correctly.
        """
        try:
            cutoff = since.astimezone(timezone.utc)
            recent = [
                session.duration
                for session in self.sessions
                if session.timestamp.astimezone(timezone.utc) > cutoff
            ]
        except OverflowError as e:
            raise SpanError(f"timestamp out of range: {e}") from e
        return sum_spans(recent)

    def record(self, session: Session) -> None:
        self.sessions.append(session)


@dataclass
class Config:
    """Root object persisted in the config file."""

    apps: List[App] = field(default_factory=list)

    def find(self, name: str) -> App:
        """Return the app called `name` (exact, case-sensitive match).

        Raises:
            AppNotFoundError: If no app has that name.
        """
        for app in self.apps:
            if app.name == name:
                return app
        raise AppNotFoundError(name)

    def has_app(self, name: str) -> bool:
        return any(app.name == name for app in self.apps)

    def add(self, name: str, exe: str) -> App:
        """Register a new app with an empty session history.

        Raises:
            AppExistsError: If the name is already taken.
        """
        if self.has_app(name):
            raise AppExistsError(name)
        app = App(name=name, exe=exe)
        self.apps.append(app)
        return app

    def remove(self, name: str) -> App:
        """Drop the app called `name` together with its sessions.

        Raises:
            AppNotFoundError: If no app has that name.
        """
        for index, app in enumerate(self.apps):
            if app.name == name:
                return self.apps.pop(index)
        raise AppNotFoundError(name)
