"""Exception hierarchy for Playtime."""

from pathlib import Path
from typing import Optional


class PlaytimeError(Exception):
    """Base class for every failure a command can report."""


class AppNotFoundError(PlaytimeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no app with this name found: {name}")


class AppExistsError(PlaytimeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"an app with this name already exists: {name}")


class NoConfigDirError(PlaytimeError):
    def __init__(self):
        super().__init__("config directory not found")


class InvalidConfigDirError(PlaytimeError):
    def __init__(self, path: Optional[Path] = None):
        self.path = path
        super().__init__("config directory exists but is not a directory")


class InvalidConfigFileError(PlaytimeError):
    def __init__(self, path: Optional[Path] = None):
        self.path = path
        super().__init__("config file exists but is not a regular file")


class PlaytimeIOError(PlaytimeError):
    """Wraps an OSError raised while touching the filesystem or spawning."""

    def __init__(self, cause: OSError):
        self.cause = cause
        super().__init__(f"I/O error: {cause}")


class ConfigDecodeError(PlaytimeError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"error deserializing config: {detail}")


class ConfigEncodeError(PlaytimeError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"error serializing config: {detail}")


class SpanError(PlaytimeError):
    """Time arithmetic failed (overflow or an invalid span)."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"time-related error: {detail}")
