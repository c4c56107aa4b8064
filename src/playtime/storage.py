#!/usr/bin/env python3
"""
Config file storage for Playtime.
Handles all file I/O and the JSON encoding of the app registry.
"""

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import (
    ConfigDecodeError,
    ConfigEncodeError,
    InvalidConfigDirError,
    InvalidConfigFileError,
    NoConfigDirError,
    PlaytimeError,
    PlaytimeIOError,
)
from .models import App, Config, Session
from .span import Span
from .utils import get_config_directory
from .zoned import format_timestamp, parse_timestamp

CONFIG_DIR_NAME = "playtime"
CONFIG_FILE_NAME = "config.json"


def encode_config(config: Config) -> Dict[str, Any]:
    """Convert a Config into plain JSON-compatible data."""
    return {
        "apps": [
            {
                "name": app.name,
                "exe": app.exe,
                "sessions": [
                    {
                        "timestamp": format_timestamp(session.timestamp),
                        "duration": session.duration.isoformat(),
                    }
                    for session in app.sessions
                ],
            }
            for app in config.apps
        ]
    }


def _require(record: Dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in record:
        raise ConfigDecodeError(f"missing field `{key}` in {where}")
    value = record[key]
    if not isinstance(value, kind):
        raise ConfigDecodeError(
            f"invalid type for `{key}` in {where}: expected {kind.__name__}, "
            f"found {type(value).__name__}"
        )
    return value


def decode_session(record: Any, where: str) -> Session:
    if not isinstance(record, dict):
        raise ConfigDecodeError(f"{where} must be a table")
    timestamp = _require(record, "timestamp", str, where)
    duration = _require(record, "duration", str, where)
    try:
        return Session(timestamp=parse_timestamp(timestamp), duration=Span.parse(duration))
    except (ValueError, OverflowError, PlaytimeError) as e:
        raise ConfigDecodeError(f"{where}: {e}") from e


def decode_app(record: Any, where: str) -> App:
    if not isinstance(record, dict):
        raise ConfigDecodeError(f"{where} must be a table")
    name = _require(record, "name", str, where)
    exe = _require(record, "exe", str, where)
    sessions: List[Any] = _require(record, "sessions", list, f"app `{name}`")
    return App(
        name=name,
        exe=exe,
        sessions=[
            decode_session(session, f"session {index} of app `{name}`")
            for index, session in enumerate(sessions)
        ],
    )


def decode_config(data: Any) -> Config:
    """Build a Config from parsed JSON data.

    Raises:
        ConfigDecodeError: If the data does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise ConfigDecodeError("top level must be a table")
    apps: List[Any] = _require(data, "apps", list, "config")
    return Config(
        apps=[decode_app(app, f"app {index}") for index, app in enumerate(apps)]
    )


def _target_mode(path: Path) -> int:
    """Permission bits for a rewritten file: the current ones, or the umask default."""
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class ConfigStore:
    """Reads and writes the registry file."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the store.

        Args:
            config_dir: Directory holding the config file. Defaults to
                ``playtime`` under the platform configuration directory.
        """
        self._config_dir = Path(config_dir) if config_dir else None

    def resolve_config_dir(self) -> Path:
        if self._config_dir is not None:
            return self._config_dir
        base = get_config_directory()
        if base is None:
            raise NoConfigDirError()
        return base / CONFIG_DIR_NAME

    def config_path(self) -> Path:
        """Locate the config file, creating its directory if needed."""
        config_dir = self.resolve_config_dir()

        if not config_dir.exists():
            try:
                config_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise PlaytimeIOError(e) from e

        if not config_dir.is_dir():
            raise InvalidConfigDirError(config_dir)

        return config_dir / CONFIG_FILE_NAME

    def read(self) -> Config:
        """Load the registry, or an empty one if the file does not exist yet."""
        path = self.config_path()

        if path.exists() and not path.is_file():
            raise InvalidConfigFileError(path)

        if not path.exists():
            return Config()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigDecodeError(str(e)) from e
        except OSError as e:
            raise PlaytimeIOError(e) from e

        return decode_config(data)

    def save(self, config: Config) -> None:
        """Rewrite the whole file.

        The document goes to a temporary file next to the config file and is
        then moved over it, so readers see either the old or the new content.
        A symlinked config file is followed, and the file keeps its mode.
        """
        path = self.config_path().resolve()

        try:
            buf = json.dumps(encode_config(config), indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ConfigEncodeError(str(e)) from e

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=".config-",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(buf + "\n")
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, _target_mode(path))
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise PlaytimeIOError(e) from e
