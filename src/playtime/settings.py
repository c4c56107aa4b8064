"""Runtime settings for Playtime."""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

DEFAULT_SETTINGS: Dict[str, Any] = {
    "config_dir": None,
    "min_session_ms": 1000,  # shorter runs are treated as accidental launches
    "recent_days": 7,
    "verbose": True,
}

ENV_MAPPINGS = {
    "PLAYTIME_CONFIG_DIR": "config_dir",
    "PLAYTIME_MIN_SESSION_MS": "min_session_ms",
    "PLAYTIME_RECENT_DAYS": "recent_days",
    "PLAYTIME_VERBOSE": "verbose",
}

INTEGER_KEYS = ("min_session_ms", "recent_days")
BOOLEAN_KEYS = ("verbose",)


@dataclass
class Settings:
    """Settings for a single command invocation."""

    config_dir: Optional[str] = DEFAULT_SETTINGS["config_dir"]
    min_session_ms: int = DEFAULT_SETTINGS["min_session_ms"]
    recent_days: int = DEFAULT_SETTINGS["recent_days"]
    verbose: bool = DEFAULT_SETTINGS["verbose"]


def load_settings_from_env() -> Dict[str, Any]:
    """Load settings from environment variables.

    Returns:
        Settings dictionary from environment
    """
    env_settings: Dict[str, Any] = {}

    for env_var, key in ENV_MAPPINGS.items():
        value = os.getenv(env_var)
        if value is None or value == "":
            continue

        if key in INTEGER_KEYS:
            try:
                number = int(value)
            except ValueError:
                print(f"Warning: Invalid integer value for {env_var}: {value}")
                continue
            if number < 0:
                print(f"Warning: Negative value for {env_var} ignored: {value}")
                continue
            env_settings[key] = number
        elif key in BOOLEAN_KEYS:
            env_settings[key] = value.lower() in ("true", "1", "yes", "on")
        else:
            env_settings[key] = value

    return env_settings


def build_settings(**overrides: Any) -> Settings:
    """Merge defaults, environment variables and explicit overrides.

    Overrides set to None are ignored so unset CLI flags do not mask the
    environment.
    """
    merged = DEFAULT_SETTINGS.copy()
    merged.update(load_settings_from_env())
    merged.update({key: value for key, value in overrides.items() if value is not None})

    known = {f.name for f in fields(Settings)}
    return Settings(**{key: value for key, value in merged.items() if key in known})
