"""
Playtime - a personal playtime tracker.

Registers applications by name, launches them, times each run and keeps a
per-app history of sessions in a JSON file under the user's config directory:

- App registry with unique names
- Session ledger with total and recent (last 7 days) playtime
- Timezone-aware timestamps and overflow-checked durations
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .core import Playtime
from .models import App, Config, Session
from .span import Span
from .storage import ConfigStore

__all__ = [
    "Playtime",
    "App",
    "Config",
    "Session",
    "Span",
    "ConfigStore",
]
