"""
Timezone-aware timestamps for Playtime.

Timestamps are stored as RFC 9557 strings, an ISO 8601 date-time with its UTC
offset followed by the IANA zone in brackets:

    2024-08-10T23:14:00-04:00[America/New_York]

Keeping the zone name (not just the offset) lets calendar arithmetic such as
"seven days ago" follow the zone's DST rules.
"""

import os
import re
from datetime import datetime, timedelta, timezone, tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import SpanError
from .span import Span

_RFC9557 = re.compile(r"^(?P<datetime>[^\[\]]+?)(?:\[(?P<zone>[^\[\]]+)\])?$")
_OFFSET = re.compile(r"^(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})$")
_FRACTION = re.compile(r"[.,](\d+)")

LOCALTIME_PATH = Path("/etc/localtime")
TIMEZONE_PATH = Path("/etc/timezone")


def _zone_from_key(key: str) -> Optional[ZoneInfo]:
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def local_timezone() -> tzinfo:
    """Return the system time zone, as a named zone whenever possible.

    Checks the TZ environment variable, the /etc/localtime symlink, the
    /etc/timezone name file and then the contents of /etc/localtime itself.
    Falls back to the current fixed UTC offset when none of them gives a zone.
    """
    key = os.environ.get("TZ", "").lstrip(":")
    if key:
        zone = _zone_from_key(key)
        if zone is not None:
            return zone

    if LOCALTIME_PATH.is_symlink():
        target = str(LOCALTIME_PATH.resolve())
        if "zoneinfo/" in target:
            zone = _zone_from_key(target.split("zoneinfo/", 1)[1])
            if zone is not None:
                return zone

    if TIMEZONE_PATH.is_file():
        try:
            key = TIMEZONE_PATH.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            key = ""
        zone = _zone_from_key(key) if key else None
        if zone is not None:
            return zone

    if LOCALTIME_PATH.is_file():
        try:
            with open(LOCALTIME_PATH, "rb") as f:
                return ZoneInfo.from_file(f)
        except (OSError, ValueError):
            pass

    fallback = datetime.now().astimezone().tzinfo
    assert fallback is not None  # nosec B101 - astimezone() always sets tzinfo
    return fallback


def now(tz: Optional[tzinfo] = None) -> datetime:
    """Current time in `tz` (the local zone by default)."""
    return datetime.now(tz or local_timezone())


def zone_name(dt: datetime) -> Optional[str]:
    """IANA name of the zone attached to `dt`, if it has one.

    Zones loaded straight from a TZif file have no name.
    """
    if isinstance(dt.tzinfo, ZoneInfo):
        return dt.tzinfo.key
    return None


def format_timestamp(dt: datetime) -> str:
    """Serialize an aware datetime as RFC 9557 text."""
    if dt.utcoffset() is None:
        raise ValueError(f"timestamp has no timezone: {dt!r}")
    text = dt.isoformat()
    name = zone_name(dt)
    if name:
        text += f"[{name}]"
    return text


def parse_timestamp(text: str) -> datetime:
    """Parse RFC 9557 text back into an aware datetime.

    A bracketed zone wins over the numeric offset: the instant is kept and
    re-expressed in that zone.

    Raises:
        ValueError: If the text is not a timezone-aware timestamp.
    """
    match = _RFC9557.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise ValueError(f"invalid timestamp: {text!r}")

    dt = datetime.fromisoformat(_normalize_iso(match.group("datetime")))
    zone = match.group("zone")
    if zone:
        tz = _parse_zone(zone)
        if dt.utcoffset() is None:
            dt = dt.replace(tzinfo=tz)
        else:
            dt = _checked_astimezone(dt, tz)
    elif dt.utcoffset() is None:
        raise ValueError(f"timestamp has no offset or zone: {text!r}")

    # Every stored instant must also be expressible in UTC for comparisons
    _checked_astimezone(dt, timezone.utc)
    return dt


def _normalize_iso(text: str) -> str:
    """Make ISO text acceptable to fromisoformat on every supported Python.

    Fractions are cut or padded to six digits and a trailing Z becomes +00:00.
    """
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    return text


def _checked_astimezone(dt: datetime, tz: tzinfo) -> datetime:
    try:
        return dt.astimezone(tz)
    except OverflowError as e:
        raise ValueError(f"timestamp out of range: {dt.isoformat()}") from e


def _parse_zone(zone: str) -> tzinfo:
    offset = _OFFSET.match(zone)
    if offset:
        delta = timedelta(
            hours=int(offset.group("hours")), minutes=int(offset.group("minutes"))
        )
        return timezone(-delta if offset.group("sign") == "-" else delta)

    tz = _zone_from_key(zone)
    if tz is None:
        raise ValueError(f"unknown time zone: {zone!r}")
    return tz


def checked_sub(dt: datetime, span: Span) -> datetime:
    """Subtract `span` from `dt`.

    Days are calendar days: the wall-clock time is kept and the UTC offset is
    recomputed, so "7 days ago" across a DST change is still the same local
    time. Smaller units are exact elapsed time.

    Raises:
        SpanError: If the result falls outside the supported date range.
    """
    try:
        shifted = dt - timedelta(days=span.days)
        if not span.clock_microseconds():
            return shifted
        instant = shifted.astimezone(timezone.utc) - timedelta(
            microseconds=span.clock_microseconds()
        )
        return instant.astimezone(dt.tzinfo)
    except OverflowError as e:
        raise SpanError(f"timestamp out of range: {e}") from e
