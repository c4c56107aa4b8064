"""
Calendar-aware time spans for Playtime.

A Span keeps its components (days, hours, minutes, seconds and sub-second
units) separately instead of collapsing them into a float, so a duration read
from the config file is written back exactly as it was. All arithmetic is
range-checked and raises SpanError instead of wrapping or truncating.
"""

import re
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from functools import reduce
from typing import Iterable

from .errors import SpanError

MICROS_PER_MILLISECOND = 1_000
MICROS_PER_SECOND = 1_000_000
MICROS_PER_MINUTE = 60 * MICROS_PER_SECOND
MICROS_PER_HOUR = 60 * MICROS_PER_MINUTE
MICROS_PER_DAY = 24 * MICROS_PER_HOUR

# Largest unit first
UNITS = ("days", "hours", "minutes", "seconds", "milliseconds", "microseconds")

UNIT_MICROS = {
    "days": MICROS_PER_DAY,
    "hours": MICROS_PER_HOUR,
    "minutes": MICROS_PER_MINUTE,
    "seconds": MICROS_PER_SECOND,
    "milliseconds": MICROS_PER_MILLISECOND,
    "microseconds": 1,
}

# Every unit is capped at roughly 20,000 years
UNIT_LIMITS = {
    "days": 7_304_484,
    "hours": 175_307_616,
    "minutes": 10_518_456_960,
    "seconds": 631_107_417_600,
    "milliseconds": 631_107_417_600_000,
    "microseconds": 631_107_417_600_000_000,
}

MAX_MICROSECONDS = UNIT_LIMITS["days"] * MICROS_PER_DAY

_ISO_DURATION = re.compile(
    r"^(?P<sign>[+-])?P"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T"
    r"(?:(?P<hours>\d+)H)?"
    r"(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+)(?:[.,](?P<fraction>\d{1,9}))?S)?"
    r")?$",
    re.IGNORECASE,
)


def _unit_index(unit: str) -> int:
    try:
        return UNITS.index(unit)
    except ValueError:
        raise SpanError(f"unknown span unit: {unit!r}") from None


@dataclass(frozen=True)
class Span:
    """A signed duration made of independent calendar and clock units."""

    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0
    microseconds: int = 0

    def __post_init__(self):
        positive = negative = False
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise SpanError(f"span {f.name} must be an integer, got {value!r}")
            if abs(value) > UNIT_LIMITS[f.name]:
                raise SpanError(
                    f"span {f.name} out of range: {value} "
                    f"(limit {UNIT_LIMITS[f.name]})"
                )
            positive = positive or value > 0
            negative = negative or value < 0
        if positive and negative:
            raise SpanError("span components must all have the same sign")

    @classmethod
    def from_microseconds(cls, total: int, largest: str = "hours") -> "Span":
        """Build a balanced span whose biggest non-zero unit is at most `largest`."""
        if abs(total) > MAX_MICROSECONDS:
            raise SpanError(f"span overflow: {total} microseconds")

        sign = -1 if total < 0 else 1
        remaining = abs(total)
        parts = {}
        for unit in UNITS[_unit_index(largest):]:
            parts[unit], remaining = divmod(remaining, UNIT_MICROS[unit])
            parts[unit] *= sign
        return cls(**parts)

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "Span":
        """Exact elapsed time from `start` to `end`, largest unit hours.

        Both datetimes must be timezone-aware. The difference is taken on
        the UTC instants, so a DST transition in between is accounted for.
        """
        if start.utcoffset() is None or end.utcoffset() is None:
            raise SpanError("cannot measure a span between naive datetimes")
        try:
            delta = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
        except OverflowError as e:
            raise SpanError(f"timestamp out of range: {e}") from e
        total = (
            delta.days * MICROS_PER_DAY
            + delta.seconds * MICROS_PER_SECOND
            + delta.microseconds
        )
        return cls.from_microseconds(total, largest="hours")

    @classmethod
    def parse(cls, text: str) -> "Span":
        """Parse an ISO 8601 duration such as ``PT2H4M0.5S`` or ``P1DT3H``."""
        match = _ISO_DURATION.match(text.strip()) if isinstance(text, str) else None
        if not match or not any(
            match.group(unit) for unit in ("days", "hours", "minutes", "seconds")
        ):
            raise SpanError(f"invalid ISO 8601 duration: {text!r}")

        sign = -1 if match.group("sign") == "-" else 1
        fraction = (match.group("fraction") or "").ljust(9, "0")
        parts = {
            unit: sign * int(match.group(unit) or 0)
            for unit in ("days", "hours", "minutes", "seconds")
        }
        # Sub-microsecond digits are dropped
        parts["milliseconds"] = sign * int(fraction[0:3])
        parts["microseconds"] = sign * int(fraction[3:6])
        return cls(**parts)

    @property
    def largest_unit(self) -> str:
        for unit in UNITS:
            if getattr(self, unit):
                return unit
        return "microseconds"

    @property
    def sign(self) -> int:
        total = self.total_microseconds()
        return (total > 0) - (total < 0)

    def is_zero(self) -> bool:
        return self.sign == 0

    def total_microseconds(self) -> int:
        """Length in microseconds, counting a day as 24 hours."""
        return sum(getattr(self, unit) * UNIT_MICROS[unit] for unit in UNITS)

    def total_milliseconds(self) -> float:
        return self.total_microseconds() / MICROS_PER_MILLISECOND

    def clock_microseconds(self) -> int:
        """Length of everything below the day component."""
        return self.total_microseconds() - self.days * MICROS_PER_DAY

    def checked_add(self, other: "Span") -> "Span":
        """Add two spans, keeping the larger of their largest units.

        Raises:
            SpanError: If the sum does not fit the span range.
        """
        if not isinstance(other, Span):
            raise SpanError(f"cannot add {type(other).__name__} to a span")
        largest = min(
            _unit_index(self.largest_unit), _unit_index(other.largest_unit)
        )
        total = self.total_microseconds() + other.total_microseconds()
        return Span.from_microseconds(total, largest=UNITS[largest])

    def __add__(self, other: "Span") -> "Span":
        if not isinstance(other, Span):
            return NotImplemented
        return self.checked_add(other)

    def __neg__(self) -> "Span":
        return Span(**{unit: -getattr(self, unit) for unit in UNITS})

    def round(self, largest: str = "hours", smallest: str = "microseconds") -> "Span":
        """Rebalance into `largest`..`smallest`, rounding half away from zero."""
        if _unit_index(largest) > _unit_index(smallest):
            raise SpanError(f"largest unit {largest} is smaller than {smallest}")

        total = self.total_microseconds()
        increment = UNIT_MICROS[smallest]
        if increment > 1:
            quotient, remainder = divmod(abs(total), increment)
            if remainder * 2 >= increment:
                quotient += 1
            total = (-1 if total < 0 else 1) * quotient * increment
        return Span.from_microseconds(total, largest=largest)

    def isoformat(self) -> str:
        """Render as an ISO 8601 duration, preserving each component."""
        if self.is_zero():
            return "PT0S"

        span = -self if self.sign < 0 else self
        text = "-P" if self.sign < 0 else "P"
        if span.days:
            text += f"{span.days}D"

        clock = ""
        if span.hours:
            clock += f"{span.hours}H"
        if span.minutes:
            clock += f"{span.minutes}M"
        # Sub-second units can only be written as a fraction of seconds
        whole, fraction = divmod(
            span.milliseconds * MICROS_PER_MILLISECOND + span.microseconds,
            MICROS_PER_SECOND,
        )
        seconds = span.seconds + whole
        if seconds or fraction:
            clock += str(seconds)
            if fraction:
                clock += "." + f"{fraction:06d}".rstrip("0")
            clock += "S"
        if clock:
            text += "T" + clock
        return text

    def __str__(self) -> str:
        return self.isoformat()


ZERO = Span()


def sum_spans(spans: Iterable[Span]) -> Span:
    """Checked sum of `spans`; an empty iterable gives the zero span."""
    return reduce(Span.checked_add, spans, ZERO)
