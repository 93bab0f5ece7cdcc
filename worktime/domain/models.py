"""
Domain models for events and work periods.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Tuple

import pendulum
from pendulum import DateTime

from .exceptions import InvalidInterval


def to_local(value: datetime, timezone: str) -> DateTime:
    """
    Express a point in time as naive wall-clock time in ``timezone``.

    Naive values are taken to be wall-clock time already and are returned
    unchanged (as a pendulum ``DateTime``).
    """
    if value.tzinfo is None:
        return pendulum.naive(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond,
        )
    return pendulum.instance(value).in_timezone(timezone).naive()


# No zone changes its UTC offset twice within this step
_TRANSITION_SCAN_STEP = timedelta(hours=12)


def _utc_offset(timestamp: float, timezone: str) -> timedelta:
    return pendulum.from_timestamp(timestamp, tz=timezone).utcoffset()


def _next_transition(lo: float, hi: float, offset: timedelta, timezone: str) -> int:
    """
    Find the first whole second in ``(lo, hi]`` where the UTC offset differs
    from ``offset``. The offset at ``lo`` must equal ``offset`` and the one at
    ``hi`` must not.
    """
    low, high = math.floor(lo), math.ceil(hi)
    while high - low > 1:
        middle = (low + high) // 2
        if _utc_offset(middle, timezone) == offset:
            low = middle
        else:
            high = middle
    return high


def wall_clock_spans(start: datetime, end: datetime, timezone: str) -> List[Tuple[DateTime, DateTime]]:
    """
    Express ``[start, end)`` as naive wall-clock spans in ``timezone``.

    Aware intervals are cut at every UTC offset change of the zone and each
    piece is shifted by its own offset, so an interval crossing a fall-back
    transition covers both runs of the repeated hour, and one crossing a
    spring-forward transition skips the missing hour. Naive intervals are
    wall-clock time already and come back as a single span.
    """
    if start.tzinfo is None:
        return [(to_local(start, timezone), to_local(end, timezone))]

    utc_start = pendulum.instance(start).in_timezone("UTC")
    utc_end = pendulum.instance(end).in_timezone("UTC")
    end_stamp = utc_end.timestamp()

    spans: List[Tuple[DateTime, DateTime]] = []
    piece_start = utc_start
    offset = _utc_offset(utc_start.timestamp(), timezone)
    cursor = utc_start.timestamp()

    while cursor < end_stamp:
        step_end = min(cursor + _TRANSITION_SCAN_STEP.total_seconds(), end_stamp)
        if _utc_offset(step_end, timezone) == offset:
            cursor = step_end
            continue

        transition = _next_transition(cursor, step_end, offset, timezone)
        transition_at = pendulum.from_timestamp(transition, tz="UTC")
        spans.append((piece_start.naive() + offset, transition_at.naive() + offset))

        piece_start = transition_at
        offset = _utc_offset(transition, timezone)
        cursor = float(transition)

    if piece_start < utc_end:
        spans.append((piece_start.naive() + offset, utc_end.naive() + offset))

    return spans


@dataclass(frozen=True, order=True)
class Interval:
    """
    Represents an immutable half-open time interval ``[start, end)``.

    Invariant: start must be before end, and both bounds are either naive
    or timezone-aware.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise InvalidInterval(
                f"Cannot mix naive and timezone-aware bounds: {self.start}, {self.end}"
            )
        if self.start >= self.end:
            raise InvalidInterval(f"Start time {self.start} must be before end time {self.end}")

    def duration(self) -> timedelta:
        return self.end - self.start

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int(self.duration().total_seconds() / 60)

    def overlaps(self, other: "Interval") -> bool:
        """Check if this interval overlaps with another. Abutting intervals do not."""
        return self.start < other.end and self.end > other.start

    def contains(self, other: "Interval") -> bool:
        """Check if ``other`` lies within this interval, bounds included."""
        return self.start <= other.start and self.end >= other.end

    def in_timezone(self, timezone: str) -> Tuple[DateTime, DateTime]:
        """Return both bounds as naive wall-clock time in ``timezone``."""
        return to_local(self.start, timezone), to_local(self.end, timezone)

    def wall_clock_spans(self, timezone: str) -> List[Tuple[DateTime, DateTime]]:
        """Return the wall-clock spans this interval covers in ``timezone``."""
        return wall_clock_spans(self.start, self.end, timezone)

    def __str__(self) -> str:
        return f"{self.start:%d.%m.%Y %H:%M} - {self.end:%H:%M}"


@dataclass(frozen=True, order=True)
class Event(Interval):
    """
    A busy interval carrying a free-text description.

    The description identifies the event for humans only; it takes no part
    in equality, ordering or combination.
    """
    description: str = field(default="", compare=False)

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} ({self.description})" if self.description else base


@dataclass(frozen=True, order=True)
class WorkPeriod(Interval):
    """
    A candidate interval during which work may occur.

    Ordered by start, then by end.
    """
