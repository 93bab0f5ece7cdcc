"""
Generation of default work periods from a weekly pattern.
"""

from dataclasses import dataclass, field
from datetime import date, time, timedelta
from typing import List, Optional, Tuple

import pendulum

from .models import WorkPeriod


@dataclass(frozen=True)
class WorkBlock:
    """
    A daily range of working hours, e.g. 09:00 - 12:00.
    """
    start: time
    end: time

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Block start {self.start} must be before block end {self.end}")

    def on(self, day: date) -> WorkPeriod:
        """Place this block on a specific day as a naive work period."""
        return WorkPeriod(
            start=pendulum.naive(day.year, day.month, day.day, self.start.hour, self.start.minute),
            end=pendulum.naive(day.year, day.month, day.day, self.end.hour, self.end.minute),
        )


def _default_blocks() -> Tuple[WorkBlock, ...]:
    return (WorkBlock(time(9, 0), time(12, 0)), WorkBlock(time(13, 0), time(17, 0)))


@dataclass(frozen=True)
class WeeklyPattern:
    """
    Configuration for the recurring working week.
    """
    weekdays: Tuple[int, ...] = (0, 1, 2, 3, 4)  # 0=Monday, 6=Sunday
    blocks: Tuple[WorkBlock, ...] = field(default_factory=_default_blocks)

    def is_working_day(self, day: date) -> bool:
        """Check if a given date falls on a working day."""
        return day.weekday() in self.weekdays

    def periods_for_date(self, day: date) -> List[WorkPeriod]:
        """
        Get the work periods for a specific day.
        Returns an empty list if it's not a working day.
        """
        if not self.is_working_day(day):
            return []

        return sorted(block.on(day) for block in self.blocks)


def generate_work_periods(
    start_date: date,
    working_days: int,
    pattern: Optional[WeeklyPattern] = None
) -> List[WorkPeriod]:
    """
    Generate the default work periods for a number of working days.

    Walks the calendar day by day from ``start_date`` (inclusive), skipping
    days the pattern does not work on, until ``working_days`` working days
    have been collected.

    Args:
        start_date: First day to consider
        working_days: Number of working days to generate periods for
        pattern: Weekly pattern; defaults to Monday-Friday, 09-12 and 13-17

    Returns:
        List of WorkPeriod objects in chronological order

    Raises:
        ValueError: If the pattern can never produce a work period
    """
    pattern = pattern or WeeklyPattern()

    if working_days <= 0:
        return []

    if not pattern.blocks or not any(day in range(7) for day in pattern.weekdays):
        raise ValueError("Weekly pattern needs at least one weekday and one block")

    periods: List[WorkPeriod] = []
    current = start_date
    remaining = working_days

    while remaining > 0:
        if pattern.is_working_day(current):
            periods.extend(pattern.periods_for_date(current))
            remaining -= 1
        current += timedelta(days=1)

    return periods
