"""
Domain layer - Pure business logic without external dependencies.
"""

from .calendar import Calendar
from .exceptions import InvalidInterval, WorktimeError
from .models import Event, Interval, WorkPeriod
from .work_periods import WeeklyPattern, WorkBlock, generate_work_periods

__all__ = [
    "Calendar",
    "Event",
    "Interval",
    "InvalidInterval",
    "WeeklyPattern",
    "WorkBlock",
    "WorkPeriod",
    "WorktimeError",
    "generate_work_periods",
]
