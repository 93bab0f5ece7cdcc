"""
Application services for finding the time available for work.

The service coordinates fetching events via an event source adapter and
delegates the actual combination to the domain-level ``Calendar``. This keeps
the CLI thin and improves testability by allowing the event source to be
mocked via a simple protocol.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional, Protocol, Sequence

import pendulum
from pendulum import DateTime

from ..domain.calendar import Calendar
from ..domain.models import Event, WorkPeriod
from ..domain.work_periods import WeeklyPattern, generate_work_periods

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the event source behaviour needed by the service."""

    async def get_events(
        self,
        start_time: DateTime,
        end_time: DateTime,
        timezone: str,
    ) -> List[Event]:
        """Return the events between start_time and end_time."""


class AvailabilityService:
    """
    Orchestrates work-period generation, event retrieval and combination.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        pattern: Optional[WeeklyPattern] = None,
    ) -> None:
        self._event_source = event_source
        self._pattern = pattern or WeeklyPattern()

    async def find_available(
        self,
        *,
        start_date: date,
        working_days: int,
        timezone: str,
        extra_events: Iterable[Event] = (),
        merge_overlapping: bool = False,
    ) -> List[WorkPeriod]:
        """
        Generate work periods from the weekly pattern and find the time left in them.
        """
        work_periods = generate_work_periods(start_date, working_days, self._pattern)

        available = await self.find_available_in(
            work_periods=work_periods,
            timezone=timezone,
            extra_events=extra_events,
            merge_overlapping=merge_overlapping,
        )

        logger.info(
            "Found %d available period(s) in %d working day(s) from %s",
            len(available),
            working_days,
            start_date,
        )
        return available

    async def find_available_in(
        self,
        *,
        work_periods: Sequence[WorkPeriod],
        timezone: str,
        extra_events: Iterable[Event] = (),
        merge_overlapping: bool = False,
    ) -> List[WorkPeriod]:
        """
        Fetch the events covering the given work periods and cut them out.
        """
        events = await self.fetch_events(work_periods=work_periods, timezone=timezone)
        events.extend(extra_events)

        calendar = self.build_calendar(work_periods, events)
        return calendar.overwrite_periods_by_events(
            timezone,
            merge_overlapping=merge_overlapping,
        )

    async def fetch_events(
        self,
        *,
        work_periods: Sequence[WorkPeriod],
        timezone: str,
    ) -> List[Event]:
        """Fetch the events for the window spanned by the work periods."""
        if not work_periods:
            return []

        spans = [span for period in work_periods for span in period.wall_clock_spans(timezone)]
        first_day = min(start for start, _ in spans).date()
        last_day = max(end for _, end in spans).date() + timedelta(days=1)
        start_time = pendulum.datetime(first_day.year, first_day.month, first_day.day, tz=timezone)
        end_time = pendulum.datetime(last_day.year, last_day.month, last_day.day, tz=timezone)

        events = await self._event_source.get_events(
            start_time=start_time,
            end_time=end_time,
            timezone=timezone,
        )
        logger.debug("Event source returned %d event(s)", len(events))
        return list(events)

    @staticmethod
    def build_calendar(
        work_periods: Iterable[WorkPeriod],
        events: Iterable[Event],
    ) -> Calendar:
        """Put work periods and events into a fresh calendar."""
        calendar = Calendar()

        for work_period in work_periods:
            calendar.add_work_period(work_period)
        for event in events:
            calendar.add_event(event)

        return calendar
