"""
Core business logic for overwriting work periods by events.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import logging
from threading import RLock
from typing import Iterable, List, Set, Tuple

from pendulum import DateTime

from .models import Event, WorkPeriod

logger = logging.getLogger(__name__)

_Span = Tuple[DateTime, DateTime]


class Calendar:
    """
    Holds work periods and events, and computes the time still available
    for work once every event has been cut out of the work periods.

    Algorithm (``overwrite_periods_by_events``):
    1. Snapshot both collections
    2. Cut every interval into wall-clock spans of the target timezone
    3. For each work period, subtract all events overlapping it
    4. Drop empty pieces and duplicates
    5. Return the pieces sorted by start, then end
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._events: List[Event] = []
        self._work_periods: List[WorkPeriod] = []

    @property
    def events(self) -> Tuple[Event, ...]:
        with self._lock:
            return tuple(self._events)

    @property
    def work_periods(self) -> Tuple[WorkPeriod, ...]:
        with self._lock:
            return tuple(self._work_periods)

    def add_event(self, event: Event) -> None:
        with self._lock:
            self._events.append(event)

    def add_work_period(self, work_period: WorkPeriod) -> None:
        with self._lock:
            self._work_periods.append(work_period)

    def overwrite_periods_by_events(
        self,
        timezone: str,
        *,
        merge_overlapping: bool = False
    ) -> List[WorkPeriod]:
        """
        Compute the parts of the work periods not covered by any event.

        Args:
            timezone: Zone whose wall-clock time the result is expressed in.
                Aware bounds are converted into it; naive bounds are taken
                to be wall-clock time in it already.
            merge_overlapping: Merge results that overlap each other, which
                only happens when the stored work periods overlap.

        Returns:
            Sorted list of unique WorkPeriod objects with naive bounds
        """
        with self._lock:
            work_periods = list(self._work_periods)
            events = list(self._events)

        busy_spans = self._localize_events(events, timezone)

        free: Set[WorkPeriod] = set()
        for work_period in work_periods:
            for period in work_period.wall_clock_spans(timezone):
                free.update(self._subtract_busy_from_period(period, busy_spans))

        result = sorted(free)
        if merge_overlapping:
            result = self._merge_overlapping_periods(result)

        logger.debug(
            "Combined %d work period(s) with %d event(s) into %d period(s)",
            len(work_periods),
            len(events),
            len(result),
        )
        return result

    @staticmethod
    def _localize_events(events: Iterable[Event], timezone: str) -> List[_Span]:
        """
        Convert events to wall-clock spans sorted by start time.

        An event crossing a DST transition yields one span per UTC offset.
        """
        spans: List[_Span] = []

        for event in events:
            spans.extend(event.wall_clock_spans(timezone))

        spans.sort()
        return spans

    @staticmethod
    def _subtract_busy_from_period(
        period: _Span,
        busy_spans: List[_Span]
    ) -> List[WorkPeriod]:
        """
        Subtract busy spans from a work period, yielding the free pieces.

        ``busy_spans`` must be sorted by start time.

        Example:
        Work period: 09:00 - 17:00
        Busy: [08:00-10:00, 11:00-12:00, 11:30-14:00, 17:00-18:00]
        Result: [10:00-11:00, 14:00-17:00]
        """
        period_start, period_end = period
        free_ranges: List[WorkPeriod] = []
        current_start = period_start

        for busy_start, busy_end in busy_spans:
            if busy_start >= period_end:
                break
            # Abutting or earlier spans do not cut the period
            if busy_end <= current_start:
                continue

            if current_start < busy_start:
                free_ranges.append(WorkPeriod(start=current_start, end=busy_start))

            current_start = busy_end
            if current_start >= period_end:
                return free_ranges

        free_ranges.append(WorkPeriod(start=current_start, end=period_end))
        return free_ranges

    @staticmethod
    def _merge_overlapping_periods(periods: List[WorkPeriod]) -> List[WorkPeriod]:
        """
        Merge overlapping work periods; abutting ones stay separate.

        ``periods`` must be sorted.

        Example: [09:00-11:00, 10:00-12:00, 12:00-13:00] -> [09:00-12:00, 12:00-13:00]
        """
        if not periods:
            return []

        merged: List[WorkPeriod] = [periods[0]]

        for current in periods[1:]:
            last = merged[-1]

            if current.start < last.end:
                merged[-1] = WorkPeriod(start=last.start, end=max(last.end, current.end))
            else:
                merged.append(current)

        return merged
