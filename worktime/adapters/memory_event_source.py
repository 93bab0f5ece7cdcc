"""
Event source serving events held in memory, e.g. given on the command line.
"""

import logging
from datetime import datetime
from typing import Iterable, List

import pendulum
from pendulum import DateTime

from ..domain.models import Event

logger = logging.getLogger(__name__)


def _as_aware(value: datetime, timezone: str) -> DateTime:
    """Naive values are wall-clock time in ``timezone``."""
    if value.tzinfo is None:
        return pendulum.datetime(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond,
            tz=timezone,
        )
    return pendulum.instance(value)


class InMemoryEventSource:
    """
    Serves a fixed list of events, matching ``EventSourceProtocol``.

    Only events overlapping the requested window are returned; events that
    merely touch it are left out.
    """

    def __init__(self, events: Iterable[Event] = ()):
        self._events: List[Event] = list(events)

    async def get_events(
        self,
        start_time: DateTime,
        end_time: DateTime,
        timezone: str,
    ) -> List[Event]:
        window_start = _as_aware(start_time, timezone)
        window_end = _as_aware(end_time, timezone)

        matching = [
            event for event in self._events
            if _as_aware(event.start, timezone) < window_end
            and _as_aware(event.end, timezone) > window_start
        ]

        logger.debug(
            "Serving %d of %d event(s) between %s and %s",
            len(matching),
            len(self._events),
            window_start,
            window_end,
        )
        return matching
