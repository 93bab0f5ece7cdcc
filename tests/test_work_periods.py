"""
Tests for default work period generation.
"""

from datetime import date, time

import pendulum
import pytest

from worktime.domain.models import WorkPeriod
from worktime.domain.work_periods import WeeklyPattern, WorkBlock, generate_work_periods


class TestWeeklyPattern:
    """Tests for WeeklyPattern model."""

    def test_is_working_day(self):
        """Test working day detection."""
        pattern = WeeklyPattern()

        assert pattern.is_working_day(date(2024, 11, 25))  # Monday
        assert not pattern.is_working_day(date(2024, 11, 23))  # Saturday
        assert not pattern.is_working_day(date(2024, 11, 24))  # Sunday

    def test_periods_for_date(self):
        """Test getting the work periods for a specific day."""
        pattern = WeeklyPattern(weekdays=(0,), blocks=(WorkBlock(time(13, 0), time(17, 0)), WorkBlock(time(9, 30), time(12, 0))))

        periods = pattern.periods_for_date(date(2024, 11, 25))

        assert periods == [
            WorkPeriod(start=pendulum.naive(2024, 11, 25, 9, 30), end=pendulum.naive(2024, 11, 25, 12)),
            WorkPeriod(start=pendulum.naive(2024, 11, 25, 13), end=pendulum.naive(2024, 11, 25, 17)),
        ]

    def test_periods_for_weekend(self):
        """Test getting work periods for weekend returns nothing."""
        assert WeeklyPattern().periods_for_date(date(2024, 11, 23)) == []

    def test_invalid_block_raises_error(self):
        with pytest.raises(ValueError, match="must be before"):
            WorkBlock(time(12, 0), time(9, 0))


class TestGenerateWorkPeriods:
    """Tests for generate_work_periods."""

    def test_skips_weekend(self):
        """Three working days from a Thursday are Thursday, Friday and Monday."""
        periods = generate_work_periods(date(2018, 5, 24), 3)

        assert len(periods) == 6
        weekdays = []
        for period in periods:
            if period.start.weekday() not in weekdays:
                weekdays.append(period.start.weekday())
        assert weekdays == [3, 4, 0]

    def test_periods_are_chronological(self):
        periods = generate_work_periods(date(2024, 11, 25), 5)

        assert periods == sorted(periods)
        assert periods[0] == WorkPeriod(start=pendulum.naive(2024, 11, 25, 9), end=pendulum.naive(2024, 11, 25, 12))
        assert periods[-1] == WorkPeriod(start=pendulum.naive(2024, 11, 29, 13), end=pendulum.naive(2024, 11, 29, 17))

    def test_periods_are_naive(self):
        periods = generate_work_periods(date(2024, 11, 25), 1)

        assert all(period.start.tzinfo is None for period in periods)

    def test_starting_on_weekend(self):
        periods = generate_work_periods(date(2024, 11, 23), 1)

        assert {period.start.date() for period in periods} == {date(2024, 11, 25)}

    def test_custom_pattern(self):
        pattern = WeeklyPattern(weekdays=(5, 6), blocks=(WorkBlock(time(10, 0), time(14, 0)),))

        periods = generate_work_periods(date(2024, 11, 25), 3, pattern)

        assert [period.start.date() for period in periods] == [
            date(2024, 11, 30),
            date(2024, 12, 1),
            date(2024, 12, 7),
        ]

    def test_zero_days(self):
        assert generate_work_periods(date(2024, 11, 25), 0) == []

    def test_pattern_without_working_days_raises_error(self):
        with pytest.raises(ValueError, match="at least one weekday"):
            generate_work_periods(date(2024, 11, 25), 1, WeeklyPattern(weekdays=()))

    def test_pattern_without_blocks_raises_error(self):
        with pytest.raises(ValueError):
            generate_work_periods(date(2024, 11, 25), 1, WeeklyPattern(blocks=()))
