"""
Tests for working-day arithmetic (workbench.workdays).
"""

from datetime import date, timedelta

import pytest

from workbench.workdays import (
    add_working_days,
    is_weekend,
    next_working_day,
    working_days_between,
    working_span_end,
)

FRIDAY = date(2024, 3, 1)
SATURDAY = date(2024, 3, 2)
SUNDAY = date(2024, 3, 3)
MONDAY = date(2024, 3, 4)


# ═══════════════════════════════════════════════════════════════════
# is_weekend / next_working_day
# ═══════════════════════════════════════════════════════════════════


class TestWeekend:
    def test_saturday_and_sunday_are_weekend(self):
        assert is_weekend(SATURDAY)
        assert is_weekend(SUNDAY)

    def test_weekdays_are_not_weekend(self):
        for offset in range(5):
            assert not is_weekend(MONDAY + timedelta(days=offset))

    @pytest.mark.parametrize("day", [SATURDAY, SUNDAY])
    def test_weekend_rolls_to_monday(self, day):
        assert next_working_day(day) == MONDAY

    def test_working_day_is_kept(self):
        assert next_working_day(FRIDAY) == FRIDAY


# ═══════════════════════════════════════════════════════════════════
# add_working_days
# ═══════════════════════════════════════════════════════════════════


class TestAddWorkingDays:
    def test_friday_plus_one_is_monday(self):
        """The weekend is skipped entirely, not counted."""
        assert add_working_days(FRIDAY, 1) == MONDAY

    def test_monday_plus_four_is_friday(self):
        assert add_working_days(MONDAY, 4) == date(2024, 3, 8)

    def test_crosses_weekend(self):
        assert add_working_days(date(2024, 3, 6), 5) == date(2024, 3, 13)

    def test_zero_returns_start(self):
        assert add_working_days(FRIDAY, 0) == FRIDAY

    def test_weekend_start_first_step_is_monday(self):
        assert add_working_days(SATURDAY, 1) == MONDAY

    def test_result_never_on_weekend(self):
        start = date(2024, 1, 1)
        for offset in range(14):
            for n in range(1, 12):
                assert not is_weekend(add_working_days(start + timedelta(days=offset), n))


# ═══════════════════════════════════════════════════════════════════
# working_span_end / working_days_between
# ═══════════════════════════════════════════════════════════════════


class TestSpans:
    def test_five_day_span_is_monday_to_friday(self):
        assert working_span_end(MONDAY, 5) == date(2024, 3, 8)

    def test_one_day_span_ends_on_start(self):
        assert working_span_end(MONDAY, 1) == MONDAY

    def test_span_from_friday_crosses_weekend(self):
        assert working_span_end(FRIDAY, 2) == MONDAY

    def test_weekend_start_rolls_forward(self):
        assert working_span_end(SATURDAY, 1) == MONDAY

    def test_days_between_is_inclusive_and_skips_weekend(self):
        days = working_days_between(FRIDAY, MONDAY)

        assert days == [FRIDAY, MONDAY]

    def test_days_between_empty_for_weekend_only_range(self):
        assert working_days_between(SATURDAY, SUNDAY) == []

    def test_span_length_matches_days_between(self):
        for days in range(1, 15):
            end = working_span_end(MONDAY, days)
            assert len(working_days_between(MONDAY, end)) == days
