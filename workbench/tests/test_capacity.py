"""
Tests for the capacity model (workbench.services.capacity).

Work items are plain records here: the capacity functions only read
id, total_hours, total_days, start_date and end_date.
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from workbench.protocols.roster import RosterEntry
from workbench.services import capacity

FRIDAY = date(2024, 3, 1)
SATURDAY = date(2024, 3, 2)
MONDAY = date(2024, 3, 4)
TUESDAY = date(2024, 3, 5)
WEDNESDAY = date(2024, 3, 6)


def make_item(id, total_hours=None, total_days=None, start_date=None, end_date=None):
    return SimpleNamespace(
        id=id,
        total_hours=total_hours,
        total_days=total_days,
        start_date=start_date,
        end_date=end_date,
    )


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def roster():
    return [
        RosterEntry(active=True, weekly_hours=40, role="operator", name="Ana"),
        RosterEntry(active=True, weekly_hours=Decimal("32.5"), role="operator", name="Bruno"),
        RosterEntry(active=True, weekly_hours=40, role="shop_supervisor", name="Carla"),
        RosterEntry(active=True, weekly_hours=40, role="admin", name="Dora"),
        RosterEntry(active=False, weekly_hours=40, role="operator", name="Eloy"),
    ]


# ═══════════════════════════════════════════════════════════════════
# daily_capacity
# ═══════════════════════════════════════════════════════════════════


class TestDailyCapacity:
    def test_empty_roster_uses_fallback(self):
        result = capacity.daily_capacity([])

        assert result.employee_count == 3
        assert result.daily_hours == 24
        assert result.fallback is True

    def test_missing_roster_uses_fallback(self):
        result = capacity.daily_capacity(None)

        assert (result.employee_count, result.daily_hours) == (3, 24)
        assert result.fallback is True

    def test_only_active_shop_floor_roles_count(self, roster):
        result = capacity.daily_capacity(roster)

        assert result.employee_count == 3
        assert result.fallback is False

    def test_half_hours_round_up(self, roster):
        """32.5 h / 5 = 6.5 h rounds to 7, not to the even 6."""
        result = capacity.daily_capacity(roster)

        assert result.daily_hours == 8 + 7 + 8

    def test_missing_weekly_hours_default_to_forty(self):
        roster = [RosterEntry(active=True, weekly_hours=None, role="operator")]

        assert capacity.daily_capacity(roster).daily_hours == 8

    def test_roster_without_shop_floor_uses_fallback(self):
        roster = [RosterEntry(active=True, weekly_hours=40, role="manager")]

        assert capacity.daily_capacity(roster).fallback is True

    def test_custom_shop_floor_roles(self, roster):
        result = capacity.daily_capacity(roster, shop_floor_roles=["admin"])

        assert result.employee_count == 1
        assert result.daily_hours == 8

    def test_fallback_is_configurable(self, settings):
        settings.WORKBENCH = {"FALLBACK_EMPLOYEE_COUNT": 5, "FALLBACK_DAILY_HOURS": 40}

        result = capacity.daily_capacity([])

        assert (result.employee_count, result.daily_hours) == (5, 40)


class TestRosterCapacity:
    def test_backend_roster_is_used(self, roster):
        backend = MagicMock()
        backend.get_roster.return_value = roster

        with patch("workbench.services.capacity.get_roster_backend", return_value=backend):
            result = capacity.roster_capacity()

        assert result.employee_count == 3

    def test_backend_failure_uses_fallback(self):
        backend = MagicMock()
        backend.get_roster.side_effect = ConnectionError("HR service down")

        with patch("workbench.services.capacity.get_roster_backend", return_value=backend):
            result = capacity.roster_capacity()

        assert result.fallback is True
        assert result.daily_hours == 24

    def test_model_backend_reads_employees(self, db):
        from workbench.conf import reset_backends
        from workbench.models import Employee

        reset_backends()
        Employee.objects.create(name="Ana", role="operator", weekly_hours=Decimal("40"))
        Employee.objects.create(name="Bruno", role="operator", weekly_hours=Decimal("20"))
        Employee.objects.create(name="Dora", role="manager")

        result = capacity.roster_capacity()

        assert result.employee_count == 2
        assert result.daily_hours == 12


# ═══════════════════════════════════════════════════════════════════
# daily_load / needed_days
# ═══════════════════════════════════════════════════════════════════


class TestDailyLoad:
    def test_hours_spread_over_working_days(self):
        item = make_item(1, total_hours=Decimal("16"), start_date=MONDAY, end_date=TUESDAY)

        load = capacity.daily_load([MONDAY, TUESDAY, WEDNESDAY], [item])

        assert load == {MONDAY: 8.0, TUESDAY: 8.0, WEDNESDAY: 0.0}

    def test_weekend_days_carry_no_load(self):
        item = make_item(1, total_hours=16, start_date=FRIDAY, end_date=MONDAY)

        load = capacity.daily_load([FRIDAY, MONDAY], [item])

        assert load == {FRIDAY: 8.0, MONDAY: 8.0}

    def test_excluded_item_is_ignored(self):
        item = make_item(1, total_hours=16, start_date=MONDAY, end_date=TUESDAY)

        load = capacity.daily_load([MONDAY], [item], exclude_id=1)

        assert load == {MONDAY: 0.0}

    def test_items_without_dates_or_hours_are_ignored(self):
        items = [
            make_item(1, total_hours=16),
            make_item(2, total_hours=None, start_date=MONDAY, end_date=TUESDAY),
        ]

        assert capacity.daily_load([MONDAY], items) == {MONDAY: 0.0}


class TestNeededDays:
    @pytest.mark.parametrize(
        "total_hours,total_days,expected",
        [
            (None, 3, 3),
            (Decimal("20"), None, 3),
            (Decimal("16"), None, 2),
            (None, None, 0),
            (Decimal("0"), None, 0),
            (Decimal("40"), 2, 2),
        ],
    )
    def test_needed_days(self, total_hours, total_days, expected):
        item = make_item(1, total_hours=total_hours, total_days=total_days)

        assert capacity.needed_days(item) == expected


# ═══════════════════════════════════════════════════════════════════
# build_capacity_window
# ═══════════════════════════════════════════════════════════════════


class TestCapacityWindow:
    def test_window_with_partial_load(self):
        item = make_item(10, total_hours=16, total_days=2)
        scheduled = [make_item(1, total_hours=24, start_date=MONDAY, end_date=WEDNESDAY)]

        window = capacity.build_capacity_window(FRIDAY, item, scheduled, 24, 3)

        assert window.start_date == FRIDAY
        assert window.end_date == MONDAY
        assert window.working_days == 2
        assert [day.committed_hours for day in window.days] == [0.0, 8.0]
        assert [day.utilization_pct for day in window.days] == [33, 67]
        assert window.peak_utilization == 67
        assert window.avg_utilization == 50
        assert window.can_fit is True
        assert window.has_capacity is True

    def test_overload_is_capped_at_hundred(self):
        item = make_item(10, total_hours=8, total_days=1)
        scheduled = [make_item(1, total_hours=100, start_date=MONDAY, end_date=MONDAY)]

        window = capacity.build_capacity_window(MONDAY, item, scheduled, 24, 3)

        assert window.peak_utilization == 100
        assert window.days[0].free_hours == 0.0
        assert window.can_fit is False
        assert window.has_capacity is False

    def test_weekend_start_begins_on_monday(self):
        item = make_item(10, total_hours=8, total_days=1)

        window = capacity.build_capacity_window(SATURDAY, item, [], 24, 3)

        assert window.start_date == MONDAY
        assert window.end_date == MONDAY

    def test_item_itself_is_not_counted_as_load(self):
        item = make_item(10, total_hours=8, total_days=1, start_date=MONDAY, end_date=MONDAY)

        window = capacity.build_capacity_window(MONDAY, item, [item], 24, 3)

        assert window.days[0].committed_hours == 0.0

    def test_zero_capacity_reports_full_utilization(self):
        item = make_item(10, total_hours=8, total_days=1)

        window = capacity.build_capacity_window(MONDAY, item, [], 0, 0)

        assert window.peak_utilization == 100
        assert window.can_fit is False

    def test_utilization_never_exceeds_hundred(self):
        item = make_item(10, total_hours=80, total_days=3)
        scheduled = [
            make_item(n, total_hours=60, start_date=MONDAY, end_date=WEDNESDAY)
            for n in range(1, 5)
        ]

        window = capacity.build_capacity_window(MONDAY, item, scheduled, 24, 3)

        assert all(0 <= day.utilization_pct <= 100 for day in window.days)
        assert window.as_dict()["days"][0]["date"] == "2024-03-04"
