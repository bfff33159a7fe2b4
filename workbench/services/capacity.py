"""
Capacity model.

Compares the labor hours the shop floor can deliver per day with the hours
already committed by scheduled work, one working day at a time.

Work items are read duck-typed: anything with id, total_hours, total_days,
start_date and end_date works (WorkItem instances, or plain records from
another store).
"""

import logging
import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from workbench.conf import get_roster_backend, get_setting
from workbench.protocols.roster import RosterEntry
from workbench.results import CapacityDay, CapacityWindow, DailyCapacity
from workbench.workdays import ONE_DAY, is_weekend, working_days_between

logger = logging.getLogger(__name__)

WORKING_DAYS_PER_WEEK = 5
HOURS_PER_DAY = 8


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def fallback_capacity() -> DailyCapacity:
    """Degraded-mode capacity used when no roster is available."""
    return DailyCapacity(
        employee_count=get_setting("FALLBACK_EMPLOYEE_COUNT"),
        daily_hours=get_setting("FALLBACK_DAILY_HOURS"),
        fallback=True,
    )


def daily_capacity(
    roster: Iterable[RosterEntry] | None,
    shop_floor_roles: Iterable[str] | None = None,
) -> DailyCapacity:
    """
    Total labor hours available per working day.

    Only active entries with a shop-floor role count; each contributes
    round(weekly_hours / 5). An empty result, or roster=None (lookup
    failed), yields the configured fallback (3 workers, 24 h by default).
    """
    if roster is None:
        logger.warning("Roster unavailable, using fallback capacity")
        return fallback_capacity()

    roles = set(shop_floor_roles or get_setting("SHOP_FLOOR_ROLES"))
    default_weekly = get_setting("DEFAULT_WEEKLY_HOURS")

    workers = [entry for entry in roster if entry.active and entry.role in roles]
    if not workers:
        logger.warning(
            "No active shop-floor employees in roster, using fallback capacity",
            extra={"roles": sorted(roles)},
        )
        return fallback_capacity()

    hours = sum(
        round_half_up(float(entry.weekly_hours or default_weekly) / WORKING_DAYS_PER_WEEK)
        for entry in workers
    )
    return DailyCapacity(employee_count=len(workers), daily_hours=hours)


def roster_capacity() -> DailyCapacity:
    """Daily capacity from the configured roster backend."""
    try:
        roster = get_roster_backend().get_roster()
    except Exception:
        logger.exception("Roster backend failed, using fallback capacity")
        roster = None
    return daily_capacity(roster)


def _item_hours(item) -> float:
    return float(item.total_hours or 0)


def daily_load(
    days: Iterable[date],
    scheduled_items: Iterable,
    exclude_id=None,
) -> dict[date, float]:
    """
    Hours already committed on each of `days`.

    Every scheduled item spreads its total hours evenly over its own working
    days; the share falling on a requested day is added to that day's bucket.
    Items without dates, hours or working days contribute nothing.
    """
    load = {day: 0.0 for day in days}
    if not load:
        return load

    first, last = min(load), max(load)

    for item in scheduled_items:
        if exclude_id is not None and item.id == exclude_id:
            continue
        if not item.start_date or not item.end_date or not _item_hours(item):
            continue
        if item.end_date < first or item.start_date > last:
            continue

        item_days = working_days_between(item.start_date, item.end_date)
        if not item_days:
            continue

        hours_per_day = _item_hours(item) / len(item_days)
        for day in item_days:
            if day in load:
                load[day] += hours_per_day

    return load


def needed_days(item) -> int:
    """
    Working days an item occupies: explicit days, else ceil(hours / 8).

    0 when neither is known. WorkItem.duration_days reads this too.
    """
    if item.total_days:
        return int(item.total_days)
    if not item.total_hours:
        return 0
    return math.ceil(float(item.total_hours) / HOURS_PER_DAY)


def _utilization(projected: float, total: float) -> int:
    if total <= 0:
        return 100 if projected > 0 else 0
    return min(100, round_half_up(projected / total * 100))


def build_capacity_window(
    start_date: date,
    item,
    scheduled_items: Iterable,
    daily_hours: float,
    employee_count: int,
) -> CapacityWindow:
    """
    Per-day utilization if `item` started on `start_date`.

    Walks forward from start_date collecting working days (weekends are
    skipped, never counted) until the item's duration is covered.
    """
    span_length = max(needed_days(item), 1)

    span: list[date] = []
    cursor = start_date
    while len(span) < span_length:
        if not is_weekend(cursor):
            span.append(cursor)
        cursor += ONE_DAY

    item_hours_per_day = _item_hours(item) / len(span)
    load = daily_load(span, list(scheduled_items), exclude_id=item.id)

    days = []
    for day in span:
        committed = load.get(day, 0.0)
        projected = committed + item_hours_per_day
        days.append(
            CapacityDay(
                date=day,
                total_hours=daily_hours,
                committed_hours=committed,
                projected_hours=projected,
                free_hours=max(0.0, daily_hours - committed),
                utilization_pct=_utilization(projected, daily_hours),
            )
        )

    utilizations = [day.utilization_pct for day in days]

    return CapacityWindow(
        start_date=span[0],
        end_date=span[-1],
        working_days=len(span),
        daily_capacity=daily_hours,
        employee_count=employee_count,
        peak_utilization=max(utilizations),
        avg_utilization=round_half_up(sum(utilizations) / len(utilizations)),
        can_fit=all(day.free_hours >= item_hours_per_day for day in days),
        has_capacity=all(day.free_hours > 0 for day in days),
        days=days,
    )
