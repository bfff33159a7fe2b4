"""
Working-day arithmetic.

A working day is any day that is not Saturday or Sunday. Holidays are not
modelled.
"""

from datetime import date, timedelta

ONE_DAY = timedelta(days=1)


def is_weekend(day: date) -> bool:
    """True for Saturday and Sunday."""
    return day.weekday() >= 5


def next_working_day(day: date) -> date:
    """Return `day` if it is a working day, otherwise the following Monday."""
    while is_weekend(day):
        day += ONE_DAY
    return day


def add_working_days(start: date, n: int) -> date:
    """
    Advance from `start` until `n` working days have been counted.

    Weekends are skipped and never counted:
        add_working_days(date(2024, 3, 1), 1)  # Friday -> Monday 2024-03-04
    """
    current = start
    remaining = n
    while remaining > 0:
        current += ONE_DAY
        if not is_weekend(current):
            remaining -= 1
    return current


def working_span_end(start: date, days: int) -> date:
    """
    Last day of a span of `days` working days beginning on `start`.

    The start counts as day 1 when it is a working day; a weekend start is
    rolled to the following Monday first.
    """
    first = next_working_day(start)
    return add_working_days(first, max(days, 1) - 1)


def working_days_between(start: date, end: date) -> list[date]:
    """Working days in the inclusive range [start, end]."""
    days = []
    current = start
    while current <= end:
        if not is_weekend(current):
            days.append(current)
        current += ONE_DAY
    return days
