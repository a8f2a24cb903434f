from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Any

from src.domain.dates import end_of_day, parse_day, start_of_day
from src.domain.value_objects.date_range import RANGE_CEILING, RANGE_FLOOR, DateRange
from src.domain.value_objects.range_selector import (
    CurrentMonth,
    CurrentWeek,
    Custom,
    LastNDays,
    RangeSelector,
    Today,
)


def today_range(now: datetime) -> DateRange:
    return DateRange(start_of_day(now), end_of_day(now))


def week_range(now: datetime) -> DateRange:
    """Monday 00:00 through Friday 23:59:59.999 of the week containing ``now``."""
    weekday = now.isoweekday() % 7  # Sun=0, Mon=1 .. Sat=6
    diff_to_monday = -6 if weekday == 0 else 1 - weekday
    monday = now.date() + timedelta(days=diff_to_monday)
    friday = monday + timedelta(days=4)
    return DateRange(start_of_day(monday), end_of_day(friday))


def month_range(now: datetime) -> DateRange:
    first = now.date().replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    last = next_first - timedelta(days=1)
    return DateRange(start_of_day(first), end_of_day(last))


def _positive_count(n: Any) -> int | None:
    if isinstance(n, bool):
        return None
    try:
        value = float(n)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 1:
        return None
    return int(value)


def last_n_days_range(now: datetime, n: Any) -> DateRange:
    count = _positive_count(n)
    if count is None:
        return today_range(now)
    first = now.date() - timedelta(days=count - 1)
    return DateRange(start_of_day(first), end_of_day(now))


def custom_range(now: datetime, start: date | None, end: date | None) -> DateRange:
    if start is None and end is None:
        return today_range(now)
    if start is None:
        floor = min(RANGE_FLOOR, start_of_day(end))
        return DateRange(floor, end_of_day(end), open_start=True)
    if end is None:
        return DateRange(start_of_day(start), RANGE_CEILING, open_end=True)
    earlier, later = (start, end) if start <= end else (end, start)
    return DateRange(start_of_day(earlier), end_of_day(later))


def resolve(selector: RangeSelector, now: datetime) -> DateRange:
    """Concrete ``[start, end]`` window for ``selector`` evaluated at ``now``."""
    if isinstance(selector, CurrentWeek):
        return week_range(now)
    if isinstance(selector, CurrentMonth):
        return month_range(now)
    if isinstance(selector, LastNDays):
        return last_n_days_range(now, selector.n)
    if isinstance(selector, Custom):
        return custom_range(now, parse_day(selector.start), parse_day(selector.end))
    if isinstance(selector, Today):
        return today_range(now)
    raise TypeError(f"Unknown range selector: {selector!r}")


def list_days(date_range: DateRange) -> list[date]:
    """Every local calendar day touched by ``date_range``, in order."""
    days: list[date] = []
    current = date_range.start.date()
    last = date_range.end.date()
    while current <= last:
        days.append(current)
        if current == date.max:
            break
        current += timedelta(days=1)
    return days


def days_between_inclusive(
    start_day: date | str | None, end_day: date | str | None
) -> int:
    """Calendar days from one day to another, counting both ends.

    Argument order does not matter. With a single day given the count is 1;
    with neither it is 0.
    """
    first = parse_day(start_day)
    second = parse_day(end_day)
    if first is None and second is None:
        return 0
    first = first or second
    second = second or first
    return abs((second - first).days) + 1


def bounded_for_days(
    date_range: DateRange, instants: Iterable[datetime], now: datetime
) -> DateRange:
    """Narrow the open side(s) of ``date_range`` so its days can be listed.

    An open side is pulled in to the earliest/latest instant that falls in the
    range, or to ``now`` when none does. Closed ranges come back unchanged.
    """
    if not (date_range.open_start or date_range.open_end):
        return date_range

    inside = [t for t in instants if date_range.contains(t)]
    low = min(inside) if inside else min(now, date_range.end)
    high = max(inside) if inside else max(now, date_range.start)

    start = date_range.start
    end = date_range.end
    if date_range.open_start:
        start = max(start, start_of_day(low))
    if date_range.open_end:
        end = min(end, end_of_day(high))
    return DateRange(start, end)
