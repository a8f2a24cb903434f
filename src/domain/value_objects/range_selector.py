from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Union

from src.domain.dates import parse_day


class RangeMode(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    LAST_N = "lastN"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class Today:
    pass


@dataclass(frozen=True, slots=True)
class CurrentWeek:
    pass


@dataclass(frozen=True, slots=True)
class CurrentMonth:
    pass


@dataclass(frozen=True, slots=True)
class LastNDays:
    n: Any


@dataclass(frozen=True, slots=True)
class Custom:
    start: date | None = None
    end: date | None = None


RangeSelector = Union[Today, CurrentWeek, CurrentMonth, LastNDays, Custom]


def selector_for(
    mode: RangeMode | str,
    *,
    last_n: Any = None,
    start: date | str | None = None,
    end: date | str | None = None,
) -> RangeSelector:
    """Build a selector from the persisted mode name plus its parameters."""
    try:
        mode = RangeMode(mode)
    except ValueError:
        return Today()
    if mode is RangeMode.WEEK:
        return CurrentWeek()
    if mode is RangeMode.MONTH:
        return CurrentMonth()
    if mode is RangeMode.LAST_N:
        return LastNDays(last_n)
    if mode is RangeMode.CUSTOM:
        return Custom(parse_day(start), parse_day(end))
    return Today()
