from __future__ import annotations

import re
from datetime import date, datetime, time

# Calendar days are local; instants are naive local datetimes in memory and
# epoch milliseconds at the storage boundary.
END_OF_DAY = time(23, 59, 59, 999000)


def start_of_day(value: datetime | date) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min)


def end_of_day(value: datetime | date) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, END_OF_DAY)


def to_epoch_ms(value: datetime) -> int:
    return int(round(value.timestamp() * 1000))


def from_epoch_ms(ms: int | float) -> datetime:
    return datetime.fromtimestamp(ms / 1000)


def _pad2(n: int) -> str:
    return f"{n:02d}"


def format_display(value: datetime) -> str:
    """Human readable ``dd/mm/yyyy hh:mm`` stored next to the timestamp."""
    return (
        f"{_pad2(value.day)}/{_pad2(value.month)}/{value.year} "
        f"{_pad2(value.hour)}:{_pad2(value.minute)}"
    )


def format_dmy(day: date) -> str:
    return f"{_pad2(day.day)}/{_pad2(day.month)}/{day.year}"


def format_mdy(day: date) -> str:
    """Export column label, ``MM-DD-YY``."""
    return f"{_pad2(day.month)}-{_pad2(day.day)}-{str(day.year)[-2:]}"


def iso_day_key(day: date) -> str:
    return day.isoformat()


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(text: str | None) -> int | None:
    """Leading integer of ``text`` (``"09h"`` is 9); None when there is none."""
    if text is None:
        return None
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_display(text: str | None) -> datetime | None:
    """Parse the legacy ``dd/mm/yyyy[ hh:mm]`` rendering.

    Missing or non-numeric day/month default to 1 and a missing time to 00:00.
    Returns None when the text is empty or the result is not a real date.
    """
    if not text or not isinstance(text, str):
        return None
    parts = text.strip().split(" ")
    date_part = parts[0]
    time_part = parts[1] if len(parts) > 1 else ""
    if not date_part:
        return None

    fields = date_part.split("/")
    dd = _to_int(fields[0]) if len(fields) > 0 else None
    mm = _to_int(fields[1]) if len(fields) > 1 else None
    yyyy = _to_int(fields[2]) if len(fields) > 2 else None
    if yyyy is None:
        return None

    hh = mi = 0
    if time_part:
        clock = time_part.split(":")
        hh = _to_int(clock[0]) or 0
        mi = (_to_int(clock[1]) if len(clock) > 1 else None) or 0

    try:
        return datetime(yyyy, mm or 1, dd or 1, hh, mi)
    except ValueError:
        return None


def to_input_value(value: datetime) -> str:
    """Render for a ``datetime-local`` style edit field (``yyyy-mm-ddThh:mm``)."""
    return value.strftime("%Y-%m-%dT%H:%M")


def parse_input_value(text: str | None) -> datetime | None:
    if not text:
        return None
    for fmt in ("%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"):
        try:
            return datetime.strptime(text.strip(), fmt)
        except ValueError:
            continue
    return None


def parse_day(value: date | str | None) -> date | None:
    """Accept a ``date`` or ``yyyy-mm-dd`` text; blank or invalid text is None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return None
