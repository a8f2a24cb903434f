from __future__ import annotations

from datetime import date

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.services.range_resolver import days_between_inclusive


def execute(
    uow: UnitOfWork, start_day: date | str | None, end_day: date | str | None
) -> int | None:
    """Remember the length of a custom range so it can be offered as "last N days"."""
    days = days_between_inclusive(start_day, end_day)
    if days <= 0:
        return None
    uow.preferences.set_last_custom_days(days)
    return days
