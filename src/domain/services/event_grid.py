from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from src.domain.dates import format_mdy
from src.domain.models.medication_event import MedicationEvent, derive_datetime
from src.domain.services.range_resolver import bounded_for_days, list_days
from src.domain.value_objects.date_range import DateRange

NAME_HEADER = "name"


@dataclass(slots=True)
class ExportGrid:
    """Medicine x day matrix: one row per catalog medicine, one column per day."""

    headers: list[str]
    rows: list[list[str]]
    days: list[date] = field(default_factory=list)

    def as_matrix(self) -> list[list[str]]:
        return [list(self.headers), *[list(r) for r in self.rows]]


def _timed(
    events: Iterable[MedicationEvent], now: datetime | None
) -> list[tuple[MedicationEvent, datetime]]:
    return [(e, derive_datetime(e, now=now)) for e in events]


def events_in_range(
    events: Iterable[MedicationEvent],
    date_range: DateRange,
    *,
    now: datetime | None = None,
) -> list[MedicationEvent]:
    """Events whose derived instant lies within ``date_range`` (inclusive), in log order."""
    return [e for e, at in _timed(events, now) if date_range.contains(at)]


def build_export_grid(
    all_events: Iterable[MedicationEvent],
    date_range: DateRange,
    known_categories: Sequence[str],
    *,
    now: datetime | None = None,
) -> ExportGrid:
    now = now or datetime.now()
    timed = _timed(all_events, now)
    days = list_days(bounded_for_days(date_range, (at for _, at in timed), now))
    headers = [NAME_HEADER, *(format_mdy(d) for d in days)]

    buckets: dict[tuple[str, date], list[str]] = {}
    for event, at in timed:
        if not date_range.contains(at):
            continue
        buckets.setdefault((event.medicine, at.date()), []).append(
            f"{event.pet} - {event.vet}"
        )

    rows = [
        [medicine, *("\n".join(buckets.get((medicine, d), [])) for d in days)]
        for medicine in known_categories
    ]
    return ExportGrid(headers=headers, rows=rows, days=days)


def export_filename(days: Sequence[date], extension: str = "xlsx") -> str | None:
    if not days:
        return None
    return f"records_{format_mdy(days[0])}_to_{format_mdy(days[-1])}.{extension.lstrip('.')}"
