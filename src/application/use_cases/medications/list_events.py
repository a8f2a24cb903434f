from __future__ import annotations

from datetime import datetime

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.medication_event import MedicationEvent
from src.domain.services.event_grid import events_in_range
from src.domain.value_objects.date_range import DateRange


def execute(
    uow: UnitOfWork, date_range: DateRange, *, now: datetime | None = None
) -> list[MedicationEvent]:
    return events_in_range(uow.events.list(), date_range, now=now)
