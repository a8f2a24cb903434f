from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.medications.validate_submission import Submission, ensure_valid
from src.domain.dates import parse_input_value
from src.domain.models.medication_event import MedicationEvent, derive_datetime

logger = logging.getLogger(__name__)


@dataclass
class UpdateEventInput(Submission):
    event_id: str
    # yyyy-mm-ddThh:mm as typed in the edit field
    occurred_at_text: str | None = None


def execute(uow: UnitOfWork, payload: UpdateEventInput, *, now: datetime) -> MedicationEvent:
    """Replace an event's fields.

    The new instant comes from ``occurred_at_text``; when that does not parse
    the event keeps its current (derived) instant.
    """
    quantity = ensure_valid(payload)

    event = uow.events.get(payload.event_id)
    if not event:
        raise NotFound(f"Medication event {payload.event_id} not found")

    occurred_at = parse_input_value(payload.occurred_at_text) or derive_datetime(event, now=now)

    event.pet = payload.pet
    event.medicine = payload.medicine
    event.vet = payload.vet
    event.quantity = quantity
    event.retime(occurred_at)

    uow.events.update(event)
    uow.pets.remember(payload.pet.strip())

    logger.info("Medication event updated: id=%s", event.id)
    return event
