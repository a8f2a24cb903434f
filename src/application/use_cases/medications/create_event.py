from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.medications.validate_submission import Submission, ensure_valid
from src.domain.models.medication_event import MedicationEvent

logger = logging.getLogger(__name__)


@dataclass
class CreateEventInput(Submission):
    pass


def execute(uow: UnitOfWork, payload: CreateEventInput, *, now: datetime) -> MedicationEvent:
    """Record a new dosing event at ``now`` and remember the pet name."""
    quantity = ensure_valid(payload)

    event = MedicationEvent.create(
        pet=payload.pet,
        medicine=payload.medicine,
        vet=payload.vet,
        quantity=quantity,
        now=now,
    )
    uow.events.add(event)
    uow.pets.remember(payload.pet.strip())

    logger.info("Medication event created: id=%s medicine=%s", event.id, event.medicine)
    return event
