from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.medication_events import (
    MedicationEventsRepository,
)
from src.application.interfaces.repositories.pets import PetNamesRepository
from src.application.interfaces.repositories.preferences import PreferencesRepository
from src.application.interfaces.repositories.vets import VetRosterRepository


class UnitOfWork(Protocol):
    events: MedicationEventsRepository
    pets: PetNamesRepository
    vets: VetRosterRepository
    preferences: PreferencesRepository
