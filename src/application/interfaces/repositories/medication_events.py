from __future__ import annotations

from typing import Protocol

from src.domain.models.medication_event import MedicationEvent


class MedicationEventsRepository(Protocol):
    def list(self) -> list[MedicationEvent]: ...

    def get(self, event_id: str) -> MedicationEvent | None: ...

    def add(self, event: MedicationEvent) -> MedicationEvent: ...

    def update(self, event: MedicationEvent) -> MedicationEvent: ...

    def delete(self, event_id: str) -> bool: ...
