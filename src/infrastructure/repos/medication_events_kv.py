from __future__ import annotations

import logging
from typing import Any

from src.application.interfaces.key_value_store import KeyValueStore
from src.domain.dates import parse_display
from src.domain.models.medication_event import LegacyText, MedicationEvent

logger = logging.getLogger(__name__)

RECORDS_KEY = "records"


class MedicationEventsKVRepository:
    """The event log, kept as one JSON array under ``records``.

    Every mutation reads the whole log, rebuilds it and writes it back.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _load(self) -> list[MedicationEvent]:
        raw = self.store.read(RECORDS_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Stored %s is not a list; ignoring it", RECORDS_KEY)
            return []
        events: list[MedicationEvent] = []
        undated: list[str] = []
        for idx, item in enumerate(raw):
            try:
                event = MedicationEvent.from_dict(item)
            except ValueError:
                logger.warning("Skipping malformed stored event at index %s", idx)
                continue
            source = event.timestamp
            if isinstance(source, LegacyText) and parse_display(source.text) is None:
                undated.append(event.id)
            events.append(event)
        if undated:
            logger.warning(
                "%d stored events have no usable date and are placed at the current time: %s",
                len(undated),
                ", ".join(undated),
            )
        return events

    def _save(self, events: list[MedicationEvent]) -> None:
        payload: list[dict[str, Any]] = [e.to_dict() for e in events]
        self.store.write(RECORDS_KEY, payload)

    def list(self) -> list[MedicationEvent]:
        return self._load()

    def get(self, event_id: str) -> MedicationEvent | None:
        return next((e for e in self._load() if e.id == event_id), None)

    def add(self, event: MedicationEvent) -> MedicationEvent:
        self._save([event, *self._load()])
        return event

    def update(self, event: MedicationEvent) -> MedicationEvent:
        events = self._load()
        for idx, current in enumerate(events):
            if current.id == event.id:
                events[idx] = event
                self._save(events)
                return event
        raise ValueError(f"MedicationEvent {event.id} not found")

    def delete(self, event_id: str) -> bool:
        events = self._load()
        kept = [e for e in events if e.id != event_id]
        if len(kept) == len(events):
            return False
        self._save(kept)
        return True
