from __future__ import annotations

from datetime import date, datetime
from types import SimpleNamespace

import pytest

from conftest import StubWriter, make_event
from src.application.errors import ExportError, NotFound, ValidationError
from src.application.use_cases.medications import (
    create_event,
    delete_event,
    export_events,
    list_events,
    search_catalog,
    update_event,
)
from src.application.use_cases.medications.validate_submission import can_submit, parse_quantity
from src.application.use_cases.ranges import apply_custom_range
from src.domain.dates import to_epoch_ms
from src.domain.models.medication_event import Authoritative, MedicationEvent
from src.domain.services.range_resolver import resolve
from src.domain.value_objects.range_selector import Custom, Today


class StubEventsRepo:
    def __init__(self, events: list[MedicationEvent] | None = None) -> None:
        self.events = list(events or [])
        self.updated: list[MedicationEvent] = []

    def list(self):
        return list(self.events)

    def get(self, event_id):
        return next((e for e in self.events if e.id == event_id), None)

    def add(self, event):
        self.events.insert(0, event)
        return event

    def update(self, event):
        self.updated.append(event)
        return event

    def delete(self, event_id):
        before = len(self.events)
        self.events = [e for e in self.events if e.id != event_id]
        return len(self.events) != before


class StubPetsRepo:
    def __init__(self) -> None:
        self.remembered: list[str] = []

    def list(self):
        return list(self.remembered)

    def remember(self, name):
        self.remembered.append(name)
        return self.remembered


class StubPreferences:
    def __init__(self) -> None:
        self.days = None

    def get_last_custom_days(self):
        return self.days

    def set_last_custom_days(self, days):
        self.days = days


def make_uow(events: list[MedicationEvent] | None = None):
    return SimpleNamespace(
        events=StubEventsRepo(events),
        pets=StubPetsRepo(),
        vets=SimpleNamespace(list=lambda: ["Isadora", "Thalles"]),
        preferences=StubPreferences(),
    )


@pytest.mark.parametrize(
    "pet, medicine, vet, quantity, expected",
    [
        ("Thor", "Meloxicam", "Isadora", 1, True),
        ("Thor", "Meloxicam", "Isadora", "2.5", True),
        ("  ", "Meloxicam", "Isadora", 1, False),
        ("Thor", "", "Isadora", 1, False),
        ("Thor", "Meloxicam", None, 1, False),
        ("Thor", "Meloxicam", "Isadora", 0, False),
        ("Thor", "Meloxicam", "Isadora", -1, False),
        ("Thor", "Meloxicam", "Isadora", "", False),
        ("Thor", "Meloxicam", "Isadora", "nan", False),
    ],
)
def test_can_submit(pet, medicine, vet, quantity, expected):
    assert can_submit(pet, medicine, vet, quantity) is expected


def test_parse_quantity():
    assert parse_quantity(" 3 ") == 3.0
    assert parse_quantity(True) is None
    assert parse_quantity(None) is None


def test_create_event_prepends_and_remembers_pet(now):
    uow = make_uow([make_event("Dipyrone", datetime(2024, 3, 1, 9, 0))])
    event = create_event.execute(
        uow,
        create_event.CreateEventInput(
            pet=" Thor ", medicine="Meloxicam", vet="Isadora", quantity="2"
        ),
        now=now,
    )
    assert uow.events.events[0] is event
    assert event.quantity == 2.0
    assert event.occurred_at == to_epoch_ms(now)
    assert event.display_date == "15/03/2024 10:00"
    assert uow.pets.remembered == ["Thor"]


def test_create_event_rejects_invalid_payload(now):
    uow = make_uow()
    with pytest.raises(ValidationError):
        create_event.execute(
            uow,
            create_event.CreateEventInput(pet="Thor", medicine="Meloxicam", vet="", quantity=1),
            now=now,
        )
    assert uow.events.events == []


def test_update_event_uses_edited_datetime(now):
    existing = make_event("Dipyrone", datetime(2024, 3, 1, 9, 0), event_id="e1")
    uow = make_uow([existing])
    event = update_event.execute(
        uow,
        update_event.UpdateEventInput(
            pet="Luna",
            medicine="Meloxicam",
            vet="Thalles",
            quantity=3,
            event_id="e1",
            occurred_at_text="2024-03-10T18:30",
        ),
        now=now,
    )
    assert uow.events.updated == [event]
    assert (event.pet, event.medicine, event.vet) == ("Luna", "Meloxicam", "Thalles")
    assert event.quantity == 3.0
    assert event.occurred_at == to_epoch_ms(datetime(2024, 3, 10, 18, 30))
    assert event.display_date == "10/03/2024 18:30"


def test_update_event_keeps_previous_instant_when_input_unparseable(now):
    existing = make_event("Dipyrone", None, event_id="legacy", legacy_text="02/03/2024 07:15")
    uow = make_uow([existing])
    event = update_event.execute(
        uow,
        update_event.UpdateEventInput(
            pet="Thor",
            medicine="Dipyrone",
            vet="Isadora",
            quantity=1,
            event_id="legacy",
            occurred_at_text="garbage",
        ),
        now=now,
    )
    assert event.occurred_at == to_epoch_ms(datetime(2024, 3, 2, 7, 15))
    assert event.display_date == "02/03/2024 07:15"


def test_update_unknown_event_raises(now):
    with pytest.raises(NotFound):
        update_event.execute(
            make_uow(),
            update_event.UpdateEventInput(
                pet="Thor", medicine="Dipyrone", vet="Isadora", quantity=1, event_id="missing"
            ),
            now=now,
        )


def test_delete_event():
    uow = make_uow([make_event("Dipyrone", datetime(2024, 3, 1, 9, 0), event_id="e1")])
    delete_event.execute(uow, "e1")
    assert uow.events.events == []
    with pytest.raises(NotFound):
        delete_event.execute(uow, "e1")


def test_list_events_filters_by_range(now):
    today = make_event("Meloxicam", datetime(2024, 3, 15, 8, 0))
    older = make_event("Meloxicam", datetime(2024, 3, 1, 8, 0))
    uow = make_uow([today, older])
    assert list_events.execute(uow, resolve(Today(), now), now=now) == [today]


def test_filter_names_is_case_insensitive_substring():
    names = ["Amoxicillin", "Meloxicam", "Dipyrone"]
    assert search_catalog.filter_names(names, "OXI") == ["Amoxicillin", "Meloxicam"]
    assert search_catalog.filter_names(names, "  ") == names
    assert search_catalog.filter_names(names, "zzz") == []


def test_apply_custom_range_remembers_length():
    uow = make_uow()
    assert apply_custom_range.execute(uow, date(2024, 3, 10), date(2024, 3, 1)) == 10
    assert uow.preferences.days == 10
    assert apply_custom_range.execute(uow, None, None) is None
    assert uow.preferences.days == 10


def test_export_events_hands_matrix_to_writer(now, tmp_path):
    uow = make_uow([make_event("Meloxicam", datetime(2024, 3, 15, 8, 0))])
    writer = StubWriter()
    result = export_events.execute(
        uow,
        resolve(Custom(date(2024, 3, 14), date(2024, 3, 15)), now),
        ["Meloxicam"],
        writer,
        export_dir=tmp_path,
        sheet_name="Sheet",
        now=now,
    )
    assert result is not None
    assert result.path == tmp_path / "records_03-14-24_to_03-15-24.xlsx"
    matrix, target, sheet = writer.calls[0]
    assert matrix == [["name", "03-14-24", "03-15-24"], ["Meloxicam", "", "Thor - Isadora"]]
    assert target == result.path
    assert sheet == "Sheet"


def test_export_events_wraps_writer_failure(now, tmp_path):
    with pytest.raises(ExportError):
        export_events.execute(
            make_uow(),
            resolve(Today(), now),
            ["Meloxicam"],
            StubWriter(fail=True),
            export_dir=tmp_path,
            now=now,
        )


def test_export_events_wraps_grid_failure(now, tmp_path):
    far = MedicationEvent(
        id="far",
        pet="Thor",
        medicine="Meloxicam",
        vet="Isadora",
        quantity=1,
        timestamp=Authoritative(10**18),
        display_date="",
    )
    writer = StubWriter()
    with pytest.raises(ExportError):
        export_events.execute(
            make_uow([far]),
            resolve(Today(), now),
            ["Meloxicam"],
            writer,
            export_dir=tmp_path,
            now=now,
        )
    assert writer.calls == []
