from __future__ import annotations

import sys
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.domain.dates import format_display, to_epoch_ms
from src.domain.models.medication_event import Authoritative, LegacyText, MedicationEvent
from src.infrastructure.storage.json_file_store import JsonFileKeyValueStore
from src.infrastructure.unit_of_work import StoreUnitOfWork

VETS = ["Isadora", "Thalles"]


class StubWriter:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[list[list[str]], Path, str]] = []

    def write(self, matrix: Sequence[Sequence[str]], target: Path, *, sheet_name: str) -> Path:
        if self.fail:
            raise OSError("disk full")
        self.calls.append(([list(r) for r in matrix], Path(target), sheet_name))
        return Path(target)


def make_event(
    medicine: str,
    at: datetime | None,
    *,
    pet: str = "Thor",
    vet: str = "Isadora",
    quantity: float = 1,
    event_id: str | None = None,
    legacy_text: str | None = None,
) -> MedicationEvent:
    if at is not None:
        timestamp = Authoritative(to_epoch_ms(at))
        display = format_display(at)
    else:
        timestamp = LegacyText(legacy_text or "")
        display = legacy_text or ""
    return MedicationEvent(
        id=event_id or f"{medicine}-{pet}-{display}",
        pet=pet,
        medicine=medicine,
        vet=vet,
        quantity=quantity,
        timestamp=timestamp,
        display_date=display,
    )


@pytest.fixture()
def now() -> datetime:
    # Friday
    return datetime(2024, 3, 15, 10, 0)


@pytest.fixture()
def store(tmp_path) -> JsonFileKeyValueStore:
    return JsonFileKeyValueStore(tmp_path / "data")


@pytest.fixture()
def uow(store) -> StoreUnitOfWork:
    return StoreUnitOfWork(store, vets_default=VETS)


@pytest.fixture()
def writer() -> StubWriter:
    return StubWriter()
