from __future__ import annotations

from collections.abc import Sequence

from src.application.interfaces.key_value_store import KeyValueStore
from src.config.settings import Settings
from src.infrastructure.db.session import create_engine, create_session_factory, init_schema
from src.infrastructure.repos.medication_events_kv import MedicationEventsKVRepository
from src.infrastructure.repos.pets_kv import PetNamesKVRepository
from src.infrastructure.repos.preferences_kv import PreferencesKVRepository
from src.infrastructure.repos.vets_kv import VetRosterKVRepository
from src.infrastructure.storage.json_file_store import JsonFileKeyValueStore
from src.infrastructure.storage.sqlite_store import SQLiteKeyValueStore


class StoreUnitOfWork:
    """All logbook repositories over a single key-value store."""

    def __init__(self, store: KeyValueStore, *, vets_default: Sequence[str] = ()) -> None:
        self.store = store
        self.events = MedicationEventsKVRepository(store)
        self.pets = PetNamesKVRepository(store)
        self.vets = VetRosterKVRepository(store, vets_default)
        self.preferences = PreferencesKVRepository(store)


def build_store(settings: Settings) -> KeyValueStore:
    if settings.storage_backend == "json":
        return JsonFileKeyValueStore(settings.data_dir)
    engine = create_engine(settings.database_url)
    init_schema(engine)
    return SQLiteKeyValueStore(create_session_factory(engine))


def build_unit_of_work(settings: Settings) -> StoreUnitOfWork:
    return StoreUnitOfWork(build_store(settings), vets_default=settings.vets_default_list)
