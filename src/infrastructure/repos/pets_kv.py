from __future__ import annotations

from src.application.interfaces.key_value_store import KeyValueStore

PETS_KEY = "pets"


class PetNamesKVRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def list(self) -> list[str]:
        raw = self.store.read(PETS_KEY, [])
        if not isinstance(raw, list):
            return []
        return [str(p) for p in raw if isinstance(p, str) and p]

    def remember(self, name: str) -> list[str]:
        """Prepend ``name`` unless it is already known."""
        name = (name or "").strip()
        names = self.list()
        if not name or name in names:
            return names
        names = [name, *names]
        self.store.write(PETS_KEY, names)
        return names
