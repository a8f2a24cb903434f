from __future__ import annotations

from collections.abc import Sequence

from src.application.interfaces.key_value_store import KeyValueStore

VETS_KEY = "vets"


class VetRosterKVRepository:
    """Veterinarian roster; falls back to the configured seed when nothing is stored."""

    def __init__(self, store: KeyValueStore, default: Sequence[str]) -> None:
        self.store = store
        self.default = list(default)

    def list(self) -> list[str]:
        raw = self.store.read(VETS_KEY, self.default)
        if not isinstance(raw, list):
            return list(self.default)
        return [str(v) for v in raw if isinstance(v, str) and v.strip()]
