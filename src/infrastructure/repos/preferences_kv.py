from __future__ import annotations

from src.application.interfaces.key_value_store import KeyValueStore

LAST_CUSTOM_DAYS_KEY = "lastCustomDays"


class PreferencesKVRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def get_last_custom_days(self) -> int | None:
        raw = self.store.read_text(LAST_CUSTOM_DAYS_KEY)
        if raw is None:
            return None
        try:
            days = int(raw.strip())
        except ValueError:
            return None
        return days if days > 0 else None

    def set_last_custom_days(self, days: int) -> None:
        self.store.write_text(LAST_CUSTOM_DAYS_KEY, str(int(days)))
