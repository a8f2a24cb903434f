from __future__ import annotations

from typing import Protocol


class PreferencesRepository(Protocol):
    def get_last_custom_days(self) -> int | None: ...

    def set_last_custom_days(self, days: int) -> None: ...
