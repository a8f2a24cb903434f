from __future__ import annotations

from typing import Protocol


class PetNamesRepository(Protocol):
    def list(self) -> list[str]: ...

    def remember(self, name: str) -> list[str]: ...
