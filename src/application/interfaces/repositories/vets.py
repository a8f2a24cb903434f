from __future__ import annotations

from typing import Protocol


class VetRosterRepository(Protocol):
    def list(self) -> list[str]: ...
