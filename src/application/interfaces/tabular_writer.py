from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol


class TabularWriter(Protocol):
    """Serializes a header row plus data rows to ``target`` and returns the written path."""

    def write(self, matrix: Sequence[Sequence[str]], target: Path, *, sheet_name: str) -> Path: ...
