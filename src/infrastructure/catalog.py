from __future__ import annotations

import logging
from pathlib import Path

from src.domain.catalog import MEDICINES

logger = logging.getLogger(__name__)


def load_catalog(path: str | None = None) -> list[str]:
    """Medicine names, one per line, from ``path``; the built-in list otherwise.

    Blank lines and ``#`` comments are ignored, duplicates keep their first position.
    """
    if not path:
        return list(MEDICINES)
    try:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        logger.warning("Could not read medicine catalog %s: %s; using built-in list", path, exc)
        return list(MEDICINES)

    names: list[str] = []
    for line in lines:
        name = line.strip()
        if not name or name.startswith("#") or name in names:
            continue
        names.append(name)
    return names or list(MEDICINES)
