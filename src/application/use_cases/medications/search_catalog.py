from __future__ import annotations

from collections.abc import Iterable


def filter_names(names: Iterable[str], query: str | None) -> list[str]:
    """Names containing ``query``, case-insensitively; all names for a blank query."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(names)
    return [n for n in names if needle in n.lower()]
