from __future__ import annotations

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Key-addressed JSON storage.

    Reads never raise: a missing key or an unparseable value yields ``fallback``.
    Write failures are logged by the implementation and not propagated.
    """

    def read(self, key: str, fallback: Any) -> Any: ...

    def write(self, key: str, value: Any) -> None: ...

    # Plain string values kept outside the JSON blobs
    def read_text(self, key: str, fallback: str | None = None) -> str | None: ...

    def write_text(self, key: str, value: str) -> None: ...
