from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileKeyValueStore:
    """One file per key under ``directory``: ``<key>.json`` or ``<key>.txt``."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str, suffix: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}{suffix}"

    def _replace(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def read(self, key: str, fallback: Any) -> Any:
        path = self._path(key, ".json")
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return fallback
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read %s: %s", path, exc)
            return fallback
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Stored value in %s is not valid JSON; using fallback", path)
            return fallback

    def write(self, key: str, value: Any) -> None:
        path = self._path(key, ".json")
        try:
            self._replace(path, json.dumps(value, ensure_ascii=False, indent=2))
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to write %s: %s", path, exc, exc_info=True)

    def read_text(self, key: str, fallback: str | None = None) -> str | None:
        path = self._path(key, ".txt")
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return fallback
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read %s: %s", path, exc)
            return fallback

    def write_text(self, key: str, value: str) -> None:
        path = self._path(key, ".txt")
        try:
            self._replace(path, str(value))
        except OSError as exc:
            logger.error("Failed to write %s: %s", path, exc, exc_info=True)
