from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.infrastructure.db.orm.kv_entry import KeyValueEntryORM

logger = logging.getLogger(__name__)


class SQLiteKeyValueStore:
    """Key-value store backed by the ``kv_entries`` table."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_raw(self, key: str) -> str | None:
        with self._session_factory() as session:
            orm = session.get(KeyValueEntryORM, key)
            return orm.value if orm else None

    def _put_raw(self, key: str, raw: str) -> None:
        with self._session_factory() as session, session.begin():
            orm = session.get(KeyValueEntryORM, key)
            if orm:
                orm.value = raw
            else:
                session.add(KeyValueEntryORM(key=key, value=raw))

    def read(self, key: str, fallback: Any) -> Any:
        try:
            raw = self._get_raw(key)
        except SQLAlchemyError as exc:
            logger.warning("Failed to read key %s: %s", key, exc)
            return fallback
        if raw is None:
            return fallback
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Stored value for key %s is not valid JSON; using fallback", key)
            return fallback

    def write(self, key: str, value: Any) -> None:
        try:
            self._put_raw(key, json.dumps(value, ensure_ascii=False))
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            logger.error("Failed to write key %s: %s", key, exc, exc_info=True)

    def read_text(self, key: str, fallback: str | None = None) -> str | None:
        try:
            raw = self._get_raw(key)
        except SQLAlchemyError as exc:
            logger.warning("Failed to read key %s: %s", key, exc)
            return fallback
        return fallback if raw is None else raw

    def write_text(self, key: str, value: str) -> None:
        try:
            self._put_raw(key, str(value))
        except SQLAlchemyError as exc:
            logger.error("Failed to write key %s: %s", key, exc, exc_info=True)
