from __future__ import annotations

import pytest

from src.infrastructure.db.session import create_engine, create_session_factory, init_schema
from src.infrastructure.storage.json_file_store import JsonFileKeyValueStore
from src.infrastructure.storage.sqlite_store import SQLiteKeyValueStore


@pytest.fixture(params=["json", "sqlite"])
def kv_store(request, tmp_path):
    if request.param == "json":
        return JsonFileKeyValueStore(tmp_path / "data")
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_schema(engine)
    return SQLiteKeyValueStore(create_session_factory(engine))


def test_missing_key_returns_fallback(kv_store):
    assert kv_store.read("records", []) == []
    assert kv_store.read_text("lastCustomDays") is None
    assert kv_store.read_text("lastCustomDays", "7") == "7"


def test_write_then_read(kv_store):
    kv_store.write("pets", ["Thor", "Luna"])
    assert kv_store.read("pets", []) == ["Thor", "Luna"]
    kv_store.write("pets", ["Bob"])
    assert kv_store.read("pets", []) == ["Bob"]


def test_text_values_are_kept_verbatim(kv_store):
    kv_store.write_text("lastCustomDays", "12")
    assert kv_store.read_text("lastCustomDays") == "12"


def test_unserializable_value_is_swallowed(kv_store):
    kv_store.write("pets", ["Thor"])
    kv_store.write("pets", {object()})
    assert kv_store.read("pets", []) == ["Thor"]


def test_corrupt_json_file_returns_fallback(tmp_path):
    store = JsonFileKeyValueStore(tmp_path)
    (tmp_path / "records.json").write_text("{not json", encoding="utf-8")
    assert store.read("records", ["fallback"]) == ["fallback"]


def test_corrupt_sqlite_value_returns_fallback(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_schema(engine)
    store = SQLiteKeyValueStore(create_session_factory(engine))
    store.write_text("records", "{not json")
    assert store.read("records", []) == []


def test_json_store_rejects_path_like_keys(tmp_path):
    store = JsonFileKeyValueStore(tmp_path)
    with pytest.raises(ValueError):
        store.read("../escape", None)


def test_json_store_invalid_utf8_returns_fallback(tmp_path):
    store = JsonFileKeyValueStore(tmp_path)
    (tmp_path / "records.json").write_bytes(b'["\xff\xfe"]')
    (tmp_path / "lastCustomDays.txt").write_bytes(b"\xff")
    assert store.read("records", []) == []
    assert store.read_text("lastCustomDays", "3") == "3"
