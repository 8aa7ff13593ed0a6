from __future__ import annotations

import sqlite3

import pytest

from adapters.sqlite_storage import SQLiteRecordStore
from core.errors import StoreError


def _store(tmp_path) -> SQLiteRecordStore:
    store = SQLiteRecordStore(str(tmp_path / "palimpsest.db"))
    store.init_db()
    return store


def test_insert_then_exists(tmp_path) -> None:
    store = _store(tmp_path)
    assert not store.exists(1, 100)

    store.insert(1, 100, "original text")

    assert store.exists(1, 100)
    assert not store.exists(1, 101)
    assert not store.exists(2, 100)


def test_records_survive_reopen(tmp_path) -> None:
    _store(tmp_path).insert(1, 100, "a")

    reopened = _store(tmp_path)

    assert reopened.exists(1, 100)
    assert reopened.count() == 1


def test_list_records_returns_original_content(tmp_path) -> None:
    store = _store(tmp_path)
    store.insert(1, 100, "a")
    store.insert(1, 101, "b")

    records = {(r.channel_id, r.message_id): r.content for r in store.list_records()}

    assert records == {(1, 100): "a", (1, 101): "b"}


def test_duplicate_insert_raises_store_error(tmp_path) -> None:
    store = _store(tmp_path)
    store.insert(1, 100, "a")

    with pytest.raises(StoreError) as excinfo:
        store.insert(1, 100, "a")
    assert isinstance(excinfo.value.__cause__, sqlite3.IntegrityError)


def test_missing_table_raises_store_error(tmp_path) -> None:
    store = SQLiteRecordStore(str(tmp_path / "empty.db"))

    with pytest.raises(StoreError):
        store.exists(1, 100)


def test_unopenable_database_raises_store_error(tmp_path) -> None:
    store = SQLiteRecordStore(str(tmp_path / "missing-dir" / "palimpsest.db"))

    with pytest.raises(StoreError):
        store.init_db()
