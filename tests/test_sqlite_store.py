"""Tests for the SQLite document store."""

import asyncio
import sqlite3
from datetime import datetime, timedelta, timezone

from app_catalog_api.app.core.db import MIGRATIONS, SQLiteAppStore, format_timestamp
from app_catalog_api.app.core.errors import Err, NotFound, Ok, PersistenceError
from app_catalog_api.app.schemas.app import ApkFile, AppCreate

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _app(name: str, uploaded_at: datetime) -> AppCreate:
    return AppCreate(
        name=name,
        description=f"{name} description",
        version="1.0",
        github_link=f"https://github.com/example/{name}",
        apk_file=ApkFile(
            filename=f"{name}.apk",
            storage_path=f"/apps/{int(uploaded_at.timestamp() * 1000)}_{name}.apk",
            upload_date=uploaded_at,
        ),
    )


def _open_store(tmp_path) -> SQLiteAppStore:
    store = SQLiteAppStore(str(tmp_path / "data" / "catalog.db"))
    asyncio.run(store.open())
    return store


def test_open_applies_migrations(tmp_path):
    store = _open_store(tmp_path)
    conn = sqlite3.connect(store.database_path)
    try:
        versions = [row[0] for row in conn.execute("SELECT version FROM migrations")]
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    finally:
        conn.close()
    assert versions == [version for version, _ in MIGRATIONS]
    assert "apps" in tables


def test_open_is_idempotent(tmp_path):
    store = _open_store(tmp_path)
    asyncio.run(store.insert_one(_app("kept", BASE_TIME)))
    asyncio.run(store.open())
    assert len(asyncio.run(store.find_sorted()).value) == 1


def test_insert_and_find_by_id(tmp_path):
    store = _open_store(tmp_path)
    created = asyncio.run(store.insert_one(_app("foo", BASE_TIME)))
    assert isinstance(created, Ok)
    assert len(created.value.id) == 24

    fetched = asyncio.run(store.find_by_id(created.value.id))
    assert isinstance(fetched, Ok)
    assert fetched.value == created.value
    assert fetched.value.apk_file.upload_date == BASE_TIME


def test_find_sorted_orders_newest_first(tmp_path):
    store = _open_store(tmp_path)
    for offset, name in [(1, "middle"), (0, "oldest"), (2, "newest")]:
        asyncio.run(store.insert_one(_app(name, BASE_TIME + timedelta(minutes=offset))))

    records = asyncio.run(store.find_sorted()).value
    assert [r.name for r in records] == ["newest", "middle", "oldest"]

    limited = asyncio.run(store.find_sorted(limit=2)).value
    assert [r.name for r in limited] == ["newest", "middle"]


def test_identical_upload_dates_prefer_later_insert(tmp_path):
    store = _open_store(tmp_path)
    asyncio.run(store.insert_one(_app("first", BASE_TIME)))
    asyncio.run(store.insert_one(_app("second", BASE_TIME)))
    records = asyncio.run(store.find_sorted()).value
    assert [r.name for r in records] == ["second", "first"]


def test_sub_second_ordering(tmp_path):
    store = _open_store(tmp_path)
    asyncio.run(store.insert_one(_app("later", BASE_TIME + timedelta(microseconds=500000))))
    asyncio.run(store.insert_one(_app("earlier", BASE_TIME)))
    records = asyncio.run(store.find_sorted()).value
    assert [r.name for r in records] == ["later", "earlier"]


def test_find_by_id_unknown_and_malformed(tmp_path):
    store = _open_store(tmp_path)
    for app_id in ["0" * 24, "not-an-id", "", "ABCDEF0123456789abcdef01"]:
        result = asyncio.run(store.find_by_id(app_id))
        assert isinstance(result, Err)
        assert isinstance(result.error, NotFound)


def test_database_errors_become_persistence_errors(tmp_path):
    store = SQLiteAppStore(str(tmp_path / "never-migrated.db"))
    # No open(): the apps table does not exist.
    result = asyncio.run(store.find_sorted())
    assert isinstance(result, Err)
    assert isinstance(result.error, PersistenceError)
    assert "no such table" in result.error.message

    result = asyncio.run(store.insert_one(_app("foo", BASE_TIME)))
    assert isinstance(result.error, PersistenceError)


def test_format_timestamp_is_fixed_width_utc():
    naive = datetime(2026, 1, 1, 0, 0, 0)
    assert format_timestamp(naive) == "2026-01-01T00:00:00.000000+00:00"
    shifted = datetime(2026, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(shifted) == "2026-01-01T00:00:00.000000+00:00"


def test_malformed_row_becomes_persistence_error(tmp_path):
    store = _open_store(tmp_path)
    created = asyncio.run(store.insert_one(_app("foo", BASE_TIME))).value
    conn = sqlite3.connect(store.database_path)
    try:
        conn.execute("UPDATE apps SET apk_upload_date = 'yesterday' WHERE id = ?", (created.id,))
        conn.commit()
    finally:
        conn.close()

    for result in (asyncio.run(store.find_sorted()), asyncio.run(store.find_by_id(created.id))):
        assert isinstance(result, Err)
        assert isinstance(result.error, PersistenceError)
