"""Shared fixtures: in-memory stores, a stepping clock and an HTTP client."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app_catalog_api.app.core.config import Settings
from app_catalog_api.app.core.db import new_record_id
from app_catalog_api.app.core.errors import Err, NotFound, Ok, PersistenceError
from app_catalog_api.app.core.store import AppStore
from app_catalog_api.app.main import create_app
from app_catalog_api.app.schemas.app import AppRecord


class InMemoryAppStore(AppStore):
    """Keeps records in a list; newest upload first, later insert wins ties."""

    def __init__(self):
        self.records: List[AppRecord] = []
        self.opened = False
        self.closed = False

    async def open(self):
        self.opened = True

    async def close(self):
        self.closed = True

    async def insert_one(self, data):
        record = AppRecord(id=new_record_id(), **data.model_dump())
        self.records.append(record)
        return Ok(record)

    async def find_sorted(self, limit: Optional[int] = None):
        indexed = list(enumerate(self.records))
        indexed.sort(key=lambda item: (item[1].apk_file.upload_date, item[0]), reverse=True)
        ordered = [record for _, record in indexed]
        return Ok(ordered if limit is None else ordered[:limit])

    async def find_by_id(self, app_id: str):
        for record in self.records:
            if record.id == app_id:
                return Ok(record)
        return Err(NotFound())


class FailingAppStore(AppStore):
    """Every operation fails as if the database connection was lost."""

    def __init__(self, message: str = "connection refused"):
        self.message = message

    async def insert_one(self, data):
        return Err(PersistenceError(self.message))

    async def find_sorted(self, limit: Optional[int] = None):
        return Err(PersistenceError(self.message))

    async def find_by_id(self, app_id: str):
        return Err(PersistenceError(self.message))


class StepClock:
    """Returns a strictly increasing UTC time, one second per call."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def memory_store():
    return InMemoryAppStore()


@pytest.fixture
def failing_store():
    return FailingAppStore()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite:///{tmp_path / 'catalog.db'}")


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def upload_form():
    return {
        "name": "Foo",
        "description": "bar",
        "version": "1.0",
        "githubLink": "https://x/y",
    }
