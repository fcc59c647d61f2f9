"""
Document store capability interface.

``AppStore`` is the only seam between the catalog service and its
persistence.  A store is constructed by the application factory,
opened once during startup and closed on shutdown; every request then
performs exactly one of ``insert_one``, ``find_sorted`` or
``find_by_id`` against it.

``build_store`` picks an implementation from the connection string:

* ``mongodb://...`` / ``mongodb+srv://...`` -> :class:`MongoAppStore`
* ``sqlite:///path/to/file.db`` or a bare path -> :class:`SQLiteAppStore`
"""

from __future__ import annotations

import abc
import logging
from typing import List, Optional

from app_catalog_api.app.core.config import ConfigurationError, Settings
from app_catalog_api.app.core.errors import Result
from app_catalog_api.app.schemas.app import AppCreate, AppRecord

logger = logging.getLogger(__name__)

MONGO_SCHEMES = ("mongodb://", "mongodb+srv://")
SQLITE_PREFIX = "sqlite:///"


class AppStore(abc.ABC):
    """Abstract document store holding ``AppRecord`` documents."""

    async def open(self) -> None:
        """Acquire connections and prepare the schema.  Default: nothing to do."""

    async def close(self) -> None:
        """Release connections.  Default: nothing to do."""

    @abc.abstractmethod
    async def insert_one(self, data: AppCreate) -> Result[AppRecord]:
        """Persist a new record and return it with its assigned ``id``."""

    @abc.abstractmethod
    async def find_sorted(self, limit: Optional[int] = None) -> Result[List[AppRecord]]:
        """Return records ordered by upload date, newest first.

        Records sharing an upload date are returned most recently
        inserted first.  ``limit`` of ``None`` returns everything.
        """

    @abc.abstractmethod
    async def find_by_id(self, app_id: str) -> Result[AppRecord]:
        """Return the record with ``app_id`` or ``Err(NotFound)``.

        Identifiers that are not valid for the backend are reported as
        ``NotFound`` as well.
        """


def sqlite_path_from_url(url: str) -> str:
    """Strip the ``sqlite:///`` prefix, if present, from a connection string."""
    if url.startswith(SQLITE_PREFIX):
        return url[len(SQLITE_PREFIX):]
    return url


def build_store(settings: Settings) -> AppStore:
    """Construct the store selected by ``settings.database_url``.

    Raises
    ------
    ConfigurationError
        If no connection string is configured or the scheme is not
        supported.
    """
    url = settings.require_database_url()
    if url.startswith(MONGO_SCHEMES):
        from app_catalog_api.app.core.mongo import MongoAppStore

        logger.info("Using MongoDB document store (database %s)", settings.mongodb_database)
        return MongoAppStore(url, database_name=settings.mongodb_database)
    if "://" in url and not url.startswith(SQLITE_PREFIX):
        raise ConfigurationError(f"Unsupported database URL scheme: {url.split('://', 1)[0]}")

    from app_catalog_api.app.core.db import SQLiteAppStore

    path = sqlite_path_from_url(url)
    logger.info("Using SQLite document store at %s", path)
    return SQLiteAppStore(path)
