"""
Business logic for app records.

``AppService`` validates upload payloads, builds normalized records and
answers the four read queries (all, featured, recent, by id).  Every
method returns a ``Result``: ``Ok`` with the value, or ``Err`` carrying
one of ``MissingFile``, ``MissingFields``, ``NotFound`` or
``PersistenceError``.

"Featured" and "recent" are both plain recency views over the same
ordering as the full listing; they differ only in how many records
they return.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from app_catalog_api.app.core.errors import (
    Err,
    MissingFields,
    MissingFile,
    Ok,
    PersistenceError,
    Result,
)
from app_catalog_api.app.core.store import AppStore
from app_catalog_api.app.schemas.app import ApkFile, AppCreate, AppRecord, utcnow
from app_catalog_api.app.services.blob_storage import BlobStorage, SyntheticBlobStorage, UploadedFile

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 2
RECENT_LIMIT = 4


class AppService:
    """Service for creating and querying app records."""

    def __init__(
        self,
        store: AppStore,
        blob_storage: Optional[BlobStorage] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.blob_storage = blob_storage or SyntheticBlobStorage()
        self.clock = clock

    async def create_app(
        self,
        apk: Optional[UploadedFile],
        name: Optional[str],
        description: Optional[str],
        version: Optional[str],
        github_link: Optional[str],
    ) -> Result[AppRecord]:
        """Validate an upload and persist a new record.

        The file is checked first, then the four text fields.  Nothing is
        written when either check fails.  Identical submissions are not
        deduplicated; each successful call creates a new record.
        """
        if apk is None or not apk.filename:
            return Err(MissingFile())
        if not all((name, description, version, github_link)):
            return Err(MissingFields())

        uploaded_at = self.clock()
        storage_path = await self.blob_storage.store(apk, uploaded_at)
        data = AppCreate(
            name=name,
            description=description,
            version=version,
            github_link=github_link,
            apk_file=ApkFile(
                filename=apk.filename,
                storage_path=storage_path,
                upload_date=uploaded_at,
            ),
        )

        result = await self.store.insert_one(data)
        if isinstance(result, Err):
            logger.error("Upload error: %s", result.error.message)
            return Err(PersistenceError(result.error.message))
        logger.info(
            "Created app %s '%s' (%s, %d bytes)",
            result.value.id,
            result.value.name,
            storage_path,
            apk.size,
        )
        return result

    async def list_apps(self) -> Result[List[AppRecord]]:
        """Return all records, newest upload first."""
        return await self._list(None, "Failed to fetch apps")

    async def list_featured(self) -> Result[List[AppRecord]]:
        return await self._list(FEATURED_LIMIT, "Failed to fetch featured apps")

    async def list_recent(self) -> Result[List[AppRecord]]:
        return await self._list(RECENT_LIMIT, "Failed to fetch recent apps")

    async def get_app(self, app_id: str) -> Result[AppRecord]:
        """Return a single record.  Unknown or malformed ids yield ``NotFound``."""
        result = await self.store.find_by_id(app_id)
        if isinstance(result, Err) and isinstance(result.error, PersistenceError):
            logger.error("Error fetching app details for %s: %s", app_id, result.error.message)
            return Err(PersistenceError("Failed to fetch app details"))
        return result

    async def _list(self, limit: Optional[int], failure_message: str) -> Result[List[AppRecord]]:
        result = await self.store.find_sorted(limit=limit)
        if isinstance(result, Err):
            logger.error("%s: %s", failure_message, result.error.message)
            return Err(PersistenceError(failure_message))
        return result
