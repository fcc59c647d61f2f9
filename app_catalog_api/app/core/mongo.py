"""
MongoDB document store.

Records live in a single ``apps`` collection using the document shape
clients see on the wire::

    {
        "_id": ObjectId(...),
        "name": "...", "description": "...", "version": "...",
        "githubLink": "...",
        "apkFile": {"filename": "...", "storagePath": "...", "uploadDate": datetime}
    }

The store owns one ``AsyncMongoClient`` created in :meth:`open` and
closed in :meth:`close`.  A pre‑built collection can be injected instead
(tests do this); in that case the store never creates a client.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo import AsyncMongoClient, DESCENDING
from pymongo.errors import PyMongoError

from app_catalog_api.app.core.errors import Err, NotFound, Ok, PersistenceError, Result
from app_catalog_api.app.core.store import AppStore
from app_catalog_api.app.schemas.app import AppCreate, AppRecord

logger = logging.getLogger(__name__)

SORT_ORDER = [("apkFile.uploadDate", DESCENDING), ("_id", DESCENDING)]


class MongoAppStore(AppStore):
    """App records stored in a MongoDB collection."""

    def __init__(
        self,
        uri: str = "",
        database_name: str = "app_catalog",
        collection_name: str = "apps",
        collection=None,
    ):
        """
        Args:
            uri: MongoDB connection string.
            database_name: Database holding the collection.
            collection_name: Name of the records collection.
            collection: Optional pre‑built async collection.  When given,
                ``uri`` is ignored and no client is created.
        """
        self.uri = uri
        self.database_name = database_name
        self.collection_name = collection_name
        self._client: Optional[AsyncMongoClient] = None
        self.apps = collection

    async def open(self) -> None:
        if self.apps is not None:
            return
        # tz_aware so upload dates come back as UTC‑aware datetimes.
        self._client = AsyncMongoClient(self.uri, tz_aware=True)
        self.apps = self._client[self.database_name][self.collection_name]
        logger.info("Connected to MongoDB database %s", self.database_name)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
            self.apps = None
            logger.info("MongoDB connection closed")

    async def insert_one(self, data: AppCreate) -> Result[AppRecord]:
        document = data.model_dump(by_alias=True)
        try:
            result = await self.apps.insert_one(document)
        except PyMongoError as exc:
            logger.error("MongoDB insert failed: %s", exc)
            return Err(PersistenceError(str(exc)))
        document["_id"] = result.inserted_id
        return Ok(self.to_record(document))

    async def find_sorted(self, limit: Optional[int] = None) -> Result[List[AppRecord]]:
        try:
            cursor = self.apps.find().sort(SORT_ORDER)
            if limit is not None:
                cursor = cursor.limit(limit)
            documents = await cursor.to_list(length=None)
            records = [self.to_record(doc) for doc in documents]
        except PyMongoError as exc:
            logger.error("MongoDB query failed: %s", exc)
            return Err(PersistenceError(str(exc)))
        except ValidationError as exc:
            logger.error("MongoDB returned a malformed app document: %s", exc)
            return Err(PersistenceError(str(exc)))
        return Ok(records)

    async def find_by_id(self, app_id: str) -> Result[AppRecord]:
        try:
            object_id = ObjectId(app_id)
        except (InvalidId, TypeError):
            return Err(NotFound())
        try:
            document = await self.apps.find_one({"_id": object_id})
            record = self.to_record(document) if document is not None else None
        except PyMongoError as exc:
            logger.error("MongoDB lookup of %s failed: %s", app_id, exc)
            return Err(PersistenceError(str(exc)))
        except ValidationError as exc:
            logger.error("MongoDB document %s is malformed: %s", app_id, exc)
            return Err(PersistenceError(str(exc)))
        if record is None:
            return Err(NotFound())
        return Ok(record)

    @staticmethod
    def to_record(document: Dict[str, Any]) -> AppRecord:
        """Build an ``AppRecord`` from a stored document."""
        return AppRecord.model_validate({**document, "id": str(document["_id"])})
