"""
store.py — Thin document-store adapter over a Motor database.

The moderation core needs four primitives from its backing store:
get-by-id, replace-by-id, query-by-equality and an atomic increment.
insert() and update() are added for writes that create documents or
touch several fields in one round trip.

Document ids are strings (hex ObjectIds for generated ids, the user id
for per-user records such as user_activity), so callers never handle
bson types directly.

Every driver error is re-raised as StoreError; a missing database
(get_db() returned None) raises StoreError on first use. That is the only
exception type the policy services have to reason about.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# ── Collection names ──────────────────────────────────────────────────────────

FISHING_SPOTS = "fishing_spots"
CATCH_REPORTS = "catch_reports"
REPORTS = "reports"
USER_ACTIVITY = "user_activity"
USERS = "users"


class StoreError(Exception):
    """Raised when the document store cannot complete an operation."""


@asynccontextmanager
async def _translate_errors(op: str, collection: str):
    try:
        yield
    except PyMongoError as exc:
        raise StoreError(f"{op} on {collection} failed: {exc}") from exc


class DocumentStore:
    """Async wrapper exposing only the operations the app relies on."""

    def __init__(self, db):
        self._db = db

    @property
    def available(self) -> bool:
        return self._db is not None

    def _collection(self, name: str):
        if self._db is None:
            raise StoreError("Database unavailable")
        return self._db[name]

    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        col = self._collection(collection)
        async with _translate_errors("get", collection):
            return await col.find_one({"_id": doc_id})

    async def insert(self, collection: str, doc: dict) -> str:
        """Insert *doc* under a freshly generated id and return that id."""
        col = self._collection(collection)
        doc_id = str(ObjectId())
        async with _translate_errors("insert", collection):
            await col.insert_one({**doc, "_id": doc_id})
        return doc_id

    async def replace(self, collection: str, doc_id: str, doc: dict) -> None:
        """Full replace (upsert) — no field of the previous document survives."""
        col = self._collection(collection)
        async with _translate_errors("replace", collection):
            await col.replace_one({"_id": doc_id}, {**doc, "_id": doc_id}, upsert=True)

    async def find_by(
        self,
        collection: str,
        *,
        sort: Optional[str] = None,
        limit: int = 0,
        exclude: Optional[dict] = None,
        **fields: Any,
    ) -> list[dict]:
        """
        Return every document whose fields equal the given values.

        *exclude* maps field → value to leave out ($ne), applied in the query
        so it is honoured before *limit*. Documents missing the field match.
        """
        query: dict = dict(fields)
        for field, value in (exclude or {}).items():
            query[field] = {"$ne": value}

        col = self._collection(collection)
        async with _translate_errors("find", collection):
            cursor = col.find(query)
            if sort:
                cursor = cursor.sort(sort, -1)
            if limit:
                cursor = cursor.limit(limit)
            return [doc async for doc in cursor]

    async def increment(
        self,
        collection: str,
        doc_id: str,
        field: str,
        delta: int = 1,
        *,
        upsert: bool = False,
    ) -> Optional[dict]:
        """Atomically add *delta* to *field*; returns the updated document."""
        col = self._collection(collection)
        async with _translate_errors("increment", collection):
            return await col.find_one_and_update(
                {"_id": doc_id},
                {"$inc": {field: delta}},
                upsert=upsert,
                return_document=ReturnDocument.AFTER,
            )

    async def update(
        self,
        collection: str,
        doc_id: str,
        *,
        set_fields: Optional[dict] = None,
        inc: Optional[dict] = None,
        push: Optional[dict] = None,
    ) -> bool:
        """Apply $set / $inc / $push in one update; True if a document matched."""
        update: dict = {}
        if set_fields:
            update["$set"] = set_fields
        if inc:
            update["$inc"] = inc
        if push:
            update["$push"] = push
        if not update:
            return False

        col = self._collection(collection)
        async with _translate_errors("update", collection):
            result = await col.update_one({"_id": doc_id}, update)
        return result.matched_count > 0
