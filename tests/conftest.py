"""
pytest configuration and shared fixtures for the FishSpot API tests.

Tests must not require a live MongoDB. We achieve this by:
  1. Patching connect_to_mongo / close_mongo_connection to no-ops so
     FastAPI's lifespan doesn't try to reach a real database.
  2. Providing FakeDB — an in-memory stand-in for a Motor database that
     supports exactly the calls core/store.py makes.
  3. Overriding get_db / get_clock through app.dependency_overrides for
     HTTP tests, with time frozen at FROZEN_NOW.
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ.setdefault("ENVIRONMENT", "test")

FROZEN_NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


# ── FakeDB ────────────────────────────────────────────────────────────────────

class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction=1):
        self._docs = sorted(
            self._docs,
            key=lambda d: d.get(key) or datetime.min.replace(tzinfo=timezone.utc),
            reverse=direction < 0,
        )
        return self

    def limit(self, n):
        if n:
            self._docs = self._docs[:n]
        return self

    async def __aiter__(self):
        for doc in self._docs:
            yield doc


class FakeCollection:
    def __init__(self):
        self._docs = {}

    @staticmethod
    def _matches(doc, query):
        for key, expected in query.items():
            if isinstance(expected, dict) and "$ne" in expected:
                if doc.get(key) == expected["$ne"]:
                    return False
            elif doc.get(key) != expected:
                return False
        return True

    async def find_one(self, query):
        if "_id" in query and len(query) == 1:
            return self._docs.get(query["_id"])
        for doc in self._docs.values():
            if self._matches(doc, query):
                return doc
        return None

    async def insert_one(self, doc):
        self._docs[doc["_id"]] = dict(doc)
        result = MagicMock()
        result.inserted_id = doc["_id"]
        return result

    async def replace_one(self, query, doc, upsert=False):
        key = query["_id"]
        matched = key in self._docs
        if matched or upsert:
            self._docs[key] = dict(doc)
        result = MagicMock()
        result.matched_count = 1 if matched else 0
        return result

    def _apply(self, doc, update):
        for field, value in update.get("$set", {}).items():
            doc[field] = value
        for field, delta in update.get("$inc", {}).items():
            doc[field] = doc.get(field, 0) + delta
        for field, value in update.get("$push", {}).items():
            doc[field] = list(doc.get(field) or []) + [value]

    async def update_one(self, query, update, upsert=False):
        doc = await self.find_one(query)
        result = MagicMock()
        result.matched_count = 1 if doc is not None else 0
        if doc is not None:
            self._apply(doc, update)
        return result

    async def find_one_and_update(self, query, update, upsert=False, return_document=None):
        doc = await self.find_one(query)
        if doc is None:
            if not upsert:
                return None
            doc = {"_id": query["_id"]}
            self._docs[doc["_id"]] = doc
        self._apply(doc, update)
        return doc

    def find(self, query=None):
        query = query or {}
        return FakeCursor([d for d in self._docs.values() if self._matches(d, query)])

    # Test helpers
    def all(self):
        return list(self._docs.values())


class FakeDB:
    def __init__(self):
        self._cols = {}

    def __getitem__(self, name):
        if name not in self._cols:
            self._cols[name] = FakeCollection()
        return self._cols[name]


class BrokenDB:
    """Every collection call raises a driver error."""

    def __getitem__(self, name):
        from pymongo.errors import ServerSelectionTimeoutError

        col = MagicMock()
        err = ServerSelectionTimeoutError("no servers available")
        for method in ("find_one", "insert_one", "replace_one", "update_one", "find_one_and_update"):
            setattr(col, method, AsyncMock(side_effect=err))
        col.find.side_effect = err
        return col


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
async def mock_db():
    """Patch the MongoDB lifecycle for every test."""
    with (
        patch("fishspot.core.database.connect_to_mongo", new_callable=AsyncMock),
        patch("fishspot.core.database.close_mongo_connection", new_callable=AsyncMock),
    ):
        import fishspot.core.database as db_module

        original_client = db_module.db_client.client
        original_db = db_module.db_client.db

        db_module.db_client.client = None
        db_module.db_client.db = None

        yield

        db_module.db_client.client = original_client
        db_module.db_client.db = original_db


@pytest.fixture()
def fake_db():
    return FakeDB()


@pytest.fixture()
def store(fake_db):
    from fishspot.core.store import DocumentStore

    return DocumentStore(fake_db)


@pytest.fixture()
def broken_store():
    from fishspot.core.store import DocumentStore

    return DocumentStore(BrokenDB())


@pytest.fixture()
def clock():
    return lambda: FROZEN_NOW


@pytest.fixture()
async def client(fake_db):
    """
    HTTPX async test client wired to the FastAPI app with FakeDB and a
    frozen clock.
    """
    from fishspot.core.database import get_db
    from fishspot.core.rate_limit import limiter
    from fishspot.main import app
    from fishspot.routes.deps import get_clock

    limiter.reset()
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FROZEN_NOW)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def register(client, email="angler@example.com", display_name="Juan Angler", password="secret123"):
    """Register a user and return (auth headers, user json)."""
    r = await client.post(
        "/auth/register",
        json={"email": email, "display_name": display_name, "password": password},
    )
    assert r.status_code == 201, r.text
    data = r.json()
    return {"Authorization": f"Bearer {data['access_token']}"}, data["user"]
