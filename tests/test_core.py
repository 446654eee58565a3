"""
test_core.py — Clock normalisation, failure-policy decorator, store adapter.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from fishspot.core.clock import to_instant
from fishspot.core.guard import FailurePolicy, guarded
from fishspot.core.store import DocumentStore, StoreError
from fishspot.models.moderation import ReportOutcome, SpamCheckResult


class TestToInstant:

    def test_naive_treated_as_utc(self):
        assert to_instant(datetime(2026, 3, 14, 12)) == datetime(2026, 3, 14, 12, tzinfo=timezone.utc)

    def test_offset_converted(self):
        manila = timezone(timedelta(hours=8))
        assert to_instant(datetime(2026, 3, 14, 20, tzinfo=manila)).hour == 12

    def test_date(self):
        assert to_instant(date(2026, 3, 14)) == datetime(2026, 3, 14, tzinfo=timezone.utc)

    def test_iso_z(self):
        assert to_instant("2026-03-14T12:00:00Z") == datetime(2026, 3, 14, 12, tzinfo=timezone.utc)

    def test_epoch(self):
        assert to_instant(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, True, "not a date", [], {}])
    def test_unusable(self, value):
        assert to_instant(value) is None


class TestGuarded:

    async def test_fail_open_returns_permissive(self):
        @guarded(FailurePolicy.FAIL_OPEN, SpamCheckResult)
        async def check():
            raise RuntimeError("boom")

        assert (await check()).allowed is True

    async def test_fail_closed_returns_restrictive(self):
        @guarded(FailurePolicy.FAIL_CLOSED, ReportOutcome, message="try again")
        async def submit():
            raise RuntimeError("boom")

        outcome = await submit()
        assert outcome.success is False
        assert outcome.message == "try again"

    async def test_success_passthrough(self):
        @guarded(FailurePolicy.FAIL_OPEN, SpamCheckResult)
        async def check():
            return SpamCheckResult(allowed=False, reason="no")

        assert (await check()).reason == "no"

    def test_report_outcome_fallbacks_use_shared_messages(self):
        from fishspot.models.moderation import SUBMITTED_MESSAGE
        from fishspot.services.moderation_flagger import SUBMITTED_MESSAGE as flagger_message

        assert ReportOutcome.permissive() == ReportOutcome(success=True, message=SUBMITTED_MESSAGE)
        assert flagger_message is SUBMITTED_MESSAGE
        assert ReportOutcome.restrictive("x").success is False


class TestDocumentStore:

    async def test_unavailable(self):
        store = DocumentStore(None)
        assert store.available is False
        with pytest.raises(StoreError):
            await store.get("fishing_spots", "x")

    async def test_driver_error_translated(self, broken_store):
        with pytest.raises(StoreError):
            await broken_store.find_by("fishing_spots", user_id="u1")

    async def test_insert_and_get(self, store):
        doc_id = await store.insert("fishing_spots", {"name": "Bay"})
        assert isinstance(doc_id, str)
        assert (await store.get("fishing_spots", doc_id))["name"] == "Bay"

    async def test_update_missing_returns_false(self, store):
        assert await store.update("fishing_spots", "nope", set_fields={"a": 1}) is False

    async def test_find_by_sorted_desc_and_limited(self, store):
        for day in (1, 3, 2):
            await store.insert("catch_reports", {
                "spot_id": "s", "created_at": datetime(2026, 3, day, tzinfo=timezone.utc),
            })
        docs = await store.find_by("catch_reports", sort="created_at", limit=2, spot_id="s")
        assert [d["created_at"].day for d in docs] == [3, 2]

    async def test_find_by_exclude_applied_before_limit(self, store):
        await store.insert("fishing_spots", {"name": "old", "created_at": datetime(2026, 3, 1, tzinfo=timezone.utc)})
        await store.insert("fishing_spots", {
            "name": "hidden", "is_hidden": True, "created_at": datetime(2026, 3, 2, tzinfo=timezone.utc),
        })
        docs = await store.find_by("fishing_spots", sort="created_at", limit=1, exclude={"is_hidden": True})
        assert [d["name"] for d in docs] == ["old"]


class TestIndexes:

    async def test_ensure_indexes_creates_each(self):
        from unittest.mock import AsyncMock, MagicMock

        from fishspot.core.database import INDEXES, ensure_indexes

        collections = {}

        def collection(name):
            return collections.setdefault(name, MagicMock(create_index=AsyncMock()))

        db = MagicMock()
        db.__getitem__.side_effect = collection
        await ensure_indexes(db)

        calls = sum(c.create_index.await_count for c in collections.values())
        assert calls == len(INDEXES)
        collections["users"].create_index.assert_awaited_once_with([("email", 1)], unique=True)

    def test_redact_uri(self):
        from fishspot.core.database import _redact_uri

        assert _redact_uri("mongodb://root:pw@localhost:27017/x") == "mongodb://<redacted>@localhost:27017/x"
