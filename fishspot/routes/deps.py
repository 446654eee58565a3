"""
deps.py — FastAPI dependency providers for the moderation services.

Every service is built per request from the injected database handle, the
clock and the policy thresholds. Tests override get_db (FakeDB) and
get_clock (frozen time) through app.dependency_overrides:

    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_clock] = lambda: lambda: FROZEN_NOW
"""

from fastapi import Depends

from fishspot.core.clock import Clock, utc_now
from fishspot.core.config import settings
from fishspot.core.database import get_db
from fishspot.core.store import DocumentStore
from fishspot.models.policy import SpamLimits
from fishspot.services.duplicate_detector import DuplicateDetector
from fishspot.services.moderation_flagger import ModerationFlagger
from fishspot.services.spam_guard import ActivityStore, SpamGuard
from fishspot.services.submission import CatchSubmission, SpotSubmission


def get_store(db=Depends(get_db)) -> DocumentStore:
    return DocumentStore(db)


def get_clock() -> Clock:
    return utc_now


def get_spam_limits() -> SpamLimits:
    return settings.spam_limits()


def get_spam_guard(
    store: DocumentStore = Depends(get_store),
    limits: SpamLimits = Depends(get_spam_limits),
    clock: Clock = Depends(get_clock),
) -> SpamGuard:
    return SpamGuard(ActivityStore(store), limits, clock)


def get_spot_submission(
    store: DocumentStore = Depends(get_store),
    guard: SpamGuard = Depends(get_spam_guard),
    limits: SpamLimits = Depends(get_spam_limits),
    clock: Clock = Depends(get_clock),
) -> SpotSubmission:
    return SpotSubmission(store, guard, DuplicateDetector(store, limits), clock=clock)


def get_catch_submission(
    store: DocumentStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> CatchSubmission:
    return CatchSubmission(store, clock)


def get_flagger(
    store: DocumentStore = Depends(get_store),
    limits: SpamLimits = Depends(get_spam_limits),
    clock: Clock = Depends(get_clock),
) -> ModerationFlagger:
    return ModerationFlagger(store, ActivityStore(store), limits, clock)
