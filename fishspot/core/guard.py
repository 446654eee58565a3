"""
guard.py — Fail-open / fail-closed policy for checks that hit the store.

Two error policies coexist in the moderation core:

  FAIL_OPEN   — pre-submission checks (spam limits, duplicate detection).
                A backend hiccup must not block legitimate posts, so the
                check degrades to its permissive result.
  FAIL_CLOSED — report submission. Silently dropping an abuse report is
                worse than asking the user to retry, so the call degrades
                to its restrictive result with a user-facing message.

Usage:
    @guarded(FailurePolicy.FAIL_OPEN, SpamCheckResult)
    async def can_user_create_spot(...) -> SpamCheckResult: ...

The result type supplies both fallbacks through two classmethods,
permissive() and restrictive(message), so the policy lives in the
decorator arguments rather than in a try/except inside every check.
"""

import functools
import logging
from enum import Enum
from typing import Awaitable, Callable, Protocol, TypeVar

logger = logging.getLogger(__name__)


class FailurePolicy(str, Enum):
    FAIL_OPEN = "fail_open"
    FAIL_CLOSED = "fail_closed"


class GuardedResult(Protocol):
    @classmethod
    def permissive(cls) -> "GuardedResult": ...

    @classmethod
    def restrictive(cls, message: str) -> "GuardedResult": ...


R = TypeVar("R")


def guarded(
    policy: FailurePolicy,
    result_type: type,
    *,
    message: str = "",
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    """
    Wrap an async check so any exception maps to the policy's fallback.

    *message* is the user-facing text for FAIL_CLOSED results; FAIL_OPEN
    results carry no message.
    """

    def decorator(fn: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs) -> R:
            try:
                return await fn(*args, **kwargs)
            except Exception as exc:
                if policy is FailurePolicy.FAIL_OPEN:
                    logger.warning("%s failed, allowing (fail-open): %s", fn.__qualname__, exc)
                    return result_type.permissive()
                logger.error("%s failed (fail-closed): %s", fn.__qualname__, exc)
                return result_type.restrictive(message)

        wrapper.failure_policy = policy
        return wrapper

    return decorator
