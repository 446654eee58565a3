"""
rate_limit.py — Request-level limiter for the public write endpoints.

This is the HTTP throttle (slowapi over the `limits` library), separate
from SpamGuard's per-user content quotas. It keeps a single client from
hammering POST /api/v1/moderation/reports.

Requests are keyed by client IP. Counters live in
settings.rate_limit_storage_uri: the in-process default is per worker, so a
multi-worker deployment points it at a shared redis:// store.
RATE_LIMIT_ENABLED=false switches every limit off (load tests, local seeding).

Routes opt in with:

    @router.post("...")
    @limiter.limit(settings.report_rate_limit)
    async def endpoint(request: Request, ...): ...
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from fishspot.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    enabled=settings.rate_limit_enabled,
)
