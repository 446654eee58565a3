"""
GET /health — liveness plus store reachability.

`status` is "ok" whenever the process answers. `database` tells the app
whether posting will work: while it is "disconnected" spot checks still
pass (they fail open) but persisting a spot or filing a report does not.
`region` names the serviced map area so the app can show it in its banner.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from fishspot.core import database as db_module
from fishspot.core.config import settings
from fishspot.models.policy import SERVICED_REGION, MapBounds

logger = logging.getLogger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str  # "connected" | "disconnected"
    environment: str
    region: MapBounds


async def _ping() -> bool:
    # Read through the module so tests can swap db_client
    client = db_module.db_client.client
    if client is None:
        return False
    try:
        await client.admin.command("ping")
    except Exception as exc:
        logger.warning("MongoDB ping failed: %s", exc)
        return False
    return True


@router.get("", response_model=HealthResponse, summary="API health check")
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        database="connected" if await _ping() else "disconnected",
        environment=settings.environment,
        region=SERVICED_REGION,
    )
