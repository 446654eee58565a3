"""
FishSpot API — Application entry point.

Bootstraps FastAPI, wires up middleware, registers route groups,
and manages the MongoDB connection lifecycle.

Run locally:
    uvicorn fishspot.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from fishspot.core.config import settings
from fishspot.core.database import close_mongo_connection, connect_to_mongo
from fishspot.core.rate_limit import limiter
from fishspot.core.store import StoreError
from fishspot.routes.auth import router as auth_router
from fishspot.routes.health import router as health_router
from fishspot.routes.map import router as map_router
from fishspot.routes.moderation import router as moderation_router
from fishspot.routes.spots import router as spots_router
from fishspot.routes.validation import router as validation_router

# ─── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ─── Lifespan ──────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting FishSpot API (env: %s)", settings.environment)
    await connect_to_mongo()
    yield
    logger.info("Shutting down FishSpot API")
    await close_mongo_connection()


# ─── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="FishSpot API",
    description=(
        "Fishing spots and catch reports for Leyte and Samar, with anti-spam "
        "limits, duplicate detection and community moderation."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)


# ─── Rate limiting ─────────────────────────────────────────────────────────────
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# ─── Store errors ──────────────────────────────────────────────────────────────
# Anything that reaches a route uncaught (fail-open checks never let it)
# means the database is unreachable.
@app.exception_handler(StoreError)
async def _store_error_handler(request: Request, exc: StoreError):
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


# ─── Middleware ─────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─── Routes ────────────────────────────────────────────────────────────────────
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(auth_router)
app.include_router(spots_router)
app.include_router(moderation_router)
app.include_router(map_router)
app.include_router(validation_router)


@app.get("/", tags=["root"])
async def root():
    """API root — basic metadata."""
    return {
        "name": "FishSpot API",
        "version": "0.1.0",
        "status": "running",
        "environment": settings.environment,
        "docs": "/docs",
    }
