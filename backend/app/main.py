"""
app/main.py
────────────
FastAPI application factory.

All view logic lives in ``app/api/v1/endpoints/``.
This file is intentionally slim — it wires together logging, middleware,
routers, error translation and lifecycle events only.

API Layout
----------
GET  /                                Health check + gateway readiness
GET  /api/v1/entrepreneurs/           Directory (search / state / district / category)
GET  /api/v1/entrepreneurs/{id}       Profile
POST /api/v1/entrepreneurs/           Register
GET  /api/v1/stories/                 Success stories (newest first)
GET  /api/v1/stories/{id}             Story detail
POST /api/v1/stories/                 Publish a story
GET  /api/v1/resources/               Training resources
POST /api/v1/resources/               Add a resource
GET  /api/v1/community/               Community board (newest first)
POST /api/v1/community/               Post a message
GET  /api/v1/dashboard/               Panchayat progress dashboard
GET  /api/v1/categories/              Category labels and colours

OpenAPI docs
------------
- Swagger UI:  http://localhost:8000/docs
- ReDoc:       http://localhost:8000/redoc
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import AsyncGenerator, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.dependencies import get_coordinator
from app.api.v1.router import api_router
from core.config import get_settings
from core.errors import FetchFailure, GatewayNotReady, MutationFailure
from data_engine.coordinator import DataCoordinator
from data_engine.query_cache import QueryCache
from data_engine.supabase_gateway import SupabaseGateway
from schemas.views import HealthResponse

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ──────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application startup and shutdown logic.

    Startup:  Build the gateway, the process-wide query cache and the
              coordinator that owns them.  Missing credentials leave the
              gateway "not ready" for good.  A failed connect is logged and
              retried in the background with a doubling delay; views degrade
              until it succeeds.
    Shutdown: Cancel a reconnect task that is still running.  The HTTP
              client itself is managed by supabase-py.
    """
    logger.info(
        "Starting %s v%s (debug=%s)",
        settings.APP_TITLE,
        settings.APP_VERSION,
        settings.DEBUG,
    )
    gateway = SupabaseGateway(settings)
    reconnect: Optional["asyncio.Task[bool]"] = None
    if await gateway.connect():
        logger.info("Supabase connection verified")
    elif settings.supabase_configured:
        reconnect = asyncio.create_task(gateway.keep_connecting())
    app.state.coordinator = DataCoordinator(
        gateway, QueryCache(), target=settings.PANCHAYAT_TARGET
    )

    yield  # ← application runs here

    if reconnect is not None and not reconnect.done():
        reconnect.cancel()
        with suppress(asyncio.CancelledError):
            await reconnect
    logger.info("Shutting down %s", settings.APP_TITLE)


# ── App factory ───────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    description=settings.APP_DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Error translation ─────────────────────────────────────────────────────────


@app.exception_handler(GatewayNotReady)
async def _gateway_not_ready(request: Request, exc: GatewayNotReady) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(FetchFailure)
async def _fetch_failure(request: Request, exc: FetchFailure) -> JSONResponse:
    if exc.not_found:
        return JSONResponse(status_code=404, content={"detail": str(exc.__cause__)})
    return JSONResponse(status_code=503, content={"detail": f"Could not load data: {exc.detail}"})


@app.exception_handler(MutationFailure)
async def _mutation_failure(request: Request, exc: MutationFailure) -> JSONResponse:
    return JSONResponse(status_code=502, content={"detail": str(exc)})


# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(api_router, prefix="/api/v1")

# ── Root health-check ─────────────────────────────────────────────────────────


@app.get("/", response_model=HealthResponse, tags=["health"], summary="Health check")
def health_check(coordinator: DataCoordinator = Depends(get_coordinator)) -> HealthResponse:
    """
    Lightweight liveness probe.

    Returns:
        Status, current API version and whether the data gateway is ready.
    """
    return HealthResponse(
        status="ok",
        version=settings.APP_VERSION,
        gateway_ready=coordinator.is_ready,
    )
