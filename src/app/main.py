import secrets
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from src.app.api.middlewares import setup_middlewares
from src.app.api.v1.router import api_router
from src.app.core.config import get_settings
from src.app.core.db import dispose_engine, get_session
from src.app.core.exceptions import Unauthorized, setup_exception_handlers
from src.app.core.logging import get_logger, setup_logging
from src.app.core.rate_limit import limiter

logger = get_logger(__name__)

# Health check caching
_health_cache: dict[str, Any] | None = None
_health_cache_time: float = 0
HEALTH_CACHE_TTL = 10  # seconds


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Registration and login"},
    {"name": "users", "description": "The signed-in user's account and tenants"},
    {"name": "admin", "description": "Super-admin administration endpoints"},
    {"name": "public", "description": "Anonymous tenant directory and join pages"},
    {"name": "tenants", "description": "Tenant profile, context and joining"},
    {"name": "members", "description": "Tenant memberships and member profiles"},
    {"name": "invitations", "description": "Tenant invitation lifecycle"},
    {"name": "files", "description": "Tenant-scoped uploads and downloads"},
    {"name": "announcements", "description": "Tenant announcements"},
    {"name": "posts", "description": "Tenant posts"},
    {"name": "resources", "description": "Tenant resource library"},
    {"name": "groups", "description": "Tenant groups"},
    {"name": "events", "description": "Tenant events and RSVPs"},
    {"name": "programs", "description": "Programs, modules, assignments and enrollments"},
    {"name": "notifications", "description": "The signed-in user's notifications"},
    {"name": "settings", "description": "Tenant settings and registration fields"},
    {"name": "audit", "description": "Tenant audit trail"},
]


def _setup_metrics(app: FastAPI, metrics_api_key: str | None) -> None:
    instrumentator = Instrumentator().instrument(app)

    # Protect /metrics endpoint if API key is configured
    if metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if api_key is None or not secrets.compare_digest(api_key, metrics_api_key):
                raise Unauthorized("Invalid or missing metrics API key")

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant community platform API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middlewares(app, settings)

    app.include_router(api_router)

    _setup_metrics(app, settings.metrics_api_key)

    @app.get("/health", tags=["health"])
    async def health() -> JSONResponse:
        """Database health check, cached for a few seconds."""
        global _health_cache, _health_cache_time

        now = time.time()

        # Return cached result if still valid
        if _health_cache and (now - _health_cache_time) < HEALTH_CACHE_TTL:
            cached_response = _health_cache.copy()
            cached_response["cached"] = True
            cached_response["cache_age_seconds"] = round(now - _health_cache_time, 1)
            status_code = (
                status.HTTP_200_OK
                if cached_response["status"] == "healthy"
                else status.HTTP_503_SERVICE_UNAVAILABLE
            )
            return JSONResponse(content=cached_response, status_code=status_code)

        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "cached": False,
            "timestamp": now,
        }

        try:
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
            health_status["database"] = "healthy"
        except Exception as e:
            logger.warning("Health check database failure", error=str(e))
            health_status["database"] = "unhealthy"
            health_status["status"] = "unhealthy"

        _health_cache = health_status
        _health_cache_time = now

        status_code = (
            status.HTTP_200_OK
            if health_status["status"] == "healthy"
            else status.HTTP_503_SERVICE_UNAVAILABLE
        )
        return JSONResponse(content=health_status, status_code=status_code)

    return app


app = create_app()
