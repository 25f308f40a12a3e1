"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import RequestResponseEndpoint

from src.app.core.config import Settings

from .logging_context import logging_context_middleware
from .request_context import RequestContextMiddleware
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "setup_middlewares",
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
    "logging_context_middleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Configure all application middlewares.

    Starlette wraps in reverse registration order, so the last one added
    runs first on a request. Effective order, outermost first:
    correlation id, CORS, security headers, logging context, request context.
    """
    # Request context - audit metadata for the current request
    app.add_middleware(RequestContextMiddleware)

    # Logging context - binds request_id to structlog context
    @app.middleware("http")
    async def _logging_context(request: Request, call_next: RequestResponseEndpoint) -> Response:
        return await logging_context_middleware(request, call_next)

    # Security headers (Helmet-style)
    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=None
        if settings.enable_openapi
        else SecurityHeadersMiddleware.PRODUCTION_CSP,
    )

    # CORS - handle cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    # Correlation ID - generates/propagates X-Request-ID
    app.add_middleware(CorrelationIdMiddleware)
