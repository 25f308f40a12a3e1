"""Security headers middleware (Helmet-style)."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

# Responses that may carry credentials or invitation tokens
_NO_CACHE_PREFIXES = ("/api/v1/auth/", "/api/v1/users/me")
_NO_CACHE_SEGMENTS = ("/invitations",)


def is_sensitive_path(path: str) -> bool:
    return path.startswith(_NO_CACHE_PREFIXES) or any(s in path for s in _NO_CACHE_SEGMENTS)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add fixed security headers to every response, plus no-store on sensitive paths."""

    # Swagger UI needs inline scripts and CDN assets
    DEFAULT_CSP = (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
        "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
        "img-src 'self' data: cdn.jsdelivr.net; "
        "frame-ancestors 'none'"
    )
    PRODUCTION_CSP = "default-src 'self'; frame-ancestors 'none'"

    BASE_HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "X-Permitted-Cross-Domain-Policies": "none",
    }

    def __init__(self, app: ASGIApp, content_security_policy: str | None = None):
        super().__init__(app)
        self.headers = {
            **self.BASE_HEADERS,
            "Content-Security-Policy": content_security_policy or self.DEFAULT_CSP,
        }

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header, value in self.headers.items():
            response.headers.setdefault(header, value)

        if is_sensitive_path(request.url.path):
            response.headers["Cache-Control"] = "no-store"
            response.headers["Pragma"] = "no-cache"
        return response
