"""Tests for the credential endpoint rate limiter."""

import pytest
from starlette.requests import Request

from src.app.core.rate_limit import get_rate_limit_key, limiter

pytestmark = pytest.mark.unit


def make_request(client_host: str, headers: list[tuple[bytes, bytes]] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/v1/auth/login",
        "headers": headers or [],
        "client": (client_host, 12345),
    }
    return Request(scope)


def test_limiter_is_disabled_in_testing():
    assert limiter.enabled is False


def test_key_is_client_ip():
    assert get_rate_limit_key(make_request("198.51.100.7")) == "198.51.100.7"


def test_key_ignores_user_controlled_headers():
    """Rotating a header must not create a fresh bucket."""
    a = make_request("198.51.100.7", [(b"x-tenant-id", b"one"), (b"user-agent", b"a")])
    b = make_request("198.51.100.7", [(b"x-tenant-id", b"two"), (b"user-agent", b"b")])

    assert get_rate_limit_key(a) == get_rate_limit_key(b)
