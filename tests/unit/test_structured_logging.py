"""Tests for structured logging context."""

from unittest.mock import AsyncMock
from uuid import uuid7

import pytest
import structlog
from structlog.testing import CapturingLogger, capture_logs

from src.app.core.config import get_settings
from src.app.core.exceptions import NotFound
from src.app.core.logging import (
    bind_request_context,
    bind_tenant_context,
    bind_user_context,
    clear_request_context,
)
from src.app.models import StoredFile
from src.app.services.file_service import FileService

pytestmark = pytest.mark.unit


@pytest.fixture
def capturing_logger():
    """Create a capturing logger for tests."""
    cap_logger = CapturingLogger()

    # Save original configuration to restore later
    old_config = structlog.get_config()

    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )

    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)


def test_bind_request_context(capturing_logger):
    bind_request_context("test-request-123")
    structlog.get_logger().info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["request_id"] == "test-request-123"


def test_bind_request_context_with_none(capturing_logger):
    """Test that None request_id is not bound."""
    bind_request_context(None)
    structlog.get_logger().info("test message")

    assert "request_id" not in capturing_logger.calls[0].kwargs


def test_bind_user_context_omits_email_by_default(capturing_logger):
    """Emails stay out of logs unless log_user_emails is enabled."""
    user_id = uuid7()

    bind_user_context(user_id, "test@example.com")
    structlog.get_logger().info("test message")

    kwargs = capturing_logger.calls[0].kwargs
    assert kwargs["user_id"] == str(user_id)
    assert "user_email" not in kwargs


def test_bind_user_context_with_email_enabled(capturing_logger, monkeypatch):
    monkeypatch.setattr(get_settings(), "log_user_emails", True)

    bind_user_context(uuid7(), "test@example.com")
    structlog.get_logger().info("test message")

    assert capturing_logger.calls[0].kwargs["user_email"] == "test@example.com"


def test_bind_tenant_context(capturing_logger):
    tenant_id = uuid7()

    bind_tenant_context(tenant_id)
    structlog.get_logger().info("scoped")

    assert capturing_logger.calls[0].kwargs["tenant_id"] == str(tenant_id)


def test_clear_request_context(capturing_logger):
    bind_request_context("req-1")
    bind_tenant_context(uuid7())
    clear_request_context()
    structlog.get_logger().info("after clear")

    kwargs = capturing_logger.calls[0].kwargs
    assert "request_id" not in kwargs
    assert "tenant_id" not in kwargs


async def test_cross_tenant_file_access_is_logged():
    """Denied cross-tenant reads leave a warning with both ids."""
    owner_tenant, other_tenant = uuid7(), uuid7()
    stored = StoredFile(
        tenant_id=owner_tenant,
        purpose="resource",
        filename="f",
        original_filename="f",
        content_type="text/plain",
        size=1,
        chunk_size=1,
    )
    store = AsyncMock()
    store.get_metadata.return_value = stored

    with capture_logs() as logs, pytest.raises(NotFound):
        await FileService(store, AsyncMock()).get_scoped(other_tenant, stored.id)

    warning = next(e for e in logs if e["event"] == "Cross-tenant file access denied")
    assert warning["log_level"] == "warning"
    assert warning["requested_tenant_id"] == str(other_tenant)
    assert warning["file_id"] == str(stored.id)
