"""Audit context management using contextvars.

Stores request metadata (IP address, user agent) for use by AuditService,
plus a marker set by the role gate when a super-admin bypassed membership.
"""

from contextvars import ContextVar
from dataclasses import dataclass, replace
from uuid import UUID

_audit_context: ContextVar["AuditContext | None"] = ContextVar("audit_context", default=None)


@dataclass(frozen=True)
class AuditContext:
    """Immutable audit context for the current request."""

    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None
    super_admin_bypass: bool = False
    bypass_tenant_id: UUID | None = None


def set_audit_context(
    ip_address: str | None = None,
    user_agent: str | None = None,
    request_id: str | None = None,
) -> None:
    """Set audit context for the current request."""
    ctx = AuditContext(
        ip_address=ip_address,
        user_agent=user_agent[:500] if user_agent and len(user_agent) > 500 else user_agent,
        request_id=request_id,
    )
    _audit_context.set(ctx)


def mark_super_admin_bypass(tenant_id: UUID) -> None:
    """Flag the current request as a super-admin membership bypass."""
    ctx = _audit_context.get() or AuditContext()
    _audit_context.set(replace(ctx, super_admin_bypass=True, bypass_tenant_id=tenant_id))


def get_audit_context() -> AuditContext | None:
    """Get the current audit context."""
    return _audit_context.get()


def clear_audit_context() -> None:
    """Clear the audit context."""
    _audit_context.set(None)


def get_client_ip(forwarded_for: str | None, client_host: str | None) -> str | None:
    """Extract client IP from X-Forwarded-For header or client host.

    The first address in X-Forwarded-For is the original client.
    """
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return client_host
