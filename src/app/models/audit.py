"""Audit log model for tracking privileged actions."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid7

from sqlalchemy import JSON, Column, Index
from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now


class AuditAction(str, Enum):
    """Audit action types for type-safe logging."""

    # Auth
    USER_LOGIN = "USER_LOGIN"
    USER_REGISTER = "USER_REGISTER"

    # Tenant
    TENANT_CREATE = "TENANT_CREATE"
    TENANT_UPDATE = "TENANT_UPDATE"
    TENANT_STATUS_UPDATE = "TENANT_STATUS_UPDATE"
    TENANT_DELETE = "TENANT_DELETE"
    TENANT_JOIN = "TENANT_JOIN"
    SETTINGS_UPDATE = "SETTINGS_UPDATE"

    # Membership
    TENANT_MEMBER_ROLE_STATUS_UPDATED = "TENANT_MEMBER_ROLE_STATUS_UPDATED"

    # Invitations
    INVITATION_CREATE = "INVITATION_CREATE"
    INVITATION_RESEND = "INVITATION_RESEND"
    INVITATION_REVOKE = "INVITATION_REVOKE"
    INVITATION_ACCEPT = "INVITATION_ACCEPT"

    # Content
    ANNOUNCEMENT_CREATE = "ANNOUNCEMENT_CREATE"
    FILE_UPLOAD = "FILE_UPLOAD"

    # Super-admin
    SUPER_ADMIN_PROMOTE_USER_TO_TENANT = "SUPER_ADMIN_PROMOTE_USER_TO_TENANT"
    SUPER_ADMIN_USER_ROLE_STATUS_UPDATED = "SUPER_ADMIN_USER_ROLE_STATUS_UPDATED"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class AuditLog(SQLModel, table=True):
    """Append-only audit record.

    tenant_id is a plain column rather than a foreign key so history
    survives tenant deletion.
    """

    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_tenant_created", "tenant_id", "created_at"),
        Index("ix_audit_logs_actor_created", "actor_user_id", "created_at"),
        Index("ix_audit_logs_action_created", "action", "created_at"),
        Index("ix_audit_logs_entity", "entity_type", "entity_id"),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)

    # Context
    tenant_id: UUID | None = Field(default=None)
    actor_user_id: UUID | None = Field(default=None)

    # Action details
    action: str = Field(max_length=60)
    entity_type: str = Field(max_length=50)
    entity_id: UUID | None = Field(default=None)

    details: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
    )

    # Request metadata
    ip_address: str | None = Field(max_length=45, default=None)
    user_agent: str | None = Field(max_length=500, default=None)
    request_id: str | None = Field(max_length=64, default=None)

    # Result
    status: str = Field(default=AuditStatus.SUCCESS.value, max_length=20)
    error_message: str | None = Field(max_length=1000, default=None)

    created_at: datetime = Field(default_factory=utc_now)
