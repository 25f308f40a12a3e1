"""Tenant invitation model."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now
from src.app.models.enums import InvitationStatus, MembershipRole


class Invitation(SQLModel, table=True):
    """Invitation to join a tenant with a given role.

    Only SENT, ACCEPTED and REVOKED are ever stored; EXPIRED is derived
    from expires_at when the invitation is read.
    """

    __tablename__ = "invitations"
    __table_args__ = (Index("ix_invitations_tenant_email", "tenant_id", "email"),)

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True, ondelete="CASCADE")
    email: str = Field(max_length=255)
    phone: str | None = Field(default=None, max_length=40)
    role: str = Field(default=MembershipRole.MEMBER.value, max_length=20)
    status: str = Field(default=InvitationStatus.SENT.value, max_length=20)
    token_hash: str = Field(max_length=64, unique=True, index=True)
    invited_by_user_id: UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )
    expires_at: datetime
    revoked_at: datetime | None = Field(default=None)
    revoked_by_user_id: UUID | None = Field(default=None)
    accepted_at: datetime | None = Field(default=None)
    accepted_by_user_id: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
