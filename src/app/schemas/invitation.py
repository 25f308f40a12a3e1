"""Invitation schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.app.schemas.membership import MembershipRead


class InvitationCreate(BaseModel):
    email: EmailStr
    phone: str | None = Field(None, max_length=40)
    role: Literal["ADMIN", "MODERATOR", "MEMBER"] = "MEMBER"
    # Clamped to the configured min/max; omitted means the default TTL.
    expires_in_days: int | None = None


class InvitationRead(BaseModel):
    """Admin view of an invitation. status is derived at read time."""

    id: UUID
    tenant_id: UUID
    email: str
    phone: str | None = None
    role: str
    status: str
    invited_by_user_id: UUID | None = None
    expires_at: datetime
    revoked_at: datetime | None = None
    accepted_at: datetime | None = None
    created_at: datetime


class InvitationWithToken(InvitationRead):
    """Returned only from create and resend; the token is not stored."""

    token: str


class AcceptInvitationRequest(BaseModel):
    token: str = Field(min_length=16, max_length=128)


class AcceptInvitationResponse(BaseModel):
    invitation: InvitationRead
    membership: MembershipRead
