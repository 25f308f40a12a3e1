"""Membership and member profile schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

_ROLE_PATTERN = "^(OWNER|ADMIN|MODERATOR|MEMBER)$"
_STATUS_PATTERN = "^(PENDING|ACTIVE|SUSPENDED|BANNED)$"


class MembershipRead(BaseModel):
    id: UUID
    tenant_id: UUID
    user_id: UUID
    role: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MemberRead(MembershipRead):
    """Membership joined with the member's account details."""

    email: str | None = None
    full_name: str | None = None


class MemberUpdate(BaseModel):
    role: str | None = Field(None, pattern=_ROLE_PATTERN)
    status: str | None = Field(None, pattern=_STATUS_PATTERN)

    @model_validator(mode="after")
    def require_change(self) -> "MemberUpdate":
        if self.role is None and self.status is None:
            raise ValueError("Provide role or status")
        return self


class MemberProfileRead(BaseModel):
    tenant_id: UUID
    user_id: UUID
    full_name: str | None = None
    phone: str | None = None
    custom_fields: dict[str, Any] = {}
    updated_at: datetime

    model_config = {"from_attributes": True}


class MemberProfileUpdate(BaseModel):
    full_name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=40)
    custom_fields: dict[str, Any] | None = None
