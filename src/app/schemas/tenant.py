from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.app.core.security.validators import MAX_TENANT_SLUG_LENGTH, normalize_slug
from src.app.schemas.membership import MembershipRead
from src.app.schemas.notification import RegistrationFieldRead


def check_slug(v: str) -> str:
    slug = normalize_slug(v)
    if not slug:
        raise ValueError("Slug must contain at least one letter or digit")
    return slug


class TenantCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(
        min_length=1,
        max_length=MAX_TENANT_SLUG_LENGTH,
        json_schema_extra={
            "examples": ["acme", "riverside-runners"],
            "description": "Normalized to lowercase letters, digits and single dashes.",
        },
    )
    description: str | None = Field(None, max_length=2000)
    category: str | None = Field(None, max_length=100)
    location: str | None = Field(None, max_length=200)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        return check_slug(v)


class TenantUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=2000)
    category: str | None = Field(None, max_length=100)
    location: str | None = Field(None, max_length=200)
    logo_url: str | None = Field(None, max_length=500)


class TenantStatusUpdate(BaseModel):
    status: str = Field(pattern="^(ACTIVE|SUSPENDED)$")


class TenantRead(BaseModel):
    id: UUID
    name: str
    slug: str
    description: str | None = None
    logo_url: str | None = None
    category: str | None = None
    location: str | None = None
    status: str
    is_active: bool
    created_by_user_id: UUID | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PublicTenantRead(BaseModel):
    """Tenant fields safe to show to anonymous visitors."""

    id: UUID
    name: str
    slug: str
    description: str | None = None
    logo_url: str | None = None
    category: str | None = None
    location: str | None = None

    model_config = {"from_attributes": True}


class InvitationPreview(BaseModel):
    email: str
    role: str
    status: str
    expires_at: datetime


class JoinInfoResponse(BaseModel):
    tenant: PublicTenantRead
    public_signup: bool
    approval_required: bool
    registration_fields: list[RegistrationFieldRead] = []
    invitation: InvitationPreview | None = None


class TenantContextResponse(BaseModel):
    """Where the current user stands in a tenant and where the UI should send them."""

    tenant: TenantRead
    role: str | None = None
    membership_status: str | None = None
    is_super_admin: bool = False
    enabled_sections: list[str] = []
    next_route: str


class JoinRequest(BaseModel):
    """Join a tenant directly or with an invitation token.

    full_name and phone seed the member profile for direct joins.
    """

    invite_token: str | None = Field(None, min_length=16, max_length=128)
    full_name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=40)
    custom_fields: dict[str, Any] = {}


class JoinResponse(BaseModel):
    membership: MembershipRead
    next_route: str
    created: bool
