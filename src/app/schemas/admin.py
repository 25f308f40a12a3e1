"""Super-admin request and response schemas."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.app.schemas.audit import AuditLogRead
from src.app.schemas.membership import MembershipRead
from src.app.schemas.tenant import TenantRead, check_slug


class AdminOverview(BaseModel):
    total_users: int
    total_tenants: int
    active_tenants: int
    active_memberships: int
    recent_activity: list[AuditLogRead] = []


class AdminUserUpdate(BaseModel):
    global_role: str | None = Field(None, pattern="^(SUPER_ADMIN|USER)$")
    status: str | None = Field(None, pattern="^(ACTIVE|SUSPENDED|BANNED)$")

    @model_validator(mode="after")
    def require_change(self) -> "AdminUserUpdate":
        if self.global_role is None and self.status is None:
            raise ValueError("Provide global_role or status")
        return self


class PromoteUserRequest(BaseModel):
    """Make a user the manager of a tenant.

    Either existing_tenant_id, or name plus slug for a new tenant.
    """

    existing_tenant_id: UUID | None = None
    name: str | None = Field(None, min_length=1, max_length=100)
    slug: str | None = Field(None, min_length=1, max_length=80)
    description: str | None = Field(None, max_length=2000)
    membership_role: Literal["OWNER", "ADMIN"] = "OWNER"

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str | None) -> str | None:
        return check_slug(v) if v is not None else None

    @model_validator(mode="after")
    def require_target(self) -> "PromoteUserRequest":
        if self.existing_tenant_id is None and not (self.name and self.slug):
            raise ValueError("Provide existing_tenant_id or both name and slug")
        return self


class PromoteUserResponse(BaseModel):
    tenant: TenantRead
    membership: MembershipRead
    tenant_created: bool
