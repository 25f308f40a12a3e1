"""Tenant registry and per-tenant settings."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.app.core.security.validators import MAX_TENANT_SLUG_LENGTH
from src.app.models.base import utc_now
from src.app.models.enums import TenantStatus

DEFAULT_ENABLED_SECTIONS = ["announcements", "resources", "groups", "events", "programs"]


class Tenant(SQLModel, table=True):
    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    name: str = Field(max_length=100, index=True)
    slug: str = Field(max_length=MAX_TENANT_SLUG_LENGTH, unique=True, index=True)
    description: str | None = Field(default=None, max_length=2000)
    logo_url: str | None = Field(default=None, max_length=500)
    logo_file_id: UUID | None = Field(default=None)
    category: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=200)
    status: str = Field(default=TenantStatus.ACTIVE.value, max_length=20, index=True)
    created_by_user_id: UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE.value


class TenantSettings(SQLModel, table=True):
    """Join policy and feature switches. One row per tenant, created lazily."""

    __tablename__ = "tenant_settings"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", unique=True, ondelete="CASCADE")
    public_signup: bool = Field(default=True)
    approval_required: bool = Field(default=False)
    registration_fields_enabled: bool = Field(default=True)
    enabled_sections: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ENABLED_SECTIONS),
        sa_column=Column(JSON, nullable=False),
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
