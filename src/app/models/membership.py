"""Tenant membership and per-tenant member profile."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid7

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now
from src.app.models.enums import MembershipRole, MembershipStatus


class Membership(SQLModel, table=True):
    """At most one row per (tenant, user); writes go through upserts."""

    __tablename__ = "memberships"
    __table_args__ = (UniqueConstraint("tenant_id", "user_id", name="uq_memberships_tenant_user"),)

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    role: str = Field(default=MembershipRole.MEMBER.value, max_length=20)
    status: str = Field(default=MembershipStatus.ACTIVE.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_active(self) -> bool:
        return self.status == MembershipStatus.ACTIVE.value


class MemberProfile(SQLModel, table=True):
    __tablename__ = "member_profiles"
    __table_args__ = (
        UniqueConstraint("tenant_id", "user_id", name="uq_member_profiles_tenant_user"),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE")
    full_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=40)
    custom_fields: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
