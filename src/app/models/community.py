"""Tenant community features: groups, events and programs."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from src.app.models.base import TenantScopedModel
from src.app.models.enums import MembershipRole, ProgramStatus, RsvpStatus


class Group(TenantScopedModel, table=True):
    __tablename__ = "groups"

    name: str = Field(max_length=120)
    description: str | None = Field(default=None, max_length=2000)
    is_private: bool = Field(default=False)
    created_by_user_id: UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )


class GroupMembership(TenantScopedModel, table=True):
    __tablename__ = "group_memberships"
    __table_args__ = (UniqueConstraint("group_id", "user_id", name="uq_group_memberships"),)

    group_id: UUID = Field(foreign_key="groups.id", index=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE")
    role: str = Field(default=MembershipRole.MEMBER.value, max_length=20)


class Event(TenantScopedModel, table=True):
    __tablename__ = "events"

    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=4000)
    starts_at: datetime
    ends_at: datetime | None = Field(default=None)
    location: str | None = Field(default=None, max_length=200)
    is_online: bool = Field(default=False)
    meeting_link: str | None = Field(default=None, max_length=1000)
    thumbnail_url: str | None = Field(default=None, max_length=1000)
    thumbnail_file_id: UUID | None = Field(default=None)
    host_user_id: UUID | None = Field(default=None, foreign_key="users.id", ondelete="SET NULL")


class EventRsvp(TenantScopedModel, table=True):
    __tablename__ = "event_rsvps"
    __table_args__ = (
        UniqueConstraint("tenant_id", "event_id", "user_id", name="uq_event_rsvps"),
    )

    event_id: UUID = Field(foreign_key="events.id", index=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE")
    status: str = Field(default=RsvpStatus.GOING.value, max_length=20)


class Program(TenantScopedModel, table=True):
    __tablename__ = "programs"

    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=4000)
    status: str = Field(default=ProgramStatus.ACTIVE.value, max_length=20)
    created_by_user_id: UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )


class ProgramModule(TenantScopedModel, table=True):
    __tablename__ = "program_modules"

    program_id: UUID = Field(foreign_key="programs.id", index=True, ondelete="CASCADE")
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=4000)
    order: int = Field(default=0)


class ProgramAssignment(TenantScopedModel, table=True):
    """A program made available to a group."""

    __tablename__ = "program_assignments"
    __table_args__ = (
        UniqueConstraint("tenant_id", "program_id", "group_id", name="uq_program_assignments"),
    )

    program_id: UUID = Field(foreign_key="programs.id", ondelete="CASCADE")
    group_id: UUID = Field(foreign_key="groups.id", ondelete="CASCADE")


class ProgramEnrollment(TenantScopedModel, table=True):
    __tablename__ = "program_enrollments"
    __table_args__ = (
        UniqueConstraint("tenant_id", "program_id", "user_id", name="uq_program_enrollments"),
    )

    program_id: UUID = Field(foreign_key="programs.id", index=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE")
    progress_pct: int = Field(default=0)
