"""Tenant content: announcements, posts and resources."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Column, Text
from sqlmodel import Field

from src.app.models.base import TenantScopedModel
from src.app.models.enums import ResourceType, Visibility


class Announcement(TenantScopedModel, table=True):
    __tablename__ = "announcements"

    title: str = Field(max_length=200)
    content: str = Field(sa_column=Column(Text, nullable=False))
    is_pinned: bool = Field(default=False)
    visibility: str = Field(default=Visibility.MEMBERS.value, max_length=20)
    author_user_id: UUID | None = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
    # [{file_id, file_name, mime_type, size}]
    attachments: list[dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )


class Post(TenantScopedModel, table=True):
    __tablename__ = "posts"

    title: str = Field(max_length=200)
    content: str = Field(sa_column=Column(Text, nullable=False))
    visibility: str = Field(default=Visibility.MEMBERS.value, max_length=20)
    is_published: bool = Field(default=True)
    published_at: datetime | None = Field(default=None)
    author_user_id: UUID | None = Field(default=None, foreign_key="users.id", ondelete="SET NULL")


class Resource(TenantScopedModel, table=True):
    """A link or uploaded file, optionally filed under a group, program or module."""

    __tablename__ = "resources"

    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    type: str = Field(default=ResourceType.LINK.value, max_length=20)
    url: str | None = Field(default=None, max_length=1000)
    file_id: UUID | None = Field(default=None)
    file_name: str | None = Field(default=None, max_length=255)
    mime_type: str | None = Field(default=None, max_length=120)
    size: int | None = Field(default=None)
    thumbnail_url: str | None = Field(default=None, max_length=1000)
    thumbnail_file_id: UUID | None = Field(default=None)
    folder: str | None = Field(default=None, max_length=120)
    group_id: UUID | None = Field(default=None, foreign_key="groups.id", ondelete="SET NULL")
    program_id: UUID | None = Field(default=None, foreign_key="programs.id", ondelete="SET NULL")
    module_id: UUID | None = Field(
        default=None, foreign_key="program_modules.id", ondelete="SET NULL"
    )
    created_by_user_id: UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )
