"""Announcement, post and resource schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

_VISIBILITY = "^(PUBLIC|MEMBERS)$"


class AttachmentRef(BaseModel):
    file_id: UUID
    file_name: str | None = None
    mime_type: str | None = None
    size: int | None = None


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    is_pinned: bool = False
    visibility: str = Field("MEMBERS", pattern=_VISIBILITY)
    attachments: list[AttachmentRef] = []


class AnnouncementUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = Field(None, min_length=1)
    is_pinned: bool | None = None
    visibility: str | None = Field(None, pattern=_VISIBILITY)
    attachments: list[AttachmentRef] | None = None


class AnnouncementRead(BaseModel):
    id: UUID
    tenant_id: UUID
    title: str
    content: str
    is_pinned: bool
    visibility: str
    author_user_id: UUID | None = None
    attachments: list[dict[str, Any]] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    visibility: str = Field("MEMBERS", pattern=_VISIBILITY)
    is_published: bool = True


class PostUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = Field(None, min_length=1)
    visibility: str | None = Field(None, pattern=_VISIBILITY)
    is_published: bool | None = None


class PostRead(BaseModel):
    id: UUID
    tenant_id: UUID
    title: str
    content: str
    visibility: str
    is_published: bool
    published_at: datetime | None = None
    author_user_id: UUID | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ResourceCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    type: str = Field("link", pattern="^(link|file)$")
    url: str | None = Field(None, max_length=1000)
    file_id: UUID | None = None
    thumbnail_file_id: UUID | None = None
    thumbnail_url: str | None = Field(None, max_length=1000)
    folder: str | None = Field(None, max_length=120)
    group_id: UUID | None = None
    program_id: UUID | None = None
    module_id: UUID | None = None

    @model_validator(mode="after")
    def check_target(self) -> "ResourceCreate":
        if self.type == "link" and not self.url:
            raise ValueError("A link resource needs a url")
        if self.type == "file" and self.file_id is None:
            raise ValueError("A file resource needs a file_id")
        return self


class ResourceUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    url: str | None = Field(None, max_length=1000)
    thumbnail_url: str | None = Field(None, max_length=1000)
    folder: str | None = Field(None, max_length=120)
    group_id: UUID | None = None
    program_id: UUID | None = None
    module_id: UUID | None = None


class ResourceRead(BaseModel):
    id: UUID
    tenant_id: UUID
    title: str
    description: str | None = None
    type: str
    url: str | None = None
    file_id: UUID | None = None
    file_name: str | None = None
    mime_type: str | None = None
    size: int | None = None
    thumbnail_url: str | None = None
    thumbnail_file_id: UUID | None = None
    folder: str | None = None
    group_id: UUID | None = None
    program_id: UUID | None = None
    module_id: UUID | None = None
    created_by_user_id: UUID | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
