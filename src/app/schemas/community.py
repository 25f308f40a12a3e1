"""Group, event and program schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.app.schemas.content import ResourceRead


class GroupCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    description: str | None = Field(None, max_length=2000)
    is_private: bool = False


class GroupUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=120)
    description: str | None = Field(None, max_length=2000)
    is_private: bool | None = None


class GroupRead(BaseModel):
    id: UUID
    tenant_id: UUID
    name: str
    description: str | None = None
    is_private: bool
    created_by_user_id: UUID | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class GroupMemberRead(BaseModel):
    group_id: UUID
    user_id: UUID
    role: str
    created_at: datetime

    model_config = {"from_attributes": True}


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=4000)
    starts_at: datetime
    ends_at: datetime | None = None
    location: str | None = Field(None, max_length=200)
    is_online: bool = False
    meeting_link: str | None = Field(None, max_length=1000)
    thumbnail_url: str | None = Field(None, max_length=1000)
    thumbnail_file_id: UUID | None = None


class EventUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=4000)
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    location: str | None = Field(None, max_length=200)
    is_online: bool | None = None
    meeting_link: str | None = Field(None, max_length=1000)
    thumbnail_url: str | None = Field(None, max_length=1000)
    thumbnail_file_id: UUID | None = None


class EventRead(BaseModel):
    id: UUID
    tenant_id: UUID
    title: str
    description: str | None = None
    starts_at: datetime
    ends_at: datetime | None = None
    location: str | None = None
    is_online: bool
    meeting_link: str | None = None
    thumbnail_url: str | None = None
    thumbnail_file_id: UUID | None = None
    host_user_id: UUID | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class EventDetail(EventRead):
    rsvp_counts: dict[str, int] = {}


class RsvpRequest(BaseModel):
    status: str = Field("GOING", pattern="^(GOING|MAYBE|NOT_GOING)$")


class RsvpRead(BaseModel):
    event_id: UUID
    user_id: UUID
    status: str
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProgramCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=4000)
    status: str = Field("ACTIVE", pattern="^(ACTIVE|DRAFT|ARCHIVED)$")


class ProgramUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=4000)
    status: str | None = Field(None, pattern="^(ACTIVE|DRAFT|ARCHIVED)$")


class ProgramRead(BaseModel):
    id: UUID
    tenant_id: UUID
    title: str
    description: str | None = None
    status: str
    created_by_user_id: UUID | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ModuleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=4000)
    order: int = 0


class ModuleUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=4000)
    order: int | None = None


class ModuleRead(BaseModel):
    id: UUID
    program_id: UUID
    title: str
    description: str | None = None
    order: int

    model_config = {"from_attributes": True}


class ModuleDetail(ModuleRead):
    resources: list[ResourceRead] = []


class ProgramDetail(ProgramRead):
    modules: list[ModuleRead] = []


class ModuleResourceRequest(BaseModel):
    resource_id: UUID


class AssignmentRequest(BaseModel):
    group_id: UUID


class AssignmentRead(BaseModel):
    program_id: UUID
    group_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class EnrollmentRead(BaseModel):
    program_id: UUID
    user_id: UUID
    progress_pct: int
    created_at: datetime

    model_config = {"from_attributes": True}
