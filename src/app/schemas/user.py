from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class UserRead(BaseModel):
    id: UUID
    email: EmailStr
    full_name: str
    phone: str | None = None
    avatar_url: str | None = None
    global_role: str
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    full_name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=40)
    avatar_url: str | None = Field(None, max_length=500)


class MyTenantRead(BaseModel):
    """A tenant the current user belongs to, with their role there."""

    tenant_id: UUID
    name: str
    slug: str
    logo_url: str | None = None
    role: str
    status: str
