from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

_FIELD_TYPES = "^(TEXT|TEXTAREA|SELECT|CHECKBOX|DATE|PHONE|EMAIL)$"


class NotificationRead(BaseModel):
    id: UUID
    tenant_id: UUID
    kind: str
    title: str
    body: str | None = None
    read_at: datetime | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class RegistrationFieldCreate(BaseModel):
    key: str = Field(min_length=1, max_length=60, pattern="^[a-z][a-z0-9_]*$")
    label: str = Field(min_length=1, max_length=200)
    field_type: str = Field("TEXT", pattern=_FIELD_TYPES)
    required: bool = False
    options: list[Any] = []
    field_order: int = 0
    is_active: bool = True


class RegistrationFieldUpdate(BaseModel):
    label: str | None = Field(None, min_length=1, max_length=200)
    field_type: str | None = Field(None, pattern=_FIELD_TYPES)
    required: bool | None = None
    options: list[Any] | None = None
    field_order: int | None = None
    is_active: bool | None = None


class RegistrationFieldRead(BaseModel):
    id: UUID
    key: str
    label: str
    field_type: str
    required: bool
    options: list[Any] = []
    field_order: int
    is_active: bool

    model_config = {"from_attributes": True}
