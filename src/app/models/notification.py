"""In-app notifications and tenant registration form fields."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Column
from sqlmodel import Field

from src.app.models.base import TenantScopedModel
from src.app.models.enums import RegistrationFieldType


class Notification(TenantScopedModel, table=True):
    __tablename__ = "notifications"

    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    kind: str = Field(max_length=60)
    title: str = Field(max_length=200)
    body: str | None = Field(default=None, max_length=2000)
    read_at: datetime | None = Field(default=None)


class RegistrationField(TenantScopedModel, table=True):
    """Custom question shown on the tenant's join form."""

    __tablename__ = "registration_fields"

    key: str = Field(max_length=60)
    label: str = Field(max_length=200)
    field_type: str = Field(default=RegistrationFieldType.TEXT.value, max_length=20)
    required: bool = Field(default=False)
    options: list[Any] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    field_order: int = Field(default=0)
    is_active: bool = Field(default=True)
