"""Shared model helpers."""

from datetime import UTC, datetime
from uuid import UUID, uuid7

from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Return current UTC time as naive datetime.

    Columns are TIMESTAMP WITHOUT TIME ZONE; all times are UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)


class TenantScopedModel(SQLModel):
    """Columns shared by every tenant-owned table.

    Repositories built on TenantScopedRepository filter on tenant_id for
    every read and write.
    """

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
