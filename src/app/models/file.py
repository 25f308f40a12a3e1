"""Stored file metadata and content chunks."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlalchemy import Column, LargeBinary, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.app.models.base import utc_now


class StoredFile(SQLModel, table=True):
    """Metadata for an uploaded object.

    tenant_id is stamped at upload and never updated. It is the only
    authority used to decide whether a download is allowed.
    """

    __tablename__ = "stored_files"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True, ondelete="CASCADE")
    purpose: str = Field(max_length=40)
    filename: str = Field(max_length=300)
    original_filename: str = Field(max_length=255)
    content_type: str = Field(max_length=120)
    size: int
    chunk_size: int
    uploaded_by_user_id: UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )
    created_at: datetime = Field(default_factory=utc_now)


class StoredFileChunk(SQLModel, table=True):
    __tablename__ = "stored_file_chunks"
    __table_args__ = (UniqueConstraint("file_id", "n", name="uq_stored_file_chunks_file_n"),)

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    file_id: UUID = Field(foreign_key="stored_files.id", index=True, ondelete="CASCADE")
    n: int
    data: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
