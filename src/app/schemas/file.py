from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class StoredFileRead(BaseModel):
    id: UUID
    tenant_id: UUID
    purpose: str
    filename: str
    original_filename: str
    content_type: str
    size: int
    url: str
    created_at: datetime


class ResourceUploadResponse(BaseModel):
    file: StoredFileRead
    thumbnail: StoredFileRead | None = None
