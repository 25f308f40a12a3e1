"""Tenant-scoped file storage.

Uploads are stamped with the resolved tenant at write time. Downloads
compare that stamp with the tenant being requested and answer a mismatch
exactly like a missing file.
"""

import time
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Final
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from src.app.core.config import get_settings
from src.app.core.exceptions import NotFound, ValidationError
from src.app.core.logging import get_logger
from src.app.core.security import sanitize_filename
from src.app.models import AuditAction, FilePurpose, StoredFile
from src.app.repositories import BlobStore
from src.app.schemas.file import StoredFileRead
from src.app.services.audit_service import AuditService

logger = get_logger(__name__)

MB: Final[int] = 1024 * 1024
READ_CHUNK_SIZE: Final[int] = 64 * 1024

IMAGE_TYPES: Final[frozenset[str]] = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp"}
)
RESOURCE_TYPES: Final[frozenset[str]] = IMAGE_TYPES | {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/plain",
    "text/csv",
}


@dataclass(frozen=True)
class PurposePolicy:
    max_size: int
    content_types: frozenset[str]
    prefix: str
    default_name: str
    label: str


PURPOSE_POLICIES: Final[dict[FilePurpose, PurposePolicy]] = {
    FilePurpose.RESOURCE: PurposePolicy(
        20 * MB, RESOURCE_TYPES, "resource", "file", "Resource file"
    ),
    FilePurpose.RESOURCE_THUMBNAIL: PurposePolicy(
        2 * MB, IMAGE_TYPES, "resource-thumb", "thumb", "Thumbnail"
    ),
    FilePurpose.EVENT_THUMBNAIL: PurposePolicy(
        2 * MB, IMAGE_TYPES, "event-thumb", "thumb", "Thumbnail"
    ),
    FilePurpose.ANNOUNCEMENT_ATTACHMENT: PurposePolicy(
        10 * MB, RESOURCE_TYPES, "announcement", "file", "Attachment"
    ),
    FilePurpose.POST_MEDIA: PurposePolicy(
        5 * MB, IMAGE_TYPES, "post-media", "media", "Post media"
    ),
    FilePurpose.LOGO: PurposePolicy(2 * MB, IMAGE_TYPES, "logo", "logo", "Logo"),
}


def validate_upload(purpose: FilePurpose, content_type: str | None, size: int) -> PurposePolicy:
    """Check declared type and size against the purpose's limits.

    Raises:
        ValidationError: wrong content type or too large
    """
    policy = PURPOSE_POLICIES[purpose]
    if content_type not in policy.content_types:
        raise ValidationError(f"Invalid file type for {policy.label.lower()}")
    if size > policy.max_size:
        raise ValidationError(f"{policy.label} must be {policy.max_size // MB}MB or smaller")
    return policy


def storage_filename(policy: PurposePolicy, original: str | None, now_ms: int) -> str:
    return f"{policy.prefix}-{now_ms}-{sanitize_filename(original or policy.default_name)}"


async def _read_limited(upload: UploadFile, limit: int, label: str) -> bytes:
    """Read at most limit bytes, failing as soon as the body is larger."""
    buffer = bytearray()
    while chunk := await upload.read(READ_CHUNK_SIZE):
        buffer.extend(chunk)
        if len(buffer) > limit:
            raise ValidationError(f"{label} must be {limit // MB}MB or smaller")
    return bytes(buffer)


class FileService:
    def __init__(
        self,
        store: BlobStore,
        session: AsyncSession,
        audit: AuditService | None = None,
    ):
        self.store = store
        self.session = session
        self.audit = audit

    async def upload(
        self,
        tenant_id: UUID,
        purpose: FilePurpose,
        upload: UploadFile,
        uploaded_by_user_id: UUID,
    ) -> StoredFile:
        """Validate and persist one uploaded file under the given tenant.

        Nothing is written unless both the content type and the size pass.
        """
        policy = validate_upload(purpose, upload.content_type, upload.size or 0)
        content = await _read_limited(upload, policy.max_size, policy.label)
        if not content:
            raise ValidationError("No file uploaded")

        original = upload.filename or policy.default_name
        stored = await self.store.put(
            StoredFile(
                tenant_id=tenant_id,
                purpose=purpose.value,
                filename=storage_filename(policy, original, int(time.time() * 1000)),
                original_filename=original,
                content_type=upload.content_type or "application/octet-stream",
                size=len(content),
                chunk_size=get_settings().file_chunk_size,
                uploaded_by_user_id=uploaded_by_user_id,
            ),
            content,
        )
        await self.session.commit()

        logger.info(
            "File uploaded",
            tenant_id=str(tenant_id),
            file_id=str(stored.id),
            purpose=purpose.value,
            size=stored.size,
        )
        if self.audit:
            await self.audit.record(
                AuditAction.FILE_UPLOAD,
                entity_type="file",
                entity_id=stored.id,
                actor_user_id=uploaded_by_user_id,
                tenant_id=tenant_id,
                details={"purpose": purpose.value, "size": stored.size},
            )
        return stored

    async def get_scoped(self, tenant_id: UUID, file_id: UUID) -> StoredFile:
        """Metadata for a file owned by tenant_id.

        A file stamped with another tenant raises the same NotFound as a
        missing one.
        """
        stored = await self.store.get_metadata(file_id)
        if stored is None or str(stored.tenant_id) != str(tenant_id):
            if stored is not None:
                logger.warning(
                    "Cross-tenant file access denied",
                    requested_tenant_id=str(tenant_id),
                    file_id=str(file_id),
                )
            raise NotFound("File not found")
        return stored

    async def open_download(
        self, tenant_id: UUID, file_id: UUID
    ) -> tuple[StoredFile, AsyncIterator[bytes]]:
        stored = await self.get_scoped(tenant_id, file_id)
        return stored, self.store.stream(stored)


def file_url(tenant_id: UUID, file_id: UUID) -> str:
    return f"/api/v1/tenants/{tenant_id}/files/{file_id}"


def to_read(stored: StoredFile) -> StoredFileRead:
    return StoredFileRead(
        id=stored.id,
        tenant_id=stored.tenant_id,
        purpose=stored.purpose,
        filename=stored.filename,
        original_filename=stored.original_filename,
        content_type=stored.content_type,
        size=stored.size,
        url=file_url(stored.tenant_id, stored.id),
        created_at=stored.created_at,
    )
