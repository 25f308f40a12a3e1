"""Tenant file upload and download endpoints.

Uploads are stamped with the tenant resolved for the request. Downloads of
a file stamped with another tenant answer exactly like a missing file.
"""

from collections.abc import AsyncIterator
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, UploadFile, status
from fastapi.responses import StreamingResponse

from src.app.api.dependencies import (
    FileServiceDep,
    ManagerAccess,
    MemberAccess,
    ModeratorAccess,
    TenantServiceDep,
)
from src.app.core.exceptions import ValidationError
from src.app.models import FilePurpose, StoredFile
from src.app.schemas.file import ResourceUploadResponse, StoredFileRead
from src.app.schemas.tenant import TenantRead
from src.app.services.file_service import to_read, validate_upload

router = APIRouter(prefix="/tenants/{tenant_id}/files", tags=["files"])

OptionalUpload = Annotated[UploadFile | None, File()]

_UPLOAD_ERRORS = {
    400: {"description": "Missing file, wrong content type or file too large"},
    403: {"description": "Insufficient tenant role"},
}


def file_response(stored: StoredFile, chunks: AsyncIterator[bytes]) -> StreamingResponse:
    return StreamingResponse(
        chunks,
        media_type=stored.content_type,
        headers={
            "Content-Length": str(stored.size),
            "Content-Disposition": f'inline; filename="{stored.filename}"',
        },
    )


def public_logo_url(slug: str) -> str:
    return f"/api/v1/tenants/public/{slug}/logo"


def _require(upload: UploadFile | None) -> UploadFile:
    if upload is None:
        raise ValidationError("No file uploaded")
    return upload


async def _upload(
    files: FileServiceDep,
    access_tenant_id: UUID,
    purpose: FilePurpose,
    upload: UploadFile | None,
    user_id: UUID,
) -> StoredFileRead:
    stored = await files.upload(access_tenant_id, purpose, _require(upload), user_id)
    return to_read(stored)


@router.post(
    "/resource",
    response_model=ResourceUploadResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_UPLOAD_ERRORS,
)
async def upload_resource_file(
    access: ModeratorAccess,
    files: FileServiceDep,
    file: OptionalUpload = None,
    thumbnail: OptionalUpload = None,
) -> ResourceUploadResponse:
    """Upload a resource file (up to 20MB) with an optional thumbnail image (up to 2MB).

    Both are validated before either is stored.
    """
    upload = _require(file)
    if thumbnail is not None:
        validate_upload(
            FilePurpose.RESOURCE_THUMBNAIL, thumbnail.content_type, thumbnail.size or 0
        )

    stored = await files.upload(access.tenant_id, FilePurpose.RESOURCE, upload, access.user_id)
    thumb = None
    if thumbnail is not None:
        thumb = to_read(
            await files.upload(
                access.tenant_id, FilePurpose.RESOURCE_THUMBNAIL, thumbnail, access.user_id
            )
        )
    return ResourceUploadResponse(file=to_read(stored), thumbnail=thumb)


@router.post(
    "/event-thumbnail",
    response_model=StoredFileRead,
    status_code=status.HTTP_201_CREATED,
    responses=_UPLOAD_ERRORS,
)
async def upload_event_thumbnail(
    access: ModeratorAccess, files: FileServiceDep, file: OptionalUpload = None
) -> StoredFileRead:
    """Upload an event thumbnail image (up to 2MB)."""
    return await _upload(files, access.tenant_id, FilePurpose.EVENT_THUMBNAIL, file, access.user_id)


@router.post(
    "/announcement-attachment",
    response_model=StoredFileRead,
    status_code=status.HTTP_201_CREATED,
    responses=_UPLOAD_ERRORS,
)
async def upload_announcement_attachment(
    access: ModeratorAccess, files: FileServiceDep, file: OptionalUpload = None
) -> StoredFileRead:
    """Upload an announcement attachment (up to 10MB)."""
    return await _upload(
        files, access.tenant_id, FilePurpose.ANNOUNCEMENT_ATTACHMENT, file, access.user_id
    )


@router.post(
    "/post-media",
    response_model=StoredFileRead,
    status_code=status.HTTP_201_CREATED,
    responses=_UPLOAD_ERRORS,
)
async def upload_post_media(
    access: ModeratorAccess, files: FileServiceDep, file: OptionalUpload = None
) -> StoredFileRead:
    """Upload a post image (up to 5MB)."""
    return await _upload(files, access.tenant_id, FilePurpose.POST_MEDIA, file, access.user_id)


@router.post(
    "/logo",
    response_model=TenantRead,
    status_code=status.HTTP_201_CREATED,
    responses=_UPLOAD_ERRORS,
)
async def upload_logo(
    access: ManagerAccess,
    files: FileServiceDep,
    tenants: TenantServiceDep,
    file: OptionalUpload = None,
) -> TenantRead:
    """Upload a tenant logo (up to 2MB) and make it the tenant's current logo."""
    stored = await files.upload(access.tenant_id, FilePurpose.LOGO, _require(file), access.user_id)
    tenant = await tenants.get_tenant(access.tenant_id)
    tenant = await tenants.set_logo(tenant.id, stored.id, public_logo_url(tenant.slug))
    return TenantRead.model_validate(tenant)


@router.get(
    "/{file_id}",
    response_class=StreamingResponse,
    responses={
        200: {"description": "File content"},
        403: {"description": "Not an active member of the tenant"},
        404: {"description": "File not found in this tenant"},
    },
)
async def download_file(
    file_id: UUID, access: MemberAccess, files: FileServiceDep
) -> StreamingResponse:
    stored, chunks = await files.open_download(access.tenant_id, file_id)
    return file_response(stored, chunks)
