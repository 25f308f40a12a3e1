"""Tenant announcement endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.app.api.dependencies import ContentServiceDep, MemberAccess, ModeratorAccess
from src.app.api.v1.params import CursorQuery, LimitQuery
from src.app.schemas.content import AnnouncementCreate, AnnouncementRead, AnnouncementUpdate
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/tenants/{tenant_id}/announcements", tags=["announcements"])


@router.get("", response_model=PaginatedResponse[AnnouncementRead])
async def list_announcements(
    access: MemberAccess,
    content: ContentServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[AnnouncementRead]:
    """Newest first."""
    page = await content.list_announcements(access.tenant_id, cursor, limit)
    return PaginatedResponse.from_page(page, AnnouncementRead.model_validate)


@router.post(
    "",
    response_model=AnnouncementRead,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Attachment file not found in this tenant"}},
)
async def create_announcement(
    data: AnnouncementCreate, access: ModeratorAccess, content: ContentServiceDep
) -> AnnouncementRead:
    """Post an announcement. Attachments must be files uploaded to this tenant."""
    announcement = await content.create_announcement(access.tenant_id, data, access.user_id)
    return AnnouncementRead.model_validate(announcement)


@router.put(
    "/{announcement_id}",
    response_model=AnnouncementRead,
    responses={404: {"description": "Announcement not found"}},
)
async def update_announcement(
    announcement_id: UUID,
    data: AnnouncementUpdate,
    access: ModeratorAccess,
    content: ContentServiceDep,
) -> AnnouncementRead:
    announcement = await content.update_announcement(access.tenant_id, announcement_id, data)
    return AnnouncementRead.model_validate(announcement)


@router.delete(
    "/{announcement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Announcement not found"}},
)
async def delete_announcement(
    announcement_id: UUID, access: ModeratorAccess, content: ContentServiceDep
) -> None:
    await content.delete_announcement(access.tenant_id, announcement_id)
