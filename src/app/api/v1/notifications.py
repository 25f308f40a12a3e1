"""The caller's own notifications within a tenant."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.app.api.dependencies import MemberAccess, NotificationServiceDep
from src.app.api.v1.params import CursorQuery, LimitQuery
from src.app.schemas.notification import NotificationRead
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/tenants/{tenant_id}/notifications", tags=["notifications"])


@router.get("", response_model=PaginatedResponse[NotificationRead])
async def list_notifications(
    access: MemberAccess,
    notifications: NotificationServiceDep,
    unread_only: Annotated[bool, Query(description="Only notifications not yet read")] = False,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[NotificationRead]:
    page = await notifications.list_own(
        access.tenant_id, access.user_id, unread_only=unread_only, cursor=cursor, limit=limit
    )
    return PaginatedResponse.from_page(page, NotificationRead.model_validate)


@router.put(
    "/{notification_id}/read",
    response_model=NotificationRead,
    responses={404: {"description": "Notification not found"}},
)
async def mark_notification_read(
    notification_id: UUID, access: MemberAccess, notifications: NotificationServiceDep
) -> NotificationRead:
    notification = await notifications.mark_read(
        access.tenant_id, access.user_id, notification_id
    )
    return NotificationRead.model_validate(notification)
