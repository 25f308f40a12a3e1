from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import NotFound
from src.app.models import Notification
from src.app.repositories import NotificationRepository


class NotificationService:
    """A member's own in-app notifications within one tenant."""

    def __init__(self, notification_repo: NotificationRepository, session: AsyncSession):
        self.notification_repo = notification_repo
        self.session = session

    async def list_own(
        self,
        tenant_id: UUID,
        user_id: UUID,
        unread_only: bool = False,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Notification], str | None, bool]:
        return await self.notification_repo.list_for_user(
            tenant_id, user_id, unread_only, cursor, limit
        )

    async def mark_read(
        self, tenant_id: UUID, user_id: UUID, notification_id: UUID
    ) -> Notification:
        """Mark read. Someone else's notification is reported as missing."""
        if not await self.notification_repo.mark_read(tenant_id, user_id, notification_id):
            raise NotFound("Notification not found")
        await self.session.commit()
        notification = await self.notification_repo.get_scoped(tenant_id, notification_id)
        if notification is None:
            raise NotFound("Notification not found")
        return notification
