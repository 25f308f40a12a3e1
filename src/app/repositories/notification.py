"""Repositories for notifications and registration fields."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import col, select

from src.app.models import Notification, RegistrationField
from src.app.models.base import utc_now
from src.app.repositories.base import TenantScopedRepository


class NotificationRepository(TenantScopedRepository[Notification]):
    model = Notification

    async def list_for_user(
        self,
        tenant_id: UUID,
        user_id: UUID,
        unread_only: bool = False,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Notification], str | None, bool]:
        filters = [Notification.user_id == user_id]
        if unread_only:
            filters.append(col(Notification.read_at).is_(None))
        return await self.list_scoped(tenant_id, *filters, cursor=cursor, limit=limit)

    async def mark_read(self, tenant_id: UUID, user_id: UUID, notification_id: UUID) -> bool:
        """Only the recipient can mark a notification read."""
        now = utc_now()
        result = await self.session.execute(
            update(Notification)
            .where(
                Notification.id == notification_id,
                Notification.tenant_id == tenant_id,
                Notification.user_id == user_id,
            )
            .values(read_at=now, updated_at=now)
        )
        return (result.rowcount or 0) > 0  # type: ignore[attr-defined]


class RegistrationFieldRepository(TenantScopedRepository[RegistrationField]):
    model = RegistrationField

    async def list_for_tenant(
        self, tenant_id: UUID, active_only: bool = False
    ) -> list[RegistrationField]:
        query = select(RegistrationField).where(RegistrationField.tenant_id == tenant_id)
        if active_only:
            query = query.where(col(RegistrationField.is_active).is_(True))
        result = await self.session.execute(
            query.order_by(RegistrationField.field_order, RegistrationField.created_at)
        )
        return list(result.scalars().all())
