"""Repository for AuditLog entity."""

from uuid import UUID

from sqlmodel import select

from src.app.models import AuditLog
from src.app.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    model = AuditLog

    async def list_by_tenant(
        self,
        tenant_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
        action: str | None = None,
        actor_user_id: UUID | None = None,
    ) -> tuple[list[AuditLog], str | None, bool]:
        """List audit logs for a tenant with cursor pagination.

        Args:
            tenant_id: Tenant to filter by
            cursor: Pagination cursor
            limit: Maximum items to return
            action: Optional action type filter
            actor_user_id: Optional actor filter

        Returns:
            Tuple of (logs, next_cursor, has_more)
        """
        query = select(AuditLog).where(AuditLog.tenant_id == tenant_id)

        if action:
            query = query.where(AuditLog.action == action)
        if actor_user_id:
            query = query.where(AuditLog.actor_user_id == actor_user_id)

        return await self.paginate(query, cursor, limit, AuditLog.created_at)

    async def list_all(
        self,
        cursor: str | None = None,
        limit: int = 50,
        action: str | None = None,
        tenant_id: UUID | None = None,
    ) -> tuple[list[AuditLog], str | None, bool]:
        """Platform-wide audit listing for super-admins."""
        query = select(AuditLog)
        if action:
            query = query.where(AuditLog.action == action)
        if tenant_id:
            query = query.where(AuditLog.tenant_id == tenant_id)
        return await self.paginate(query, cursor, limit, AuditLog.created_at)

    async def list_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[AuditLog], str | None, bool]:
        query = select(AuditLog).where(
            AuditLog.entity_type == entity_type,
            AuditLog.entity_id == entity_id,
        )
        return await self.paginate(query, cursor, limit, AuditLog.created_at)

    async def recent(self, limit: int = 10) -> list[AuditLog]:
        result = await self.session.execute(
            select(AuditLog).order_by(AuditLog.created_at.desc()).limit(limit)  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
