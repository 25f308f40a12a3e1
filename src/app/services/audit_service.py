"""Audit logging service - records privileged actions."""

import contextlib
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.audit_context import get_audit_context
from src.app.core.logging import get_logger
from src.app.models import AuditAction, AuditLog, AuditStatus
from src.app.repositories import AuditLogRepository

logger = get_logger(__name__)

SUPER_ADMIN_BYPASS_KEY = "_super_admin_bypass"


class AuditService:
    """Service for recording audit logs.

    Fire-and-forget: the service owns an isolated session, commits it
    itself and never raises. Callers record after their own commit.
    """

    def __init__(self, audit_repo: AuditLogRepository, session: AsyncSession):
        self.audit_repo = audit_repo
        self.session = session

    async def record(
        self,
        action: AuditAction | str,
        entity_type: str,
        entity_id: UUID | None = None,
        actor_user_id: UUID | None = None,
        tenant_id: UUID | None = None,
        details: dict[str, Any] | None = None,
        status: AuditStatus = AuditStatus.SUCCESS,
        error_message: str | None = None,
    ) -> AuditLog | None:
        """Record an audit log entry.

        Request metadata (IP, user agent, request_id) comes from the audit
        context. When the role gate let a super-admin through without a
        membership, the entry is flagged in details.

        Returns:
            The created AuditLog, or None if logging failed
        """
        action_value = action.value if isinstance(action, AuditAction) else action
        try:
            ctx = get_audit_context()
            ip_address = ctx.ip_address if ctx else None
            user_agent = ctx.user_agent if ctx else None
            request_id = ctx.request_id if ctx else None

            if ctx and ctx.super_admin_bypass:
                details = {**(details or {}), SUPER_ADMIN_BYPASS_KEY: True}

            audit_log = AuditLog(
                tenant_id=tenant_id,
                actor_user_id=actor_user_id,
                action=action_value,
                entity_type=entity_type,
                entity_id=entity_id,
                details=details,
                ip_address=ip_address,
                user_agent=user_agent,
                request_id=request_id,
                status=status.value if isinstance(status, AuditStatus) else status,
                error_message=error_message[:1000] if error_message else None,
            )

            self.audit_repo.add(audit_log)
            await self.session.commit()

            logger.debug(
                "Audit log recorded",
                action=action_value,
                entity_type=entity_type,
                entity_id=str(entity_id) if entity_id else None,
            )
            return audit_log

        except Exception as e:
            logger.warning(
                "Failed to record audit log",
                action=action_value,
                entity_type=entity_type,
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return None

    async def record_failure(
        self,
        action: AuditAction | str,
        entity_type: str,
        error_message: str,
        entity_id: UUID | None = None,
        actor_user_id: UUID | None = None,
        tenant_id: UUID | None = None,
    ) -> AuditLog | None:
        return await self.record(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            actor_user_id=actor_user_id,
            tenant_id=tenant_id,
            status=AuditStatus.FAILURE,
            error_message=error_message,
        )

    async def list_tenant_logs(
        self,
        tenant_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
        action: str | None = None,
        actor_user_id: UUID | None = None,
    ) -> tuple[list[AuditLog], str | None, bool]:
        return await self.audit_repo.list_by_tenant(
            tenant_id=tenant_id,
            cursor=cursor,
            limit=limit,
            action=action,
            actor_user_id=actor_user_id,
        )

    async def list_all_logs(
        self,
        cursor: str | None = None,
        limit: int = 50,
        action: str | None = None,
        tenant_id: UUID | None = None,
    ) -> tuple[list[AuditLog], str | None, bool]:
        return await self.audit_repo.list_all(
            cursor=cursor, limit=limit, action=action, tenant_id=tenant_id
        )
