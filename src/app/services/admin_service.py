"""Admin service - platform-level operations (super-admin only)."""

from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import Conflict, NotFound
from src.app.core.logging import get_logger
from src.app.models import (
    AuditAction,
    Membership,
    MembershipRole,
    MembershipStatus,
    Tenant,
    TenantSettings,
    TenantStatus,
    User,
)
from src.app.models.base import utc_now
from src.app.repositories import (
    AuditLogRepository,
    MembershipRepository,
    TenantRepository,
    TenantSettingsRepository,
    UserRepository,
)
from src.app.schemas.admin import AdminOverview
from src.app.schemas.audit import AuditLogRead
from src.app.services.audit_service import AuditService

logger = get_logger(__name__)

SLUG_EXISTS = "SLUG_EXISTS"
RECENT_ACTIVITY_LIMIT = 12


class AdminService:
    """Service for platform-wide admin operations.

    These operations are super-admin only and cross-tenant.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        tenant_repo: TenantRepository,
        settings_repo: TenantSettingsRepository,
        membership_repo: MembershipRepository,
        audit_repo: AuditLogRepository,
        session: AsyncSession,
        audit: AuditService | None = None,
    ):
        self.user_repo = user_repo
        self.tenant_repo = tenant_repo
        self.settings_repo = settings_repo
        self.membership_repo = membership_repo
        self.audit_repo = audit_repo
        self.session = session
        self.audit = audit

    async def overview(self) -> AdminOverview:
        recent = await self.audit_repo.recent(RECENT_ACTIVITY_LIMIT)
        return AdminOverview(
            total_users=await self.user_repo.count(),
            total_tenants=await self.tenant_repo.count(),
            active_tenants=await self.tenant_repo.count(TenantStatus.ACTIVE.value),
            active_memberships=await self.membership_repo.count_active(),
            recent_activity=[AuditLogRead.model_validate(log) for log in recent],
        )

    async def list_users(
        self, cursor: str | None, limit: int, search: str | None = None
    ) -> tuple[list[User], str | None, bool]:
        return await self.user_repo.list_paginated(cursor, limit, search)

    async def update_user(
        self, user_id: UUID, changes: dict[str, Any], actor_user_id: UUID
    ) -> User:
        """Change a user's global role and/or account status."""
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")

        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(user)

        logger.info(
            "User role/status updated",
            target_user_id=str(user_id),
            global_role=user.global_role,
            status=user.status,
        )
        if self.audit:
            await self.audit.record(
                AuditAction.SUPER_ADMIN_USER_ROLE_STATUS_UPDATED,
                entity_type="user",
                entity_id=user_id,
                actor_user_id=actor_user_id,
                details={"global_role": user.global_role, "status": user.status},
            )
        return user

    async def list_tenants(
        self, cursor: str | None, limit: int
    ) -> tuple[list[Tenant], str | None, bool]:
        return await self.tenant_repo.list_paginated(cursor, limit, active_only=False)

    async def _new_tenant(self, values: dict[str, Any], created_by: UUID) -> Tenant:
        """Insert tenant plus default settings. Flushes, does not commit.

        Raises:
            Conflict: slug already taken
        """
        slug = values["slug"]
        if await self.tenant_repo.exists_by_slug(slug):
            raise Conflict("Slug already in use", code=SLUG_EXISTS)

        tenant = Tenant(
            name=values["name"].strip(),
            slug=slug,
            description=values.get("description"),
            category=values.get("category"),
            location=values.get("location"),
            status=TenantStatus.ACTIVE.value,
            created_by_user_id=created_by,
        )
        self.tenant_repo.add(tenant)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise Conflict("Slug already in use", code=SLUG_EXISTS) from e
        self.settings_repo.add(TenantSettings(tenant_id=tenant.id))
        return tenant

    async def create_tenant(self, values: dict[str, Any], actor_user_id: UUID) -> Tenant:
        """Create a tenant; the creating super-admin becomes its OWNER."""
        tenant = await self._new_tenant(values, actor_user_id)
        await self.membership_repo.upsert_membership(
            tenant.id,
            actor_user_id,
            role=MembershipRole.OWNER.value,
            status=MembershipStatus.ACTIVE.value,
        )
        await self.session.commit()
        await self.session.refresh(tenant)

        logger.info("Tenant created", tenant_id=str(tenant.id), slug=tenant.slug)
        if self.audit:
            await self.audit.record(
                AuditAction.TENANT_CREATE,
                entity_type="tenant",
                entity_id=tenant.id,
                actor_user_id=actor_user_id,
                tenant_id=tenant.id,
                details={"name": tenant.name, "slug": tenant.slug},
            )
        return tenant

    async def promote_user(
        self,
        user_id: UUID,
        actor_user_id: UUID,
        membership_role: str = MembershipRole.OWNER.value,
        existing_tenant_id: UUID | None = None,
        tenant_values: dict[str, Any] | None = None,
    ) -> tuple[Tenant, Membership, bool]:
        """Make a user OWNER (or ADMIN) of an existing or brand-new tenant.

        Tenant and membership are committed together, so a failure never
        leaves a tenant without its manager.

        Returns:
            (tenant, membership, tenant_created)
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")

        if existing_tenant_id is not None:
            existing = await self.tenant_repo.get_by_id(existing_tenant_id)
            if existing is None:
                raise NotFound("Tenant not found")
            tenant = existing
            created = False
        else:
            tenant = await self._new_tenant(tenant_values or {}, user_id)
            created = True

        membership = await self.membership_repo.upsert_membership(
            tenant.id, user_id, role=membership_role, status=MembershipStatus.ACTIVE.value
        )
        await self.session.commit()
        await self.session.refresh(tenant)

        logger.info(
            "User promoted to tenant",
            target_user_id=str(user_id),
            tenant_id=str(tenant.id),
            membership_role=membership_role,
            tenant_created=created,
        )
        if self.audit:
            await self.audit.record(
                AuditAction.SUPER_ADMIN_PROMOTE_USER_TO_TENANT,
                entity_type="membership",
                entity_id=membership.id,
                actor_user_id=actor_user_id,
                tenant_id=tenant.id,
                details={
                    "target_user_id": str(user_id),
                    "tenant_slug": tenant.slug,
                    "membership_role": membership_role,
                    "created_tenant": created,
                },
            )
        return tenant, membership, created

    async def update_tenant_status(
        self, tenant_id: UUID, status: str, actor_user_id: UUID
    ) -> Tenant:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise NotFound("Tenant not found")
        tenant.status = status
        tenant.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(tenant)

        logger.info("Tenant status updated", tenant_id=str(tenant_id), status=status)
        if self.audit:
            await self.audit.record(
                AuditAction.TENANT_STATUS_UPDATE,
                entity_type="tenant",
                entity_id=tenant_id,
                actor_user_id=actor_user_id,
                tenant_id=tenant_id,
                details={"status": status},
            )
        return tenant

    async def delete_tenant(self, tenant_id: UUID, actor_user_id: UUID) -> None:
        """Hard-delete a tenant; memberships and tenant-owned rows cascade."""
        if not await self.tenant_repo.delete_by_id(tenant_id):
            raise NotFound("Tenant not found")
        await self.session.commit()

        logger.info("Tenant deleted", tenant_id=str(tenant_id))
        if self.audit:
            await self.audit.record(
                AuditAction.TENANT_DELETE,
                entity_type="tenant",
                entity_id=tenant_id,
                actor_user_id=actor_user_id,
                tenant_id=tenant_id,
            )
