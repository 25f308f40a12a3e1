"""Repositories for Tenant and TenantSettings."""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, or_
from sqlmodel import select

from src.app.models import Membership, MembershipStatus, Tenant, TenantSettings, TenantStatus
from src.app.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    model = Tenant

    async def get_by_slug(self, slug: str) -> Tenant | None:
        result = await self.session.execute(select(Tenant).where(Tenant.slug == slug))
        return result.scalar_one_or_none()

    async def exists_by_slug(self, slug: str) -> bool:
        tenant = await self.get_by_slug(slug)
        return tenant is not None

    async def list_paginated(
        self, cursor: str | None, limit: int, active_only: bool = True
    ) -> tuple[list[Tenant], str | None, bool]:
        query = select(Tenant)
        if active_only:
            query = query.where(Tenant.status == TenantStatus.ACTIVE.value)
        return await self.paginate(query, cursor, limit, Tenant.created_at)

    async def search_active(self, search: str | None, limit: int) -> list[Tenant]:
        """Active tenants whose name, slug or category contains the search text."""
        query = select(Tenant).where(Tenant.status == TenantStatus.ACTIVE.value)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(
                or_(
                    func.lower(Tenant.name).like(pattern),
                    func.lower(Tenant.slug).like(pattern),
                    func.lower(Tenant.category).like(pattern),
                )
            )
        result = await self.session.execute(query.order_by(Tenant.name).limit(limit))
        return list(result.scalars().all())

    async def list_by_user_membership(
        self, user_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Tenant], str | None, bool]:
        """Tenants where the user holds an ACTIVE membership."""
        query = (
            select(Tenant)
            .join(Membership, Tenant.id == Membership.tenant_id)  # type: ignore[arg-type]
            .where(
                Membership.user_id == user_id,
                Membership.status == MembershipStatus.ACTIVE.value,
            )
        )
        return await self.paginate(query, cursor, limit, Tenant.created_at)

    async def count(self, status: str | None = None) -> int:
        query = select(func.count()).select_from(Tenant)
        if status:
            query = query.where(Tenant.status == status)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def delete_by_id(self, tenant_id: UUID) -> bool:
        """Delete a tenant. Tenant-owned rows go with it via ON DELETE CASCADE."""
        result = await self.session.execute(delete(Tenant).where(Tenant.id == tenant_id))
        return (result.rowcount or 0) > 0  # type: ignore[attr-defined]


class TenantSettingsRepository(BaseRepository[TenantSettings]):
    model = TenantSettings

    async def get_for_tenant(self, tenant_id: UUID) -> TenantSettings | None:
        result = await self.session.execute(
            select(TenantSettings).where(TenantSettings.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, tenant_id: UUID) -> TenantSettings:
        """Return the settings row, inserting defaults when missing."""
        defaults = TenantSettings(tenant_id=tenant_id)
        return await self.upsert(
            {
                "tenant_id": tenant_id,
                "public_signup": defaults.public_signup,
                "approval_required": defaults.approval_required,
                "registration_fields_enabled": defaults.registration_fields_enabled,
                "enabled_sections": defaults.enabled_sections,
            },
            conflict_keys=["tenant_id"],
        )

    async def upsert_values(self, tenant_id: UUID, changes: dict[str, Any]) -> TenantSettings:
        current = await self.get_or_create(tenant_id)
        values = {
            "tenant_id": tenant_id,
            "public_signup": current.public_signup,
            "approval_required": current.approval_required,
            "registration_fields_enabled": current.registration_fields_enabled,
            "enabled_sections": current.enabled_sections,
            **changes,
        }
        return await self.upsert(values, conflict_keys=["tenant_id"], update_values=changes)
