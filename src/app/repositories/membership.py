"""Repositories for Membership and MemberProfile."""

from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.app.models import MemberProfile, Membership, MembershipStatus, User
from src.app.models.base import utc_now
from src.app.repositories.base import BaseRepository

_MEMBERSHIP_KEY = ("tenant_id", "user_id")


class MembershipRepository(BaseRepository[Membership]):
    model = Membership

    async def get_membership(self, tenant_id: UUID, user_id: UUID) -> Membership | None:
        """Membership of any status for (tenant, user)."""
        result = await self.session.execute(
            select(Membership).where(
                Membership.tenant_id == tenant_id,
                Membership.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_active_membership(self, tenant_id: UUID, user_id: UUID) -> Membership | None:
        result = await self.session.execute(
            select(Membership).where(
                Membership.tenant_id == tenant_id,
                Membership.user_id == user_id,
                Membership.status == MembershipStatus.ACTIVE.value,
            )
        )
        return result.scalar_one_or_none()

    async def upsert_membership(
        self,
        tenant_id: UUID,
        user_id: UUID,
        role: str,
        status: str,
        overwrite: bool = True,
    ) -> Membership:
        """Create or update the (tenant, user) membership in one statement.

        With overwrite=False an existing row is returned untouched.
        """
        values = {"tenant_id": tenant_id, "user_id": user_id, "role": role, "status": status}
        update_values = {"role": role, "status": status} if overwrite else None
        return await self.upsert(values, _MEMBERSHIP_KEY, update_values)

    async def update_membership(
        self, tenant_id: UUID, user_id: UUID, changes: dict[str, Any]
    ) -> Membership | None:
        membership = await self.get_membership(tenant_id, user_id)
        if membership is None:
            return None
        for field, value in changes.items():
            setattr(membership, field, value)
        membership.updated_at = utc_now()
        await self.session.flush()
        return membership

    async def list_for_tenant(
        self,
        tenant_id: UUID,
        status: str | None = None,
        role: str | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Membership], str | None, bool]:
        query = select(Membership).where(Membership.tenant_id == tenant_id)
        if status:
            query = query.where(Membership.status == status)
        if role:
            query = query.where(Membership.role == role)
        return await self.paginate(query, cursor, limit, Membership.created_at)

    async def list_for_user(self, user_id: UUID) -> list[Membership]:
        result = await self.session.execute(
            select(Membership).where(Membership.user_id == user_id).order_by(Membership.created_at)
        )
        return list(result.scalars().all())

    async def get_users(self, user_ids: list[UUID]) -> dict[UUID, User]:
        if not user_ids:
            return {}
        result = await self.session.execute(select(User).where(User.id.in_(user_ids)))  # type: ignore[attr-defined]
        return {user.id: user for user in result.scalars().all()}

    async def count_active(self, tenant_id: UUID | None = None) -> int:
        query = (
            select(func.count())
            .select_from(Membership)
            .where(Membership.status == MembershipStatus.ACTIVE.value)
        )
        if tenant_id is not None:
            query = query.where(Membership.tenant_id == tenant_id)
        result = await self.session.execute(query)
        return int(result.scalar_one())


class MemberProfileRepository(BaseRepository[MemberProfile]):
    model = MemberProfile

    async def get_profile(self, tenant_id: UUID, user_id: UUID) -> MemberProfile | None:
        result = await self.session.execute(
            select(MemberProfile).where(
                MemberProfile.tenant_id == tenant_id,
                MemberProfile.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def upsert_profile(
        self, tenant_id: UUID, user_id: UUID, changes: dict[str, Any]
    ) -> MemberProfile:
        values = {"tenant_id": tenant_id, "user_id": user_id, "custom_fields": {}, **changes}
        return await self.upsert(values, _MEMBERSHIP_KEY, changes or None)
