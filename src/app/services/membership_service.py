"""Membership authority - who belongs to which tenant, in what role."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import Forbidden, NotFound
from src.app.core.logging import get_logger
from src.app.core.tenancy import stronger_role
from src.app.models import (
    AuditAction,
    MemberProfile,
    Membership,
    MembershipRole,
    MembershipStatus,
    Notification,
    TenantSettings,
)
from src.app.repositories import (
    MemberProfileRepository,
    MembershipRepository,
    NotificationRepository,
)
from src.app.schemas.membership import MemberRead
from src.app.services.audit_service import AuditService

logger = get_logger(__name__)

PUBLIC_JOIN_DISABLED = "PUBLIC_JOIN_DISABLED"


class MembershipService:
    def __init__(
        self,
        membership_repo: MembershipRepository,
        profile_repo: MemberProfileRepository,
        notification_repo: NotificationRepository,
        session: AsyncSession,
        audit: AuditService | None = None,
    ):
        self.membership_repo = membership_repo
        self.profile_repo = profile_repo
        self.notification_repo = notification_repo
        self.session = session
        self.audit = audit

    async def lookup(
        self, tenant_id: UUID, user_id: UUID, active_only: bool = True
    ) -> Membership | None:
        """Find the user's membership in a tenant.

        With active_only (the default) a PENDING, SUSPENDED or BANNED row
        counts as no membership at all.
        """
        if active_only:
            return await self.membership_repo.get_active_membership(tenant_id, user_id)
        return await self.membership_repo.get_membership(tenant_id, user_id)

    async def ensure_membership(self, tenant_id: UUID, user_id: UUID) -> Membership:
        """Assert an ACTIVE membership exists.

        Raises:
            Forbidden: no active membership in this tenant
        """
        membership = await self.lookup(tenant_id, user_id)
        if membership is None:
            raise Forbidden("Not a tenant member")
        return membership

    async def join(
        self,
        tenant_id: UUID,
        user_id: UUID,
        settings: TenantSettings,
        profile: dict[str, Any] | None = None,
    ) -> tuple[Membership, bool]:
        """Direct join without an invitation.

        An existing membership is returned unchanged. A new one is PENDING
        when the tenant requires approval, otherwise ACTIVE. Concurrent
        joins converge on one row through the upsert.

        Returns:
            (membership, created)

        Raises:
            Forbidden: the user is banned, or public signup is disabled
        """
        existing = await self.membership_repo.get_membership(tenant_id, user_id)
        if existing is not None:
            if existing.status == MembershipStatus.BANNED.value:
                raise Forbidden("You are banned from this community")
            if profile:
                await self.profile_repo.upsert_profile(tenant_id, user_id, profile)
                await self.session.commit()
            return existing, False

        if not settings.public_signup:
            raise Forbidden(
                "Public signup is disabled for this community. An invitation is required to join.",
                code=PUBLIC_JOIN_DISABLED,
            )

        status = (
            MembershipStatus.PENDING if settings.approval_required else MembershipStatus.ACTIVE
        )
        membership = await self.membership_repo.upsert_membership(
            tenant_id,
            user_id,
            role=MembershipRole.MEMBER.value,
            status=status.value,
            overwrite=False,
        )
        if profile:
            await self.profile_repo.upsert_profile(tenant_id, user_id, profile)
        await self.session.commit()

        logger.info(
            "Tenant joined",
            tenant_id=str(tenant_id),
            user_id=str(user_id),
            status=membership.status,
        )
        if self.audit:
            await self.audit.record(
                AuditAction.TENANT_JOIN,
                entity_type="membership",
                entity_id=membership.id,
                actor_user_id=user_id,
                tenant_id=tenant_id,
                details={
                    "join_method": "DIRECT",
                    "approval_required": settings.approval_required,
                },
            )
        return membership, True

    async def grant(self, tenant_id: UUID, user_id: UUID, role: str) -> Membership:
        """Make the membership ACTIVE with at least the given role.

        Never downgrades an existing role. Does not commit.

        Raises:
            Forbidden: the user is banned from this tenant
        """
        existing = await self.membership_repo.get_membership(tenant_id, user_id)
        if existing is not None and existing.status == MembershipStatus.BANNED.value:
            raise Forbidden("You are banned from this community")
        role = stronger_role(existing.role if existing else None, role)
        return await self.membership_repo.upsert_membership(
            tenant_id, user_id, role=role, status=MembershipStatus.ACTIVE.value
        )

    async def list_members(
        self,
        tenant_id: UUID,
        status: str | None = None,
        role: str | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[MemberRead], str | None, bool]:
        memberships, next_cursor, has_more = await self.membership_repo.list_for_tenant(
            tenant_id, status=status, role=role, cursor=cursor, limit=limit
        )
        users = await self.membership_repo.get_users([m.user_id for m in memberships])
        items = []
        for membership in memberships:
            user = users.get(membership.user_id)
            items.append(
                MemberRead.model_validate(membership).model_copy(
                    update={
                        "email": user.email if user else None,
                        "full_name": user.full_name if user else None,
                    }
                )
            )
        return items, next_cursor, has_more

    async def update_member(
        self,
        tenant_id: UUID,
        user_id: UUID,
        actor_user_id: UUID,
        role: str | None = None,
        status: str | None = None,
    ) -> Membership:
        """Change a member's role and/or status, and tell them about it."""
        current = await self.membership_repo.get_membership(tenant_id, user_id)
        if current is None:
            raise NotFound("Membership not found")

        previous_status = current.status
        changes: dict[str, Any] = {}
        if role is not None:
            changes["role"] = role
        if status is not None:
            changes["status"] = status
        membership = await self.membership_repo.update_membership(tenant_id, user_id, changes)
        if membership is None:
            raise NotFound("Membership not found")

        if status is not None and status != previous_status:
            self.notification_repo.add(
                Notification(
                    tenant_id=tenant_id,
                    user_id=user_id,
                    kind="MEMBERSHIP_STATUS",
                    title=_status_title(status),
                )
            )
        await self.session.commit()

        logger.info(
            "Member updated",
            tenant_id=str(tenant_id),
            member_user_id=str(user_id),
            role=membership.role,
            status=membership.status,
        )
        if self.audit:
            await self.audit.record(
                AuditAction.TENANT_MEMBER_ROLE_STATUS_UPDATED,
                entity_type="membership",
                entity_id=membership.id,
                actor_user_id=actor_user_id,
                tenant_id=tenant_id,
                details={
                    "user_id": str(user_id),
                    "role": membership.role,
                    "status": membership.status,
                },
            )
        return membership

    async def get_profile(self, tenant_id: UUID, user_id: UUID) -> MemberProfile | None:
        return await self.profile_repo.get_profile(tenant_id, user_id)

    async def upsert_profile(
        self, tenant_id: UUID, user_id: UUID, changes: dict[str, Any]
    ) -> MemberProfile:
        profile = await self.profile_repo.upsert_profile(tenant_id, user_id, changes)
        await self.session.commit()
        return profile


def _status_title(status: str) -> str:
    match status:
        case MembershipStatus.ACTIVE.value:
            return "Your membership is active"
        case MembershipStatus.SUSPENDED.value:
            return "Your membership was suspended"
        case MembershipStatus.BANNED.value:
            return "You were removed from this community"
        case _:
            return "Your membership status changed"
