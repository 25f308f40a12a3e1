"""Repository for Invitation entity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.app.models import Invitation, InvitationStatus, Tenant
from src.app.repositories.base import BaseRepository


class InvitationRepository(BaseRepository[Invitation]):
    model = Invitation

    async def lock_tenant(self, tenant_id: UUID) -> None:
        """Row-lock the tenant so concurrent invitation writes for it run one at a time.

        Held until the surrounding transaction ends. SQLite ignores FOR UPDATE.
        """
        await self.session.execute(
            select(Tenant.id).where(Tenant.id == tenant_id).with_for_update()
        )

    async def get_scoped(self, tenant_id: UUID, invitation_id: UUID) -> Invitation | None:
        result = await self.session.execute(
            select(Invitation).where(
                Invitation.id == invitation_id,
                Invitation.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_token_hash(self, token_hash: str) -> Invitation | None:
        """Look up an invitation by the hash of its token, whatever its state."""
        result = await self.session.execute(
            select(Invitation).where(Invitation.token_hash == token_hash)
        )
        return result.scalar_one_or_none()

    async def get_outstanding(
        self, tenant_id: UUID, email: str, now: datetime
    ) -> Invitation | None:
        """An invitation for this email that is still SENT and not yet expired."""
        result = await self.session.execute(
            select(Invitation)
            .where(
                Invitation.tenant_id == tenant_id,
                Invitation.email == email,
                Invitation.status == InvitationStatus.SENT.value,
                Invitation.expires_at > now,
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def mark_accepted(self, invitation_id: UUID, user_id: UUID, now: datetime) -> bool:
        """Flip SENT to ACCEPTED in one conditional UPDATE.

        False when another request already consumed or revoked it.
        """
        result = await self.session.execute(
            update(Invitation)
            .where(
                Invitation.id == invitation_id,
                Invitation.status == InvitationStatus.SENT.value,
                Invitation.expires_at >= now,
            )
            .values(
                status=InvitationStatus.ACCEPTED.value,
                accepted_at=now,
                accepted_by_user_id=user_id,
                updated_at=now,
            )
        )
        return (result.rowcount or 0) > 0  # type: ignore[attr-defined]

    async def list_for_tenant(
        self, tenant_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Invitation], str | None, bool]:
        query = select(Invitation).where(Invitation.tenant_id == tenant_id)
        return await self.paginate(query, cursor, limit, Invitation.created_at)
