"""Invitation lifecycle.

Only SENT, ACCEPTED and REVOKED are stored. The status callers see is
derived on read by invitation_status(), so an invitation never needs a
background job to expire.
"""

from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.config import get_settings
from src.app.core.exceptions import (
    Conflict,
    Forbidden,
    InvalidState,
    InvitationInvalid,
    NotFound,
)
from src.app.core.logging import get_logger
from src.app.core.security import generate_invitation_token, hash_token, normalize_email
from src.app.models import (
    AuditAction,
    Invitation,
    InvitationStatus,
    Membership,
    MembershipRole,
    User,
)
from src.app.models.base import utc_now
from src.app.repositories import InvitationRepository
from src.app.schemas.invitation import InvitationRead
from src.app.services.audit_service import AuditService
from src.app.services.membership_service import MembershipService

logger = get_logger(__name__)

INVITATION_EXISTS = "INVITATION_EXISTS"


def invitation_status(stored: str, expires_at: datetime, now: datetime) -> InvitationStatus:
    """Derive the visible status from what is stored.

    REVOKED and ACCEPTED win regardless of expiry. Anything else is
    EXPIRED once expires_at is in the past, else SENT.
    """
    if stored == InvitationStatus.REVOKED.value:
        return InvitationStatus.REVOKED
    if stored == InvitationStatus.ACCEPTED.value:
        return InvitationStatus.ACCEPTED
    if expires_at < now:
        return InvitationStatus.EXPIRED
    return InvitationStatus.SENT


def clamp_ttl_days(days: int | None) -> int:
    settings = get_settings()
    if days is None:
        return settings.invite_expire_days
    return max(settings.invite_min_days, min(settings.invite_max_days, days))


def to_read(invitation: Invitation, now: datetime | None = None) -> InvitationRead:
    status = invitation_status(invitation.status, invitation.expires_at, now or utc_now())
    return InvitationRead(
        id=invitation.id,
        tenant_id=invitation.tenant_id,
        email=invitation.email,
        phone=invitation.phone,
        role=invitation.role,
        status=status.value,
        invited_by_user_id=invitation.invited_by_user_id,
        expires_at=invitation.expires_at,
        revoked_at=invitation.revoked_at,
        accepted_at=invitation.accepted_at,
        created_at=invitation.created_at,
    )


class InvitationService:
    def __init__(
        self,
        invitation_repo: InvitationRepository,
        membership_service: MembershipService,
        session: AsyncSession,
        audit: AuditService | None = None,
    ):
        self.invitation_repo = invitation_repo
        self.membership_service = membership_service
        self.session = session
        self.audit = audit

    async def _get(self, tenant_id: UUID, invitation_id: UUID) -> Invitation:
        invitation = await self.invitation_repo.get_scoped(tenant_id, invitation_id)
        if invitation is None:
            raise NotFound("Invitation not found")
        return invitation

    async def list_for_tenant(
        self, tenant_id: UUID, cursor: str | None = None, limit: int = 50
    ) -> tuple[list[InvitationRead], str | None, bool]:
        rows, next_cursor, has_more = await self.invitation_repo.list_for_tenant(
            tenant_id, cursor, limit
        )
        now = utc_now()
        return [to_read(row, now) for row in rows], next_cursor, has_more

    async def create(
        self,
        tenant_id: UUID,
        email: str,
        invited_by_user_id: UUID,
        role: str = MembershipRole.MEMBER.value,
        phone: str | None = None,
        ttl_days: int | None = None,
    ) -> tuple[Invitation, str]:
        """Issue a new invitation.

        Returns (invitation, plaintext_token). Only the token hash is stored.

        The tenant row stays locked from the duplicate check to the commit.

        Raises:
            Conflict: an outstanding (SENT, unexpired) invitation exists for this email
        """
        email = normalize_email(email)
        await self.invitation_repo.lock_tenant(tenant_id)
        now = utc_now()
        if await self.invitation_repo.get_outstanding(tenant_id, email, now) is not None:
            raise Conflict(
                "An active invitation already exists for this email", code=INVITATION_EXISTS
            )

        token = generate_invitation_token()
        invitation = Invitation(
            tenant_id=tenant_id,
            email=email,
            phone=phone.strip() if phone else None,
            role=role,
            status=InvitationStatus.SENT.value,
            token_hash=hash_token(token),
            invited_by_user_id=invited_by_user_id,
            expires_at=now + timedelta(days=clamp_ttl_days(ttl_days)),
        )
        self.invitation_repo.add(invitation)
        await self.session.commit()
        await self.session.refresh(invitation)

        logger.info(
            "Invitation created",
            tenant_id=str(tenant_id),
            invitation_id=str(invitation.id),
            role=role,
        )
        if self.audit:
            await self.audit.record(
                AuditAction.INVITATION_CREATE,
                entity_type="invitation",
                entity_id=invitation.id,
                actor_user_id=invited_by_user_id,
                tenant_id=tenant_id,
                details={"email": email, "role": role},
            )
        return invitation, token

    async def resend(
        self, tenant_id: UUID, invitation_id: UUID, actor_user_id: UUID
    ) -> tuple[Invitation, str]:
        """Reissue token and expiry. Allowed from any state except ACCEPTED.

        A revoked invitation comes back as SENT with its revocation cleared.
        """
        invitation = await self._get(tenant_id, invitation_id)
        now = utc_now()
        status = invitation_status(invitation.status, invitation.expires_at, now)
        if status is InvitationStatus.ACCEPTED:
            raise InvalidState("Cannot resend an accepted invitation")

        token = generate_invitation_token()
        invitation.token_hash = hash_token(token)
        invitation.status = InvitationStatus.SENT.value
        invitation.revoked_at = None
        invitation.revoked_by_user_id = None
        invitation.expires_at = now + timedelta(days=get_settings().invite_expire_days)
        invitation.updated_at = now
        await self.session.commit()

        logger.info("Invitation resent", tenant_id=str(tenant_id), invitation_id=str(invitation.id))
        if self.audit:
            await self.audit.record(
                AuditAction.INVITATION_RESEND,
                entity_type="invitation",
                entity_id=invitation.id,
                actor_user_id=actor_user_id,
                tenant_id=tenant_id,
            )
        return invitation, token

    async def revoke(self, tenant_id: UUID, invitation_id: UUID, actor_user_id: UUID) -> Invitation:
        invitation = await self._get(tenant_id, invitation_id)
        now = utc_now()
        status = invitation_status(invitation.status, invitation.expires_at, now)
        if status is InvitationStatus.ACCEPTED:
            raise InvalidState("Accepted invitation cannot be revoked")

        invitation.status = InvitationStatus.REVOKED.value
        invitation.revoked_at = now
        invitation.revoked_by_user_id = actor_user_id
        invitation.updated_at = now
        await self.session.commit()

        logger.info(
            "Invitation revoked", tenant_id=str(tenant_id), invitation_id=str(invitation.id)
        )
        if self.audit:
            await self.audit.record(
                AuditAction.INVITATION_REVOKE,
                entity_type="invitation",
                entity_id=invitation.id,
                actor_user_id=actor_user_id,
                tenant_id=tenant_id,
            )
        return invitation

    async def find_by_token(self, tenant_id: UUID, token: str) -> Invitation | None:
        """Invitation for this tenant matching the plaintext token, in any state."""
        invitation = await self.invitation_repo.get_by_token_hash(hash_token(token))
        if invitation is None or invitation.tenant_id != tenant_id:
            return None
        return invitation

    async def accept(
        self, tenant_id: UUID, token: str, user: User
    ) -> tuple[Invitation, Membership]:
        """Consume an invitation for the signed-in user.

        The membership ends up ACTIVE with the stronger of its current role
        and the invited role, regardless of the tenant's approval policy.

        Raises:
            NotFound: no invitation with this token in this tenant
            InvitationInvalid: derived status is not SENT (includes a second accept)
            Forbidden: the invitation was addressed to another email
        """
        invitation = await self.find_by_token(tenant_id, token)
        if invitation is None:
            raise NotFound("Invitation not found")

        now = utc_now()
        status = invitation_status(invitation.status, invitation.expires_at, now)
        if status is not InvitationStatus.SENT:
            raise InvitationInvalid(f"Invitation is {status.value.lower()}")
        if normalize_email(invitation.email) != normalize_email(user.email):
            raise Forbidden("Invitation email does not match your account")

        if not await self.invitation_repo.mark_accepted(invitation.id, user.id, now):
            await self.session.rollback()
            raise InvitationInvalid("Invitation is no longer valid")
        membership = await self.membership_service.grant(tenant_id, user.id, invitation.role)
        await self.session.commit()
        await self.session.refresh(invitation)

        logger.info(
            "Invitation accepted",
            tenant_id=str(tenant_id),
            invitation_id=str(invitation.id),
            role=membership.role,
        )
        if self.audit:
            await self.audit.record(
                AuditAction.INVITATION_ACCEPT,
                entity_type="invitation",
                entity_id=invitation.id,
                actor_user_id=user.id,
                tenant_id=tenant_id,
                details={"membership_id": str(membership.id), "role": membership.role},
            )
        return invitation, membership
