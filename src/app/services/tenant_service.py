"""Tenant directory, settings, context and joining."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import NotFound, ValidationError
from src.app.core.logging import get_logger
from src.app.core.tenancy import MODERATION_ROLES, role_allowed
from src.app.models import (
    AuditAction,
    Membership,
    MembershipStatus,
    RegistrationField,
    Tenant,
    TenantSettings,
    User,
)
from src.app.models.base import utc_now
from src.app.models.tenant import DEFAULT_ENABLED_SECTIONS
from src.app.repositories import (
    RegistrationFieldRepository,
    TenantRepository,
    TenantSettingsRepository,
)
from src.app.schemas.notification import RegistrationFieldRead
from src.app.schemas.tenant import (
    InvitationPreview,
    JoinInfoResponse,
    JoinRequest,
    PublicTenantRead,
    TenantContextResponse,
    TenantRead,
)
from src.app.services.audit_service import AuditService
from src.app.services.invitation_service import InvitationService, invitation_status
from src.app.services.membership_service import MembershipService

logger = get_logger(__name__)

PUBLIC_LIST_LIMIT = 100


def membership_route(slug: str, role: str | None, status: str | None) -> str:
    """Where the UI should send a user after resolving their membership."""
    if status == MembershipStatus.PENDING.value:
        return f"/c/{slug}/pending"
    if role is not None and role_allowed(role, MODERATION_ROLES):
        return f"/c/{slug}/admin"
    return f"/c/{slug}"


class TenantService:
    def __init__(
        self,
        tenant_repo: TenantRepository,
        settings_repo: TenantSettingsRepository,
        field_repo: RegistrationFieldRepository,
        membership_service: MembershipService,
        invitation_service: InvitationService,
        session: AsyncSession,
        audit: AuditService | None = None,
    ):
        self.tenant_repo = tenant_repo
        self.settings_repo = settings_repo
        self.field_repo = field_repo
        self.membership_service = membership_service
        self.invitation_service = invitation_service
        self.session = session
        self.audit = audit

    # Directory

    async def list_public(self, search: str | None = None) -> list[Tenant]:
        return await self.tenant_repo.search_active(search, PUBLIC_LIST_LIMIT)

    async def get_by_slug(self, slug: str) -> Tenant:
        tenant = await self.tenant_repo.get_by_slug(slug.strip().lower())
        if tenant is None:
            raise NotFound("Tenant not found")
        return tenant

    async def get_tenant(self, tenant_id: UUID) -> Tenant:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise NotFound("Tenant not found")
        return tenant

    async def join_info(self, slug: str, invite_token: str | None = None) -> JoinInfoResponse:
        """What an anonymous visitor needs to render the join page."""
        tenant = await self.get_by_slug(slug)
        settings = await self.get_settings(tenant.id)
        fields = await self.field_repo.list_for_tenant(tenant.id, active_only=True)

        preview = None
        if invite_token:
            invitation = await self.invitation_service.find_by_token(tenant.id, invite_token)
            if invitation is not None:
                preview = InvitationPreview(
                    email=invitation.email,
                    role=invitation.role,
                    status=invitation_status(
                        invitation.status, invitation.expires_at, utc_now()
                    ).value,
                    expires_at=invitation.expires_at,
                )

        return JoinInfoResponse(
            tenant=PublicTenantRead.model_validate(tenant),
            public_signup=settings.public_signup,
            approval_required=settings.approval_required,
            registration_fields=[RegistrationFieldRead.model_validate(f) for f in fields]
            if settings.registration_fields_enabled
            else [],
            invitation=preview,
        )

    # Tenant profile

    async def update_tenant(
        self, tenant_id: UUID, changes: dict[str, Any], actor_user_id: UUID
    ) -> Tenant:
        tenant = await self.get_tenant(tenant_id)
        for field, value in changes.items():
            setattr(tenant, field, value)
        if "logo_url" in changes:
            tenant.logo_file_id = None
        tenant.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(tenant)

        logger.info("Tenant updated", tenant_id=str(tenant_id), fields=sorted(changes))
        if self.audit:
            await self.audit.record(
                AuditAction.TENANT_UPDATE,
                entity_type="tenant",
                entity_id=tenant_id,
                actor_user_id=actor_user_id,
                tenant_id=tenant_id,
                details={"fields": sorted(changes)},
            )
        return tenant

    async def set_logo(self, tenant_id: UUID, file_id: UUID, url: str) -> Tenant:
        tenant = await self.get_tenant(tenant_id)
        tenant.logo_file_id = file_id
        tenant.logo_url = url
        tenant.updated_at = utc_now()
        await self.session.commit()
        return tenant

    async def context(self, tenant_id: UUID, user: User) -> TenantContextResponse:
        tenant = await self.get_tenant(tenant_id)
        settings = await self.get_settings(tenant_id)
        membership = await self.membership_service.lookup(tenant_id, user.id, active_only=False)

        role = membership.role if membership else None
        status = membership.status if membership else None
        if membership is None and user.is_super_admin:
            next_route = f"/c/{tenant.slug}/admin"
        else:
            next_route = membership_route(tenant.slug, role, status)

        return TenantContextResponse(
            tenant=TenantRead.model_validate(tenant),
            role=role,
            membership_status=status,
            is_super_admin=user.is_super_admin,
            enabled_sections=settings.enabled_sections or list(DEFAULT_ENABLED_SECTIONS),
            next_route=next_route,
        )

    # Settings

    async def get_settings(self, tenant_id: UUID) -> TenantSettings:
        settings = await self.settings_repo.get_for_tenant(tenant_id)
        if settings is None:
            settings = await self.settings_repo.get_or_create(tenant_id)
            await self.session.commit()
        return settings

    async def update_settings(
        self, tenant_id: UUID, changes: dict[str, Any], actor_user_id: UUID
    ) -> TenantSettings:
        settings = await self.settings_repo.upsert_values(tenant_id, changes)
        await self.session.commit()

        logger.info("Tenant settings updated", tenant_id=str(tenant_id), fields=sorted(changes))
        if self.audit:
            await self.audit.record(
                AuditAction.SETTINGS_UPDATE,
                entity_type="tenant_settings",
                entity_id=settings.id,
                actor_user_id=actor_user_id,
                tenant_id=tenant_id,
                details=changes,
            )
        return settings

    # Registration fields

    async def list_fields(self, tenant_id: UUID) -> list[RegistrationField]:
        return await self.field_repo.list_for_tenant(tenant_id)

    async def create_field(self, tenant_id: UUID, values: dict[str, Any]) -> RegistrationField:
        field = RegistrationField(tenant_id=tenant_id, **values)
        self.field_repo.add(field)
        await self.session.commit()
        await self.session.refresh(field)
        return field

    async def update_field(
        self, tenant_id: UUID, field_id: UUID, values: dict[str, Any]
    ) -> RegistrationField:
        field = await self.field_repo.update_scoped(tenant_id, field_id, values)
        if field is None:
            raise NotFound("Field not found")
        await self.session.commit()
        return field

    # Joining

    async def join(
        self, tenant_id: UUID, user: User, data: JoinRequest
    ) -> tuple[Membership, bool]:
        """Join by tenant id: with an invite token this is an accept, else a direct join."""
        await self.get_tenant(tenant_id)
        if data.invite_token:
            _, membership = await self.invitation_service.accept(
                tenant_id, data.invite_token, user
            )
            await self._apply_profile(tenant_id, user, data)
            return membership, True

        settings = await self.get_settings(tenant_id)
        return await self.membership_service.join(
            tenant_id, user.id, settings, profile=_profile_values(data)
        )

    async def join_by_slug(
        self, slug: str, user: User, data: JoinRequest
    ) -> tuple[Membership, str, bool]:
        """Join by slug. Direct joins must supply full_name and phone for the profile.

        Returns:
            (membership, next_route, created)
        """
        tenant = await self.get_by_slug(slug)
        if data.invite_token:
            _, membership = await self.invitation_service.accept(
                tenant.id, data.invite_token, user
            )
            await self._apply_profile(tenant.id, user, data)
            created = True
        else:
            settings = await self.get_settings(tenant.id)
            existing = await self.membership_service.lookup(tenant.id, user.id, active_only=False)
            if existing is None and settings.public_signup:
                if not (data.full_name and data.full_name.strip()):
                    raise ValidationError("Full name is required")
                if not (data.phone and data.phone.strip()):
                    raise ValidationError("Phone number is required")
            membership, created = await self.membership_service.join(
                tenant.id, user.id, settings, profile=_profile_values(data)
            )
            await self._update_user_contact(user, data)

        next_route = membership_route(tenant.slug, membership.role, membership.status)
        return membership, next_route, created

    async def _apply_profile(self, tenant_id: UUID, user: User, data: JoinRequest) -> None:
        profile = _profile_values(data)
        if profile:
            await self.membership_service.upsert_profile(tenant_id, user.id, profile)
        await self._update_user_contact(user, data)

    async def _update_user_contact(self, user: User, data: JoinRequest) -> None:
        if not (data.full_name or data.phone):
            return
        if data.full_name:
            user.full_name = data.full_name.strip()
        if data.phone:
            user.phone = data.phone.strip()
        user.updated_at = utc_now()
        await self.session.commit()


def _profile_values(data: JoinRequest) -> dict[str, Any] | None:
    values: dict[str, Any] = {}
    if data.full_name:
        values["full_name"] = data.full_name.strip()
    if data.phone:
        values["phone"] = data.phone.strip()
    if data.custom_fields:
        values["custom_fields"] = data.custom_fields
    return values or None
