"""Service factory dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends

from src.app.api.dependencies.db import DBSession
from src.app.api.dependencies.repositories import (
    AnnouncementRepo,
    AuditLogRepo,
    EventRepo,
    EventRsvpRepo,
    FileRepo,
    GroupMembershipRepo,
    GroupRepo,
    InvitationRepo,
    MemberProfileRepo,
    MembershipRepo,
    NotificationRepo,
    PostRepo,
    ProgramAssignmentRepo,
    ProgramEnrollmentRepo,
    ProgramModuleRepo,
    ProgramRepo,
    RegistrationFieldRepo,
    ResourceRepo,
    TenantRepo,
    TenantSettingsRepo,
    UserRepo,
)
from src.app.core.db import get_session
from src.app.repositories import AuditLogRepository
from src.app.services.admin_service import AdminService
from src.app.services.audit_service import AuditService
from src.app.services.community_service import CommunityService
from src.app.services.content_service import ContentService
from src.app.services.file_service import FileService
from src.app.services.identity_service import IdentityService
from src.app.services.invitation_service import InvitationService
from src.app.services.membership_service import MembershipService
from src.app.services.notification_service import NotificationService
from src.app.services.tenant_service import TenantService
from src.app.services.user_service import UserService


async def get_audit_service() -> AsyncGenerator[AuditService]:
    """Get audit service with its own isolated session.

    Uses a dedicated session that commits independently from business transactions.
    This ensures audit logs are preserved even if the main transaction rolls back.
    """
    async with get_session() as session:
        yield AuditService(AuditLogRepository(session), session)


AuditServiceDep = Annotated[AuditService, Depends(get_audit_service)]


def get_identity_service(user_repo: UserRepo, session: DBSession) -> IdentityService:
    return IdentityService(user_repo, session)


def get_user_service(
    tenant_repo: TenantRepo, membership_repo: MembershipRepo, session: DBSession
) -> UserService:
    return UserService(tenant_repo, membership_repo, session)


def get_membership_service(
    membership_repo: MembershipRepo,
    profile_repo: MemberProfileRepo,
    notification_repo: NotificationRepo,
    session: DBSession,
    audit: AuditServiceDep,
) -> MembershipService:
    return MembershipService(membership_repo, profile_repo, notification_repo, session, audit)


IdentityServiceDep = Annotated[IdentityService, Depends(get_identity_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
MembershipServiceDep = Annotated[MembershipService, Depends(get_membership_service)]


def get_invitation_service(
    invitation_repo: InvitationRepo,
    membership_service: MembershipServiceDep,
    session: DBSession,
    audit: AuditServiceDep,
) -> InvitationService:
    return InvitationService(invitation_repo, membership_service, session, audit)


InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]


def get_tenant_service(
    tenant_repo: TenantRepo,
    settings_repo: TenantSettingsRepo,
    field_repo: RegistrationFieldRepo,
    membership_service: MembershipServiceDep,
    invitation_service: InvitationServiceDep,
    session: DBSession,
    audit: AuditServiceDep,
) -> TenantService:
    return TenantService(
        tenant_repo,
        settings_repo,
        field_repo,
        membership_service,
        invitation_service,
        session,
        audit,
    )


def get_admin_service(
    user_repo: UserRepo,
    tenant_repo: TenantRepo,
    settings_repo: TenantSettingsRepo,
    membership_repo: MembershipRepo,
    audit_repo: AuditLogRepo,
    session: DBSession,
    audit: AuditServiceDep,
) -> AdminService:
    """Get admin service (no tenant context required)."""
    return AdminService(
        user_repo, tenant_repo, settings_repo, membership_repo, audit_repo, session, audit
    )


def get_file_service(
    file_repo: FileRepo, session: DBSession, audit: AuditServiceDep
) -> FileService:
    return FileService(file_repo, session, audit)


def get_content_service(
    announcement_repo: AnnouncementRepo,
    post_repo: PostRepo,
    resource_repo: ResourceRepo,
    group_repo: GroupRepo,
    program_repo: ProgramRepo,
    module_repo: ProgramModuleRepo,
    file_repo: FileRepo,
    session: DBSession,
    audit: AuditServiceDep,
) -> ContentService:
    return ContentService(
        announcement_repo,
        post_repo,
        resource_repo,
        group_repo,
        program_repo,
        module_repo,
        file_repo,
        session,
        audit,
    )


def get_community_service(
    group_repo: GroupRepo,
    group_member_repo: GroupMembershipRepo,
    event_repo: EventRepo,
    rsvp_repo: EventRsvpRepo,
    program_repo: ProgramRepo,
    module_repo: ProgramModuleRepo,
    assignment_repo: ProgramAssignmentRepo,
    enrollment_repo: ProgramEnrollmentRepo,
    resource_repo: ResourceRepo,
    file_repo: FileRepo,
    session: DBSession,
) -> CommunityService:
    return CommunityService(
        group_repo,
        group_member_repo,
        event_repo,
        rsvp_repo,
        program_repo,
        module_repo,
        assignment_repo,
        enrollment_repo,
        resource_repo,
        file_repo,
        session,
    )


def get_notification_service(
    notification_repo: NotificationRepo, session: DBSession
) -> NotificationService:
    return NotificationService(notification_repo, session)


TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
FileServiceDep = Annotated[FileService, Depends(get_file_service)]
ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]
CommunityServiceDep = Annotated[CommunityService, Depends(get_community_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
