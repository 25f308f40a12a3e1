"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.app.api.dependencies.db import DBSession
from src.app.repositories import (
    AnnouncementRepository,
    AuditLogRepository,
    EventRepository,
    EventRsvpRepository,
    GroupMembershipRepository,
    GroupRepository,
    InvitationRepository,
    MemberProfileRepository,
    MembershipRepository,
    NotificationRepository,
    PostRepository,
    ProgramAssignmentRepository,
    ProgramEnrollmentRepository,
    ProgramModuleRepository,
    ProgramRepository,
    RegistrationFieldRepository,
    ResourceRepository,
    StoredFileRepository,
    TenantRepository,
    TenantSettingsRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_tenant_repository(session: DBSession) -> TenantRepository:
    return TenantRepository(session)


def get_tenant_settings_repository(session: DBSession) -> TenantSettingsRepository:
    return TenantSettingsRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    return MembershipRepository(session)


def get_member_profile_repository(session: DBSession) -> MemberProfileRepository:
    return MemberProfileRepository(session)


def get_invitation_repository(session: DBSession) -> InvitationRepository:
    return InvitationRepository(session)


def get_audit_log_repository(session: DBSession) -> AuditLogRepository:
    """Read side of the audit log. Writes go through AuditService's own session."""
    return AuditLogRepository(session)


def get_file_repository(session: DBSession) -> StoredFileRepository:
    return StoredFileRepository(session)


def get_notification_repository(session: DBSession) -> NotificationRepository:
    return NotificationRepository(session)


def get_registration_field_repository(session: DBSession) -> RegistrationFieldRepository:
    return RegistrationFieldRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
TenantRepo = Annotated[TenantRepository, Depends(get_tenant_repository)]
TenantSettingsRepo = Annotated[TenantSettingsRepository, Depends(get_tenant_settings_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
MemberProfileRepo = Annotated[MemberProfileRepository, Depends(get_member_profile_repository)]
InvitationRepo = Annotated[InvitationRepository, Depends(get_invitation_repository)]
AuditLogRepo = Annotated[AuditLogRepository, Depends(get_audit_log_repository)]
FileRepo = Annotated[StoredFileRepository, Depends(get_file_repository)]
NotificationRepo = Annotated[NotificationRepository, Depends(get_notification_repository)]
RegistrationFieldRepo = Annotated[
    RegistrationFieldRepository, Depends(get_registration_field_repository)
]


# Tenant features


def get_announcement_repository(session: DBSession) -> AnnouncementRepository:
    return AnnouncementRepository(session)


def get_post_repository(session: DBSession) -> PostRepository:
    return PostRepository(session)


def get_resource_repository(session: DBSession) -> ResourceRepository:
    return ResourceRepository(session)


def get_group_repository(session: DBSession) -> GroupRepository:
    return GroupRepository(session)


def get_program_repository(session: DBSession) -> ProgramRepository:
    return ProgramRepository(session)


def get_program_module_repository(session: DBSession) -> ProgramModuleRepository:
    return ProgramModuleRepository(session)


AnnouncementRepo = Annotated[AnnouncementRepository, Depends(get_announcement_repository)]
PostRepo = Annotated[PostRepository, Depends(get_post_repository)]
ResourceRepo = Annotated[ResourceRepository, Depends(get_resource_repository)]
GroupRepo = Annotated[GroupRepository, Depends(get_group_repository)]
ProgramRepo = Annotated[ProgramRepository, Depends(get_program_repository)]
ProgramModuleRepo = Annotated[ProgramModuleRepository, Depends(get_program_module_repository)]


def get_group_membership_repository(session: DBSession) -> GroupMembershipRepository:
    return GroupMembershipRepository(session)


def get_event_repository(session: DBSession) -> EventRepository:
    return EventRepository(session)


def get_event_rsvp_repository(session: DBSession) -> EventRsvpRepository:
    return EventRsvpRepository(session)


def get_program_assignment_repository(session: DBSession) -> ProgramAssignmentRepository:
    return ProgramAssignmentRepository(session)


def get_program_enrollment_repository(session: DBSession) -> ProgramEnrollmentRepository:
    return ProgramEnrollmentRepository(session)


GroupMembershipRepo = Annotated[
    GroupMembershipRepository, Depends(get_group_membership_repository)
]
EventRepo = Annotated[EventRepository, Depends(get_event_repository)]
EventRsvpRepo = Annotated[EventRsvpRepository, Depends(get_event_rsvp_repository)]
ProgramAssignmentRepo = Annotated[
    ProgramAssignmentRepository, Depends(get_program_assignment_repository)
]
ProgramEnrollmentRepo = Annotated[
    ProgramEnrollmentRepository, Depends(get_program_enrollment_repository)
]
