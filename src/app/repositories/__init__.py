"""Repository layer - data access abstraction."""

from src.app.repositories.audit import AuditLogRepository
from src.app.repositories.base import BaseRepository, TenantScopedRepository
from src.app.repositories.community import (
    EventRepository,
    EventRsvpRepository,
    GroupMembershipRepository,
    GroupRepository,
    ProgramAssignmentRepository,
    ProgramEnrollmentRepository,
    ProgramModuleRepository,
    ProgramRepository,
)
from src.app.repositories.content import AnnouncementRepository, PostRepository, ResourceRepository
from src.app.repositories.file import BlobStore, StoredFileRepository
from src.app.repositories.invitation import InvitationRepository
from src.app.repositories.membership import MemberProfileRepository, MembershipRepository
from src.app.repositories.notification import NotificationRepository, RegistrationFieldRepository
from src.app.repositories.tenant import TenantRepository, TenantSettingsRepository
from src.app.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "TenantScopedRepository",
    # Identity and tenancy
    "AuditLogRepository",
    "InvitationRepository",
    "MemberProfileRepository",
    "MembershipRepository",
    "TenantRepository",
    "TenantSettingsRepository",
    "UserRepository",
    # Files
    "BlobStore",
    "StoredFileRepository",
    # Tenant features
    "AnnouncementRepository",
    "EventRepository",
    "EventRsvpRepository",
    "GroupMembershipRepository",
    "GroupRepository",
    "NotificationRepository",
    "PostRepository",
    "ProgramAssignmentRepository",
    "ProgramEnrollmentRepository",
    "ProgramModuleRepository",
    "ProgramRepository",
    "RegistrationFieldRepository",
    "ResourceRepository",
]
