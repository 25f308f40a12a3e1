"""Model exports.

Import from here: `from src.app.models import User, Tenant`.
Importing this package registers every table on SQLModel.metadata.
"""

from src.app.models.audit import AuditAction, AuditLog, AuditStatus
from src.app.models.community import (
    Event,
    EventRsvp,
    Group,
    GroupMembership,
    Program,
    ProgramAssignment,
    ProgramEnrollment,
    ProgramModule,
)
from src.app.models.content import Announcement, Post, Resource
from src.app.models.enums import (
    FilePurpose,
    GlobalRole,
    InvitationStatus,
    MembershipRole,
    MembershipStatus,
    ProgramStatus,
    RegistrationFieldType,
    ResourceType,
    RsvpStatus,
    TenantStatus,
    UserStatus,
    Visibility,
)
from src.app.models.file import StoredFile, StoredFileChunk
from src.app.models.invitation import Invitation
from src.app.models.membership import MemberProfile, Membership
from src.app.models.notification import Notification, RegistrationField
from src.app.models.tenant import Tenant, TenantSettings
from src.app.models.user import User

__all__ = [
    # Enums
    "AuditAction",
    "AuditStatus",
    "FilePurpose",
    "GlobalRole",
    "InvitationStatus",
    "MembershipRole",
    "MembershipStatus",
    "ProgramStatus",
    "RegistrationFieldType",
    "ResourceType",
    "RsvpStatus",
    "TenantStatus",
    "UserStatus",
    "Visibility",
    # Identity and tenancy
    "Invitation",
    "MemberProfile",
    "Membership",
    "Tenant",
    "TenantSettings",
    "User",
    # Files and audit
    "AuditLog",
    "StoredFile",
    "StoredFileChunk",
    # Tenant features
    "Announcement",
    "Event",
    "EventRsvp",
    "Group",
    "GroupMembership",
    "Notification",
    "Post",
    "Program",
    "ProgramAssignment",
    "ProgramEnrollment",
    "ProgramModule",
    "RegistrationField",
    "Resource",
]
