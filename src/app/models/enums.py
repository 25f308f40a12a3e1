"""Shared enums for models."""

from enum import Enum


class GlobalRole(str, Enum):
    """Platform-wide role of a user."""

    SUPER_ADMIN = "SUPER_ADMIN"
    USER = "USER"


class UserStatus(str, Enum):
    """Account status, checked on every authenticated request."""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    BANNED = "BANNED"


class TenantStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


class MembershipRole(str, Enum):
    """User role within a tenant."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"
    MEMBER = "MEMBER"


class MembershipStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    BANNED = "BANNED"


class InvitationStatus(str, Enum):
    """Invitation status.

    EXPIRED is never stored; it is derived from expires_at at read time.
    """

    SENT = "SENT"
    ACCEPTED = "ACCEPTED"
    REVOKED = "REVOKED"
    EXPIRED = "EXPIRED"


class FilePurpose(str, Enum):
    RESOURCE = "resource"
    RESOURCE_THUMBNAIL = "resource-thumbnail"
    EVENT_THUMBNAIL = "event-thumbnail"
    ANNOUNCEMENT_ATTACHMENT = "announcement-attachment"
    POST_MEDIA = "post-media"
    LOGO = "logo"


class Visibility(str, Enum):
    PUBLIC = "PUBLIC"
    MEMBERS = "MEMBERS"


class ResourceType(str, Enum):
    LINK = "link"
    FILE = "file"


class RsvpStatus(str, Enum):
    GOING = "GOING"
    MAYBE = "MAYBE"
    NOT_GOING = "NOT_GOING"


class ProgramStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DRAFT = "DRAFT"
    ARCHIVED = "ARCHIVED"


class RegistrationFieldType(str, Enum):
    TEXT = "TEXT"
    TEXTAREA = "TEXTAREA"
    SELECT = "SELECT"
    CHECKBOX = "CHECKBOX"
    DATE = "DATE"
    PHONE = "PHONE"
    EMAIL = "EMAIL"
