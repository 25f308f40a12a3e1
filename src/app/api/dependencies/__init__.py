"""FastAPI dependency injection definitions.

Re-exports the dependencies routes use.
"""

from src.app.api.dependencies.auth import CurrentUser, SuperUser, get_current_user
from src.app.api.dependencies.db import DBSession, get_db_session
from src.app.api.dependencies.services import (
    AdminServiceDep,
    AuditServiceDep,
    CommunityServiceDep,
    ContentServiceDep,
    FileServiceDep,
    IdentityServiceDep,
    InvitationServiceDep,
    MembershipServiceDep,
    NotificationServiceDep,
    TenantServiceDep,
    UserServiceDep,
    get_audit_service,
)
from src.app.api.dependencies.tenant import (
    ManagerAccess,
    MemberAccess,
    ModeratorAccess,
    TenantAccess,
    TenantId,
    require_role,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentUser",
    "SuperUser",
    "get_current_user",
    # Tenant
    "ManagerAccess",
    "MemberAccess",
    "ModeratorAccess",
    "TenantAccess",
    "TenantId",
    "require_role",
    # Services
    "AdminServiceDep",
    "AuditServiceDep",
    "CommunityServiceDep",
    "ContentServiceDep",
    "FileServiceDep",
    "IdentityServiceDep",
    "InvitationServiceDep",
    "MembershipServiceDep",
    "NotificationServiceDep",
    "TenantServiceDep",
    "UserServiceDep",
    "get_audit_service",
]
