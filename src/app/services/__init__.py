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

__all__ = [
    "AdminService",
    "AuditService",
    "CommunityService",
    "ContentService",
    "FileService",
    "IdentityService",
    "InvitationService",
    "MembershipService",
    "NotificationService",
    "TenantService",
    "UserService",
]
