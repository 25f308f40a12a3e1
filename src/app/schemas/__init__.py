from src.app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from src.app.schemas.invitation import (
    AcceptInvitationRequest,
    InvitationCreate,
    InvitationRead,
    InvitationWithToken,
)
from src.app.schemas.membership import MemberRead, MembershipRead, MemberUpdate
from src.app.schemas.pagination import PaginatedResponse
from src.app.schemas.tenant import TenantCreate, TenantRead, TenantUpdate
from src.app.schemas.user import UserRead, UserUpdate

__all__ = [
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    # Invitations
    "AcceptInvitationRequest",
    "InvitationCreate",
    "InvitationRead",
    "InvitationWithToken",
    # Membership
    "MemberRead",
    "MemberUpdate",
    "MembershipRead",
    # Pagination
    "PaginatedResponse",
    # Tenant
    "TenantCreate",
    "TenantRead",
    "TenantUpdate",
    # User
    "UserRead",
    "UserUpdate",
]
