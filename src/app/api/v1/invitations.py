"""Tenant invitation endpoints.

Plaintext tokens appear only in the create and resend responses.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.app.api.dependencies import CurrentUser, InvitationServiceDep, ManagerAccess, TenantId
from src.app.models import Invitation
from src.app.schemas.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    InvitationCreate,
    InvitationRead,
    InvitationWithToken,
)
from src.app.schemas.membership import MembershipRead
from src.app.schemas.pagination import PaginatedResponse
from src.app.services.invitation_service import to_read

router = APIRouter(prefix="/tenants/{tenant_id}/invitations", tags=["invitations"])

_MANAGER_ONLY = {403: {"description": "OWNER or ADMIN role required"}}


def _with_token(invitation: Invitation, token: str) -> InvitationWithToken:
    return InvitationWithToken(**to_read(invitation).model_dump(), token=token)


@router.get("", response_model=PaginatedResponse[InvitationRead], responses=_MANAGER_ONLY)
async def list_invitations(
    access: ManagerAccess,
    invitations: InvitationServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Number of items per page")] = 50,
) -> PaginatedResponse[InvitationRead]:
    """List invitations with their status derived at read time."""
    items, next_cursor, has_more = await invitations.list_for_tenant(
        access.tenant_id, cursor, limit
    )
    return PaginatedResponse(items=items, next_cursor=next_cursor, has_more=has_more)


@router.post(
    "",
    response_model=InvitationWithToken,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Invitation created",
            "content": {
                "application/json": {
                    "example": {
                        "id": "0199f0e5-1a2b-7c3d-8e4f-5a6b7c8d9e0f",
                        "tenant_id": "0199f0e4-8d2b-7e3f-8a10-4b5c6d7e8f91",
                        "email": "grace@example.com",
                        "role": "MODERATOR",
                        "status": "SENT",
                        "expires_at": "2026-01-22T10:30:00Z",
                        "created_at": "2026-01-15T10:30:00Z",
                        "token": "k3Jx0m1Q9yZ8...",
                    }
                }
            },
        },
        **_MANAGER_ONLY,
        409: {"description": "An outstanding invitation exists (INVITATION_EXISTS)"},
    },
)
async def create_invitation(
    data: InvitationCreate, access: ManagerAccess, invitations: InvitationServiceDep
) -> InvitationWithToken:
    """Invite an email address. expires_in_days is clamped to 1..30 days."""
    invitation, token = await invitations.create(
        access.tenant_id,
        data.email,
        access.user_id,
        role=data.role,
        phone=data.phone,
        ttl_days=data.expires_in_days,
    )
    return _with_token(invitation, token)


@router.post(
    "/accept",
    response_model=AcceptInvitationResponse,
    responses={
        400: {"description": "Invitation expired, revoked or already accepted"},
        403: {"description": "Invitation addressed to another email"},
        404: {"description": "Invitation not found"},
    },
)
async def accept_invitation(
    data: AcceptInvitationRequest,
    tenant_id: TenantId,
    current_user: CurrentUser,
    invitations: InvitationServiceDep,
) -> AcceptInvitationResponse:
    """Accept an invitation as the signed-in user.

    The resulting membership is ACTIVE and keeps the stronger of the
    current and invited roles.
    """
    invitation, membership = await invitations.accept(tenant_id, data.token, current_user)
    return AcceptInvitationResponse(
        invitation=to_read(invitation), membership=MembershipRead.model_validate(membership)
    )


@router.put(
    "/{invitation_id}/resend",
    response_model=InvitationWithToken,
    responses={
        **_MANAGER_ONLY,
        400: {"description": "Invitation already accepted"},
        404: {"description": "Invitation not found"},
    },
)
async def resend_invitation(
    invitation_id: UUID, access: ManagerAccess, invitations: InvitationServiceDep
) -> InvitationWithToken:
    """Issue a fresh token and expiry. Revoked invitations become SENT again."""
    invitation, token = await invitations.resend(access.tenant_id, invitation_id, access.user_id)
    return _with_token(invitation, token)


@router.put(
    "/{invitation_id}/revoke",
    response_model=InvitationRead,
    responses={
        **_MANAGER_ONLY,
        400: {"description": "Invitation already accepted"},
        404: {"description": "Invitation not found"},
    },
)
async def revoke_invitation(
    invitation_id: UUID, access: ManagerAccess, invitations: InvitationServiceDep
) -> InvitationRead:
    invitation = await invitations.revoke(access.tenant_id, invitation_id, access.user_id)
    return to_read(invitation)
