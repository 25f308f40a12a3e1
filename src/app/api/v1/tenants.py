"""Tenant profile, context and join endpoints."""

from fastapi import APIRouter, Response, status

from src.app.api.dependencies import (
    CurrentUser,
    ManagerAccess,
    MemberAccess,
    TenantId,
    TenantServiceDep,
)
from src.app.schemas.membership import MembershipRead
from src.app.schemas.tenant import (
    JoinRequest,
    JoinResponse,
    TenantContextResponse,
    TenantRead,
    TenantUpdate,
)
from src.app.services.tenant_service import membership_route

router = APIRouter(prefix="/tenants", tags=["tenants"])

_JOIN_RESPONSES = {
    200: {"description": "Already a member; the existing membership is returned"},
    201: {
        "description": "Membership created",
        "content": {
            "application/json": {
                "example": {
                    "membership": {
                        "tenant_id": "0199f0e4-8d2b-7e3f-8a10-4b5c6d7e8f91",
                        "role": "MEMBER",
                        "status": "PENDING",
                    },
                    "next_route": "/c/acme/pending",
                    "created": True,
                }
            }
        },
    },
    400: {"description": "Invitation invalid, or profile details missing"},
    403: {"description": "Banned from the tenant, or public joining disabled"},
    404: {"description": "Tenant not found"},
}


@router.post(
    "/by-slug/{slug}/join",
    response_model=JoinResponse,
    responses=_JOIN_RESPONSES,
)
async def join_by_slug(
    slug: str,
    data: JoinRequest,
    response: Response,
    current_user: CurrentUser,
    tenants: TenantServiceDep,
) -> JoinResponse:
    """Join a tenant from its public page.

    With invite_token this accepts the invitation. Without one the tenant
    must allow public signup, and a first-time join must include full_name
    and phone.
    """
    membership, next_route, created = await tenants.join_by_slug(slug, current_user, data)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return JoinResponse(
        membership=MembershipRead.model_validate(membership),
        next_route=next_route,
        created=created,
    )


@router.get(
    "/{tenant_id}",
    response_model=TenantRead,
    responses={
        400: {"description": "Malformed tenant id"},
        403: {"description": "Not an active member"},
        404: {"description": "Tenant not found"},
    },
)
async def get_tenant(access: MemberAccess, tenants: TenantServiceDep) -> TenantRead:
    return TenantRead.model_validate(await tenants.get_tenant(access.tenant_id))


@router.patch(
    "/{tenant_id}",
    response_model=TenantRead,
    responses={403: {"description": "OWNER or ADMIN role required"}},
)
async def update_tenant(
    data: TenantUpdate, access: ManagerAccess, tenants: TenantServiceDep
) -> TenantRead:
    """Update the tenant profile. Setting logo_url detaches any uploaded logo."""
    tenant = await tenants.update_tenant(
        access.tenant_id, data.model_dump(exclude_unset=True), access.user_id
    )
    return TenantRead.model_validate(tenant)


@router.get(
    "/{tenant_id}/context",
    response_model=TenantContextResponse,
    responses={
        200: {
            "description": "The caller's standing in the tenant",
            "content": {
                "application/json": {
                    "example": {
                        "tenant": {"slug": "acme", "name": "Acme Runners", "status": "ACTIVE"},
                        "role": "ADMIN",
                        "membership_status": "ACTIVE",
                        "is_super_admin": False,
                        "enabled_sections": ["announcements", "resources", "events"],
                        "next_route": "/c/acme/admin",
                    }
                }
            },
        },
        404: {"description": "Tenant not found"},
    },
)
async def get_tenant_context(
    tenant_id: TenantId, current_user: CurrentUser, tenants: TenantServiceDep
) -> TenantContextResponse:
    """Role, membership status and next route for the caller. Works for non-members."""
    return await tenants.context(tenant_id, current_user)


@router.post(
    "/{tenant_id}/join",
    response_model=JoinResponse,
    responses=_JOIN_RESPONSES,
)
async def join_tenant(
    data: JoinRequest,
    response: Response,
    tenant_id: TenantId,
    current_user: CurrentUser,
    tenants: TenantServiceDep,
) -> JoinResponse:
    """Join by tenant id, directly or with invite_token."""
    membership, created = await tenants.join(tenant_id, current_user, data)
    tenant = await tenants.get_tenant(tenant_id)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return JoinResponse(
        membership=MembershipRead.model_validate(membership),
        next_route=membership_route(tenant.slug, membership.role, membership.status),
        created=created,
    )
