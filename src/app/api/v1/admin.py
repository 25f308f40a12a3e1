"""Admin API endpoints (super-admin only)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from src.app.api.dependencies import AdminServiceDep, AuditServiceDep, SuperUser
from src.app.schemas.admin import (
    AdminOverview,
    AdminUserUpdate,
    PromoteUserRequest,
    PromoteUserResponse,
)
from src.app.schemas.audit import AuditLogRead
from src.app.schemas.membership import MembershipRead
from src.app.schemas.pagination import PaginatedResponse
from src.app.schemas.tenant import TenantCreate, TenantRead, TenantStatusUpdate
from src.app.schemas.user import UserRead

router = APIRouter(prefix="/admin", tags=["admin"])

_ADMIN_ERRORS = {
    401: {"description": "Not authenticated"},
    403: {"description": "Not authorized (super-admin required)"},
}


@router.get(
    "/overview",
    response_model=AdminOverview,
    summary="Platform overview",
    responses={
        200: {
            "description": "Platform-wide counters and recent audit activity",
            "content": {
                "application/json": {
                    "example": {
                        "total_users": 1204,
                        "total_tenants": 37,
                        "active_tenants": 35,
                        "active_memberships": 2210,
                        "recent_activity": [],
                    }
                }
            },
        },
        **_ADMIN_ERRORS,
    },
)
async def get_overview(_user: SuperUser, admin_service: AdminServiceDep) -> AdminOverview:
    return await admin_service.overview()


@router.get(
    "/users",
    response_model=PaginatedResponse[UserRead],
    summary="List all users",
    responses=_ADMIN_ERRORS,
)
async def list_users(
    _user: SuperUser,
    admin_service: AdminServiceDep,
    search: Annotated[str | None, Query(description="Match on email or name")] = None,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Number of items per page")] = 50,
) -> PaginatedResponse[UserRead]:
    page = await admin_service.list_users(cursor, limit, search)
    return PaginatedResponse.from_page(page, UserRead.model_validate)


@router.patch(
    "/users/{user_id}",
    response_model=UserRead,
    summary="Change a user's global role or status",
    responses={**_ADMIN_ERRORS, 404: {"description": "User not found"}},
)
async def update_user(
    user_id: UUID,
    data: AdminUserUpdate,
    current_user: SuperUser,
    admin_service: AdminServiceDep,
) -> UserRead:
    """Set global_role and/or status. At least one of them is required."""
    user = await admin_service.update_user(
        user_id, data.model_dump(exclude_none=True), current_user.id
    )
    return UserRead.model_validate(user)


@router.post(
    "/users/{user_id}/promote",
    response_model=PromoteUserResponse,
    summary="Make a user the manager of a tenant",
    responses={
        200: {"description": "User promoted in an existing tenant"},
        201: {
            "description": "Tenant created and user promoted",
            "content": {
                "application/json": {
                    "example": {
                        "tenant": {
                            "id": "0199f0e4-8d2b-7e3f-8a10-4b5c6d7e8f91",
                            "name": "Acme Runners",
                            "slug": "acme",
                            "status": "ACTIVE",
                            "is_active": True,
                            "created_at": "2026-01-15T10:30:00Z",
                        },
                        "membership": {
                            "role": "OWNER",
                            "status": "ACTIVE",
                        },
                        "tenant_created": True,
                    }
                }
            },
        },
        **_ADMIN_ERRORS,
        404: {"description": "User or existing tenant not found"},
        409: {"description": "Slug already in use (SLUG_EXISTS)"},
    },
)
async def promote_user(
    user_id: UUID,
    data: PromoteUserRequest,
    response: Response,
    current_user: SuperUser,
    admin_service: AdminServiceDep,
) -> PromoteUserResponse:
    """Give a user an ACTIVE OWNER (or ADMIN) membership.

    With existing_tenant_id the membership is granted there; otherwise a
    tenant is created from name and slug. Repeating the call converges on
    the same membership.
    """
    tenant_values = None
    if data.existing_tenant_id is None:
        tenant_values = data.model_dump(include={"name", "slug", "description"})

    tenant, membership, created = await admin_service.promote_user(
        user_id,
        current_user.id,
        membership_role=data.membership_role,
        existing_tenant_id=data.existing_tenant_id,
        tenant_values=tenant_values,
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return PromoteUserResponse(
        tenant=TenantRead.model_validate(tenant),
        membership=MembershipRead.model_validate(membership),
        tenant_created=created,
    )


@router.get(
    "/tenants",
    response_model=PaginatedResponse[TenantRead],
    summary="List all tenants",
    description="List every tenant whatever its status. Requires super-admin privileges.",
    responses=_ADMIN_ERRORS,
)
async def list_all_tenants(
    _user: SuperUser,
    admin_service: AdminServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Number of items per page")] = 50,
) -> PaginatedResponse[TenantRead]:
    page = await admin_service.list_tenants(cursor, limit)
    return PaginatedResponse.from_page(page, TenantRead.model_validate)


@router.post(
    "/tenants",
    response_model=TenantRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a tenant",
    responses={**_ADMIN_ERRORS, 409: {"description": "Slug already in use (SLUG_EXISTS)"}},
)
async def create_tenant(
    data: TenantCreate, current_user: SuperUser, admin_service: AdminServiceDep
) -> TenantRead:
    """Create a tenant. The calling super-admin becomes its OWNER."""
    tenant = await admin_service.create_tenant(data.model_dump(), current_user.id)
    return TenantRead.model_validate(tenant)


@router.patch(
    "/tenants/{tenant_id}/status",
    response_model=TenantRead,
    summary="Activate or suspend a tenant",
    responses={**_ADMIN_ERRORS, 404: {"description": "Tenant not found"}},
)
async def update_tenant_status(
    tenant_id: UUID,
    data: TenantStatusUpdate,
    current_user: SuperUser,
    admin_service: AdminServiceDep,
) -> TenantRead:
    tenant = await admin_service.update_tenant_status(tenant_id, data.status, current_user.id)
    return TenantRead.model_validate(tenant)


@router.delete(
    "/tenants/{tenant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a tenant",
    description="Hard-delete a tenant together with everything it owns.",
    responses={**_ADMIN_ERRORS, 404: {"description": "Tenant not found"}},
)
async def delete_tenant(
    tenant_id: UUID, current_user: SuperUser, admin_service: AdminServiceDep
) -> None:
    await admin_service.delete_tenant(tenant_id, current_user.id)


@router.get(
    "/audit-logs",
    response_model=PaginatedResponse[AuditLogRead],
    summary="Query audit logs across all tenants",
    responses=_ADMIN_ERRORS,
)
async def list_all_audit_logs(
    _user: SuperUser,
    audit: AuditServiceDep,
    action: Annotated[str | None, Query(description="Filter by action type")] = None,
    tenant_id: Annotated[UUID | None, Query(description="Filter by tenant")] = None,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Number of items per page")] = 50,
) -> PaginatedResponse[AuditLogRead]:
    """Query platform-wide audit logs, newest first."""
    page = await audit.list_all_logs(cursor=cursor, limit=limit, action=action, tenant_id=tenant_id)
    return PaginatedResponse.from_page(page, AuditLogRead.model_validate)
