"""Tenant membership management and the caller's own member profile."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.app.api.dependencies import ManagerAccess, MemberAccess, MembershipServiceDep
from src.app.schemas.membership import (
    MemberProfileRead,
    MemberProfileUpdate,
    MemberRead,
    MembershipRead,
    MemberUpdate,
)
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/tenants/{tenant_id}", tags=["members"])


@router.get(
    "/members",
    response_model=PaginatedResponse[MemberRead],
    responses={403: {"description": "OWNER or ADMIN role required"}},
)
async def list_members(
    access: ManagerAccess,
    memberships: MembershipServiceDep,
    status: Annotated[str | None, Query(description="Filter by membership status")] = None,
    role: Annotated[str | None, Query(description="Filter by role")] = None,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Number of items per page")] = 50,
) -> PaginatedResponse[MemberRead]:
    items, next_cursor, has_more = await memberships.list_members(
        access.tenant_id, status=status, role=role, cursor=cursor, limit=limit
    )
    return PaginatedResponse(items=items, next_cursor=next_cursor, has_more=has_more)


@router.put(
    "/members/{user_id}",
    response_model=MembershipRead,
    responses={
        403: {"description": "OWNER or ADMIN role required"},
        404: {"description": "Membership not found"},
    },
)
async def update_member(
    user_id: UUID,
    data: MemberUpdate,
    access: ManagerAccess,
    memberships: MembershipServiceDep,
) -> MembershipRead:
    """Change a member's role and/or status. The member is notified of the change."""
    membership = await memberships.update_member(
        access.tenant_id, user_id, access.user_id, role=data.role, status=data.status
    )
    return MembershipRead.model_validate(membership)


@router.get(
    "/member-profile",
    response_model=MemberProfileRead | None,
    responses={403: {"description": "Not an active member"}},
)
async def get_my_profile(
    access: MemberAccess, memberships: MembershipServiceDep
) -> MemberProfileRead | None:
    """The caller's profile in this tenant, or null if none was filled in yet."""
    profile = await memberships.get_profile(access.tenant_id, access.user_id)
    return MemberProfileRead.model_validate(profile) if profile else None


@router.put(
    "/member-profile",
    response_model=MemberProfileRead,
    responses={403: {"description": "Not an active member"}},
)
async def upsert_my_profile(
    data: MemberProfileUpdate, access: MemberAccess, memberships: MembershipServiceDep
) -> MemberProfileRead:
    profile = await memberships.upsert_profile(
        access.tenant_id, access.user_id, data.model_dump(exclude_unset=True)
    )
    return MemberProfileRead.model_validate(profile)
