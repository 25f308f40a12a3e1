"""Tenant group endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.app.api.dependencies import CommunityServiceDep, MemberAccess, ModeratorAccess
from src.app.api.v1.params import CursorQuery, LimitQuery
from src.app.schemas.community import (
    GroupCreate,
    GroupMemberRead,
    GroupRead,
    GroupUpdate,
    ProgramRead,
)
from src.app.schemas.content import ResourceRead
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/tenants/{tenant_id}/groups", tags=["groups"])

_GROUP_NOT_FOUND = {404: {"description": "Group not found"}}


@router.get("", response_model=PaginatedResponse[GroupRead])
async def list_groups(
    access: MemberAccess,
    community: CommunityServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[GroupRead]:
    page = await community.list_groups(access.tenant_id, cursor, limit)
    return PaginatedResponse.from_page(page, GroupRead.model_validate)


@router.post("", response_model=GroupRead, status_code=status.HTTP_201_CREATED)
async def create_group(
    data: GroupCreate, access: ModeratorAccess, community: CommunityServiceDep
) -> GroupRead:
    group = await community.create_group(access.tenant_id, data.model_dump(), access.user_id)
    return GroupRead.model_validate(group)


@router.get("/{group_id}", response_model=GroupRead, responses=_GROUP_NOT_FOUND)
async def get_group(
    group_id: UUID, access: MemberAccess, community: CommunityServiceDep
) -> GroupRead:
    return GroupRead.model_validate(await community.get_group(access.tenant_id, group_id))


@router.put("/{group_id}", response_model=GroupRead, responses=_GROUP_NOT_FOUND)
async def update_group(
    group_id: UUID, data: GroupUpdate, access: ModeratorAccess, community: CommunityServiceDep
) -> GroupRead:
    group = await community.update_group(
        access.tenant_id, group_id, data.model_dump(exclude_unset=True)
    )
    return GroupRead.model_validate(group)


@router.get(
    "/{group_id}/members", response_model=list[GroupMemberRead], responses=_GROUP_NOT_FOUND
)
async def list_group_members(
    group_id: UUID, access: MemberAccess, community: CommunityServiceDep
) -> list[GroupMemberRead]:
    members = await community.list_group_members(access.tenant_id, group_id)
    return [GroupMemberRead.model_validate(m) for m in members]


@router.post(
    "/{group_id}/join",
    response_model=GroupMemberRead,
    responses=_GROUP_NOT_FOUND,
)
async def join_group(
    group_id: UUID, access: MemberAccess, community: CommunityServiceDep
) -> GroupMemberRead:
    """Join a group. Joining twice returns the same membership."""
    membership = await community.join_group(access.tenant_id, group_id, access.user_id)
    return GroupMemberRead.model_validate(membership)


@router.delete(
    "/{group_id}/leave",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_GROUP_NOT_FOUND,
)
async def leave_group(
    group_id: UUID, access: MemberAccess, community: CommunityServiceDep
) -> None:
    await community.leave_group(access.tenant_id, group_id, access.user_id)


@router.delete(
    "/{group_id}/members/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Group or group membership not found"}},
)
async def remove_group_member(
    group_id: UUID, user_id: UUID, access: ModeratorAccess, community: CommunityServiceDep
) -> None:
    await community.remove_group_member(access.tenant_id, group_id, user_id)


@router.get("/{group_id}/programs", response_model=list[ProgramRead], responses=_GROUP_NOT_FOUND)
async def list_group_programs(
    group_id: UUID, access: MemberAccess, community: CommunityServiceDep
) -> list[ProgramRead]:
    """Programs assigned to the group."""
    programs = await community.list_group_programs(access.tenant_id, group_id)
    return [ProgramRead.model_validate(p) for p in programs]


@router.get(
    "/{group_id}/resources", response_model=list[ResourceRead], responses=_GROUP_NOT_FOUND
)
async def list_group_resources(
    group_id: UUID, access: MemberAccess, community: CommunityServiceDep
) -> list[ResourceRead]:
    resources = await community.list_group_resources(access.tenant_id, group_id)
    return [ResourceRead.model_validate(r) for r in resources]
