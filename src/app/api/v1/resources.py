"""Tenant resource library endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.app.api.dependencies import ContentServiceDep, MemberAccess, ModeratorAccess
from src.app.api.v1.params import CursorQuery, LimitQuery
from src.app.schemas.content import ResourceCreate, ResourceRead, ResourceUpdate
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/tenants/{tenant_id}/resources", tags=["resources"])

_NOT_FOUND = {404: {"description": "Resource or a referenced entity not found"}}


@router.get("", response_model=PaginatedResponse[ResourceRead])
async def list_resources(
    access: MemberAccess,
    content: ContentServiceDep,
    group_id: Annotated[UUID | None, Query()] = None,
    program_id: Annotated[UUID | None, Query()] = None,
    module_id: Annotated[UUID | None, Query()] = None,
    folder: Annotated[str | None, Query(max_length=120)] = None,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[ResourceRead]:
    page = await content.list_resources(
        access.tenant_id,
        group_id=group_id,
        program_id=program_id,
        module_id=module_id,
        folder=folder,
        cursor=cursor,
        limit=limit,
    )
    return PaginatedResponse.from_page(page, ResourceRead.model_validate)


@router.get("/{resource_id}", response_model=ResourceRead, responses=_NOT_FOUND)
async def get_resource(
    resource_id: UUID, access: MemberAccess, content: ContentServiceDep
) -> ResourceRead:
    return ResourceRead.model_validate(await content.get_resource(access.tenant_id, resource_id))


@router.post(
    "",
    response_model=ResourceRead,
    status_code=status.HTTP_201_CREATED,
    responses=_NOT_FOUND,
)
async def create_resource(
    data: ResourceCreate, access: ModeratorAccess, content: ContentServiceDep
) -> ResourceRead:
    """Add a link or an uploaded file to the library.

    For file resources, name, type and size are taken from the stored file.
    """
    resource = await content.create_resource(access.tenant_id, data, access.user_id)
    return ResourceRead.model_validate(resource)


@router.put("/{resource_id}", response_model=ResourceRead, responses=_NOT_FOUND)
async def update_resource(
    resource_id: UUID, data: ResourceUpdate, access: ModeratorAccess, content: ContentServiceDep
) -> ResourceRead:
    resource = await content.update_resource(access.tenant_id, resource_id, data)
    return ResourceRead.model_validate(resource)


@router.delete(
    "/{resource_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Resource not found"}},
)
async def delete_resource(
    resource_id: UUID, access: ModeratorAccess, content: ContentServiceDep
) -> None:
    await content.delete_resource(access.tenant_id, resource_id)
