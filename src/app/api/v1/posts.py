"""Tenant post endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.app.api.dependencies import ContentServiceDep, MemberAccess, ModeratorAccess
from src.app.api.v1.params import CursorQuery, LimitQuery
from src.app.core.tenancy import MODERATION_ROLES, role_allowed
from src.app.schemas.content import PostCreate, PostRead, PostUpdate
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/tenants/{tenant_id}/posts", tags=["posts"])


@router.get("", response_model=PaginatedResponse[PostRead])
async def list_posts(
    access: MemberAccess,
    content: ContentServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[PostRead]:
    """Published posts. Moderators also see drafts."""
    include_drafts = access.super_admin_bypass or (
        access.membership is not None and role_allowed(access.membership.role, MODERATION_ROLES)
    )
    page = await content.list_posts(access.tenant_id, include_drafts, cursor, limit)
    return PaginatedResponse.from_page(page, PostRead.model_validate)


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(
    data: PostCreate, access: ModeratorAccess, content: ContentServiceDep
) -> PostRead:
    post = await content.create_post(access.tenant_id, data, access.user_id)
    return PostRead.model_validate(post)


@router.put("/{post_id}", response_model=PostRead, responses={404: {"description": "Not found"}})
async def update_post(
    post_id: UUID, data: PostUpdate, access: ModeratorAccess, content: ContentServiceDep
) -> PostRead:
    """Edit a post. The first publish sets published_at; later edits keep it."""
    post = await content.update_post(access.tenant_id, post_id, data)
    return PostRead.model_validate(post)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Post not found"}},
)
async def delete_post(post_id: UUID, access: ModeratorAccess, content: ContentServiceDep) -> None:
    await content.delete_post(access.tenant_id, post_id)
