"""Announcements, posts and resources."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import NotFound
from src.app.core.logging import get_logger
from src.app.models import Announcement, AuditAction, Post, Resource, ResourceType, StoredFile
from src.app.models.base import utc_now
from src.app.repositories import (
    AnnouncementRepository,
    BlobStore,
    GroupRepository,
    PostRepository,
    ProgramModuleRepository,
    ProgramRepository,
    ResourceRepository,
    TenantScopedRepository,
)
from src.app.schemas.content import (
    AnnouncementCreate,
    AnnouncementUpdate,
    AttachmentRef,
    PostCreate,
    PostUpdate,
    ResourceCreate,
    ResourceUpdate,
)
from src.app.services.audit_service import AuditService
from src.app.services.file_service import file_url

logger = get_logger(__name__)


async def require_in_tenant(
    repo: TenantScopedRepository[Any], tenant_id: UUID, entity_id: UUID, label: str
) -> Any:
    """Load a referenced row, insisting it belongs to tenant_id.

    Raises:
        NotFound: missing, or owned by another tenant
    """
    entity = await repo.get_scoped(tenant_id, entity_id)
    if entity is None:
        raise NotFound(f"{label} not found")
    return entity


async def require_file_in_tenant(store: BlobStore, tenant_id: UUID, file_id: UUID) -> StoredFile:
    stored = await store.get_metadata(file_id)
    if stored is None or str(stored.tenant_id) != str(tenant_id):
        raise NotFound("File not found")
    return stored


class ContentService:
    def __init__(
        self,
        announcement_repo: AnnouncementRepository,
        post_repo: PostRepository,
        resource_repo: ResourceRepository,
        group_repo: GroupRepository,
        program_repo: ProgramRepository,
        module_repo: ProgramModuleRepository,
        store: BlobStore,
        session: AsyncSession,
        audit: AuditService | None = None,
    ):
        self.announcement_repo = announcement_repo
        self.post_repo = post_repo
        self.resource_repo = resource_repo
        self.group_repo = group_repo
        self.program_repo = program_repo
        self.module_repo = module_repo
        self.store = store
        self.session = session
        self.audit = audit

    # Announcements

    async def list_announcements(
        self, tenant_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Announcement], str | None, bool]:
        return await self.announcement_repo.list_for_tenant(tenant_id, cursor, limit)

    async def _attachments(
        self, tenant_id: UUID, refs: list[AttachmentRef]
    ) -> list[dict[str, Any]]:
        """Resolve attachment refs against this tenant's files.

        Name, type and size are taken from the stored file, not the client.
        """
        attachments = []
        for ref in refs:
            stored = await require_file_in_tenant(self.store, tenant_id, ref.file_id)
            attachments.append(
                {
                    "file_id": str(stored.id),
                    "file_name": stored.original_filename,
                    "mime_type": stored.content_type,
                    "size": stored.size,
                }
            )
        return attachments

    async def create_announcement(
        self, tenant_id: UUID, data: AnnouncementCreate, author_user_id: UUID
    ) -> Announcement:
        announcement = Announcement(
            tenant_id=tenant_id,
            title=data.title,
            content=data.content,
            is_pinned=data.is_pinned,
            visibility=data.visibility,
            author_user_id=author_user_id,
            attachments=await self._attachments(tenant_id, data.attachments),
        )
        self.announcement_repo.add(announcement)
        await self.session.commit()
        await self.session.refresh(announcement)

        logger.info(
            "Announcement created",
            tenant_id=str(tenant_id),
            announcement_id=str(announcement.id),
        )
        if self.audit:
            await self.audit.record(
                AuditAction.ANNOUNCEMENT_CREATE,
                entity_type="announcement",
                entity_id=announcement.id,
                actor_user_id=author_user_id,
                tenant_id=tenant_id,
                details={"title": announcement.title},
            )
        return announcement

    async def update_announcement(
        self, tenant_id: UUID, announcement_id: UUID, data: AnnouncementUpdate
    ) -> Announcement:
        changes = data.model_dump(exclude_unset=True, exclude={"attachments"})
        if data.attachments is not None:
            changes["attachments"] = await self._attachments(tenant_id, data.attachments)
        announcement = await self.announcement_repo.update_scoped(
            tenant_id, announcement_id, changes
        )
        if announcement is None:
            raise NotFound("Announcement not found")
        await self.session.commit()
        return announcement

    async def delete_announcement(self, tenant_id: UUID, announcement_id: UUID) -> None:
        if not await self.announcement_repo.delete_scoped(tenant_id, announcement_id):
            raise NotFound("Announcement not found")
        await self.session.commit()

    # Posts

    async def list_posts(
        self, tenant_id: UUID, include_drafts: bool, cursor: str | None, limit: int
    ) -> tuple[list[Post], str | None, bool]:
        return await self.post_repo.list_for_tenant(tenant_id, include_drafts, cursor, limit)

    async def create_post(self, tenant_id: UUID, data: PostCreate, author_user_id: UUID) -> Post:
        post = Post(
            tenant_id=tenant_id,
            title=data.title,
            content=data.content,
            visibility=data.visibility,
            is_published=data.is_published,
            published_at=utc_now() if data.is_published else None,
            author_user_id=author_user_id,
        )
        self.post_repo.add(post)
        await self.session.commit()
        await self.session.refresh(post)
        logger.info("Post created", tenant_id=str(tenant_id), post_id=str(post.id))
        return post

    async def update_post(self, tenant_id: UUID, post_id: UUID, data: PostUpdate) -> Post:
        current = await require_in_tenant(self.post_repo, tenant_id, post_id, "Post")
        changes = data.model_dump(exclude_unset=True)
        # First publish stamps published_at; later edits keep it
        if changes.get("is_published") and current.published_at is None:
            changes["published_at"] = utc_now()
        post = await self.post_repo.update_scoped(tenant_id, post_id, changes)
        if post is None:
            raise NotFound("Post not found")
        await self.session.commit()
        return post

    async def delete_post(self, tenant_id: UUID, post_id: UUID) -> None:
        if not await self.post_repo.delete_scoped(tenant_id, post_id):
            raise NotFound("Post not found")
        await self.session.commit()

    # Resources

    async def list_resources(
        self,
        tenant_id: UUID,
        group_id: UUID | None = None,
        program_id: UUID | None = None,
        module_id: UUID | None = None,
        folder: str | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Resource], str | None, bool]:
        return await self.resource_repo.list_filtered(
            tenant_id, group_id, program_id, module_id, folder, cursor, limit
        )

    async def get_resource(self, tenant_id: UUID, resource_id: UUID) -> Resource:
        return await require_in_tenant(self.resource_repo, tenant_id, resource_id, "Resource")

    async def _check_placement(self, tenant_id: UUID, values: dict[str, Any]) -> None:
        """Group, program and module references must all live in tenant_id.

        A module also pins the resource's program to the module's program.
        """
        if values.get("group_id") is not None:
            await require_in_tenant(self.group_repo, tenant_id, values["group_id"], "Group")
        if values.get("program_id") is not None:
            await require_in_tenant(self.program_repo, tenant_id, values["program_id"], "Program")
        if values.get("module_id") is not None:
            module = await require_in_tenant(
                self.module_repo, tenant_id, values["module_id"], "Module"
            )
            values["program_id"] = module.program_id

    async def create_resource(
        self, tenant_id: UUID, data: ResourceCreate, created_by_user_id: UUID
    ) -> Resource:
        values = data.model_dump(exclude_unset=False)
        await self._check_placement(tenant_id, values)

        if values["file_id"] is not None:
            stored = await require_file_in_tenant(self.store, tenant_id, values["file_id"])
            values.update(
                type=ResourceType.FILE.value,
                url=file_url(tenant_id, stored.id),
                file_name=stored.original_filename,
                mime_type=stored.content_type,
                size=stored.size,
            )
        if values["thumbnail_file_id"] is not None:
            thumb = await require_file_in_tenant(
                self.store, tenant_id, values["thumbnail_file_id"]
            )
            values["thumbnail_url"] = file_url(tenant_id, thumb.id)

        resource = Resource(tenant_id=tenant_id, created_by_user_id=created_by_user_id, **values)
        self.resource_repo.add(resource)
        await self.session.commit()
        await self.session.refresh(resource)

        logger.info(
            "Resource created",
            tenant_id=str(tenant_id),
            resource_id=str(resource.id),
            type=resource.type,
        )
        return resource

    async def update_resource(
        self, tenant_id: UUID, resource_id: UUID, data: ResourceUpdate
    ) -> Resource:
        changes = data.model_dump(exclude_unset=True)
        await self._check_placement(tenant_id, changes)
        resource = await self.resource_repo.update_scoped(tenant_id, resource_id, changes)
        if resource is None:
            raise NotFound("Resource not found")
        await self.session.commit()
        return resource

    async def delete_resource(self, tenant_id: UUID, resource_id: UUID) -> None:
        if not await self.resource_repo.delete_scoped(tenant_id, resource_id):
            raise NotFound("Resource not found")
        await self.session.commit()
