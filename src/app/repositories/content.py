"""Repositories for tenant content."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import col

from src.app.models import Announcement, Post, Resource
from src.app.models.base import utc_now
from src.app.repositories.base import TenantScopedRepository


class AnnouncementRepository(TenantScopedRepository[Announcement]):
    model = Announcement

    async def list_for_tenant(
        self, tenant_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Announcement], str | None, bool]:
        return await self.list_scoped(tenant_id, cursor=cursor, limit=limit)


class PostRepository(TenantScopedRepository[Post]):
    model = Post

    async def list_for_tenant(
        self, tenant_id: UUID, include_drafts: bool, cursor: str | None, limit: int
    ) -> tuple[list[Post], str | None, bool]:
        filters = [] if include_drafts else [col(Post.is_published).is_(True)]
        return await self.list_scoped(tenant_id, *filters, cursor=cursor, limit=limit)


class ResourceRepository(TenantScopedRepository[Resource]):
    model = Resource

    async def list_filtered(
        self,
        tenant_id: UUID,
        group_id: UUID | None = None,
        program_id: UUID | None = None,
        module_id: UUID | None = None,
        folder: str | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Resource], str | None, bool]:
        filters = []
        if group_id is not None:
            filters.append(Resource.group_id == group_id)
        if program_id is not None:
            filters.append(Resource.program_id == program_id)
        if module_id is not None:
            filters.append(Resource.module_id == module_id)
        if folder is not None:
            filters.append(Resource.folder == folder)
        return await self.list_scoped(tenant_id, *filters, cursor=cursor, limit=limit)

    async def detach_module(self, tenant_id: UUID, module_id: UUID) -> None:
        """Unlink every resource from a module that is about to be deleted."""
        await self.session.execute(
            update(Resource)
            .where(Resource.tenant_id == tenant_id, Resource.module_id == module_id)
            .values(module_id=None, program_id=None, updated_at=utc_now())
        )
