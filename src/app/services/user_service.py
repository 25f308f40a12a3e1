from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.models import User
from src.app.models.base import utc_now
from src.app.repositories import MembershipRepository, TenantRepository
from src.app.schemas.user import MyTenantRead, UserUpdate


class UserService:
    """Self-service account operations."""

    def __init__(
        self,
        tenant_repo: TenantRepository,
        membership_repo: MembershipRepository,
        session: AsyncSession,
    ):
        self.tenant_repo = tenant_repo
        self.membership_repo = membership_repo
        self.session = session

    async def update(self, user: User, data: UserUpdate) -> User:
        """Update user with provided data."""
        update_data = data.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            setattr(user, field, value)

        user.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def my_tenants(self, user_id: UUID) -> list[MyTenantRead]:
        """Every tenant the user has a membership in, whatever its status."""
        memberships = await self.membership_repo.list_for_user(user_id)
        items = []
        for membership in memberships:
            tenant = await self.tenant_repo.get_by_id(membership.tenant_id)
            if tenant is None:
                continue
            items.append(
                MyTenantRead(
                    tenant_id=tenant.id,
                    name=tenant.name,
                    slug=tenant.slug,
                    logo_url=tenant.logo_url,
                    role=membership.role,
                    status=membership.status,
                )
            )
        return items
