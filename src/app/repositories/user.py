"""Repository for User entity."""

from sqlalchemy import func, or_
from sqlmodel import select

from src.app.models import User
from src.app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address (stored lowercase)."""
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        user = await self.get_by_email(email)
        return user is not None

    async def list_paginated(
        self, cursor: str | None, limit: int, search: str | None = None
    ) -> tuple[list[User], str | None, bool]:
        query = select(User)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(
                or_(
                    func.lower(User.email).like(pattern),
                    func.lower(User.full_name).like(pattern),
                )
            )
        return await self.paginate(query, cursor, limit, User.created_at)

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(User))
        return int(result.scalar_one())
