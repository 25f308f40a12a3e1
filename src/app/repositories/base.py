"""Base repositories with common CRUD operations."""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, cast
from uuid import UUID, uuid7

from sqlalchemy import delete, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.app.models.base import TenantScopedModel, utc_now
from src.app.schemas.pagination import decode_cursor, encode_cursor


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def upsert(
        self,
        values: dict[str, Any],
        conflict_keys: Sequence[str],
        update_values: dict[str, Any] | None = None,
    ) -> ModelType:
        """Insert a row, or update the row that already holds its natural key.

        A single INSERT ... ON CONFLICT statement, so concurrent callers
        converge on one row. With no update_values an existing row is left
        untouched. Returns the row as it stands after the statement.
        """
        now = utc_now()
        row = {"id": uuid7(), "created_at": now, "updated_at": now, **values}

        dialect = self.session.get_bind().dialect.name
        insert = sqlite_insert if dialect == "sqlite" else pg_insert
        stmt = insert(self.model.__table__).values(**row)  # type: ignore[attr-defined]
        if update_values:
            stmt = stmt.on_conflict_do_update(
                index_elements=list(conflict_keys),
                set_={**update_values, "updated_at": now},
            )
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=list(conflict_keys))
        await self.session.execute(stmt)

        query = (
            select(self.model)
            .where(*[getattr(self.model, key) == values[key] for key in conflict_keys])
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one()

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        cursor: str | None,
        limit: int,
        cursor_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute cursor-based pagination on a query.

        Args:
            query: The base SQLAlchemy query to paginate
            cursor: Optional cursor from previous page (base64-encoded)
            limit: Maximum number of items to return
            cursor_field: The field to use for cursor (e.g., created_at, id)

        Returns:
            Tuple of (items, next_cursor, has_more)

        Note:
            Cursor values are stringified before encoding:
            - datetime → isoformat()
            - UUID and other scalars → str()
        """
        if cursor:
            try:
                cursor_str = decode_cursor(cursor)
                cursor_value: datetime | UUID | str
                try:
                    cursor_value = datetime.fromisoformat(cursor_str)
                except ValueError:
                    try:
                        cursor_value = UUID(cursor_str)
                    except ValueError:
                        cursor_value = cursor_str
                query = query.where(cursor_field < cursor_value)
            except (ValueError, TypeError):
                # Invalid cursor - start from the beginning
                pass

        query = query.order_by(cursor_field.desc()).limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            value = getattr(items[-1], cursor_field.key)
            if isinstance(value, datetime):
                next_cursor = encode_cursor(value.isoformat())
            elif value is not None:
                next_cursor = encode_cursor(str(value))

        return items, next_cursor, has_more


class TenantScopedRepository[ModelType: TenantScopedModel](BaseRepository[ModelType]):
    """Repository for tenant-owned rows.

    Every method takes the resolved tenant id and filters on it. There is
    deliberately no unscoped get/update/delete here.
    """

    async def get_scoped(self, tenant_id: UUID, id: UUID) -> ModelType | None:
        result = await self.session.execute(
            select(self.model).where(self.model.id == id, self.model.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def list_scoped(
        self,
        tenant_id: UUID,
        *filters: Any,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[ModelType], str | None, bool]:
        query = select(self.model).where(self.model.tenant_id == tenant_id, *filters)
        return await self.paginate(query, cursor, limit, self.model.created_at)

    async def list_all_scoped(self, tenant_id: UUID, *filters: Any) -> list[ModelType]:
        result = await self.session.execute(
            select(self.model)
            .where(self.model.tenant_id == tenant_id, *filters)
            .order_by(self.model.created_at)
        )
        return list(result.scalars().all())

    async def update_scoped(
        self, tenant_id: UUID, id: UUID, values: dict[str, Any]
    ) -> ModelType | None:
        """UPDATE ... WHERE id AND tenant_id, then reload. None if nothing matched."""
        if values:
            stmt = (
                update(self.model)
                .where(self.model.id == id, self.model.tenant_id == tenant_id)
                .values(**values, updated_at=utc_now())
            )
            result = await self.session.execute(stmt)
            if cast(CursorResult[Any], result).rowcount == 0:
                return None
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == id, self.model.tenant_id == tenant_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def delete_scoped(self, tenant_id: UUID, id: UUID) -> bool:
        stmt = delete(self.model).where(self.model.id == id, self.model.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return (cast(CursorResult[Any], result).rowcount or 0) > 0
