"""Query parameter types shared by list endpoints."""

from typing import Annotated

from fastapi import Query

CursorQuery = Annotated[str | None, Query(description="Cursor for pagination")]
LimitQuery = Annotated[int, Query(ge=1, le=100, description="Number of items per page")]
