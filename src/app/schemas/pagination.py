"""Cursor pagination shared by every list endpoint."""

import base64
from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of items plus the opaque cursor for the next page.

    Clients pass next_cursor back unchanged; its content is not part of
    the contract.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Opaque cursor for fetching the next page. None if no more pages.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether there are more items after this page.",
    )

    @classmethod
    def from_page(
        cls,
        page: tuple[Sequence[Any], str | None, bool],
        convert: Callable[[Any], T],
    ) -> "PaginatedResponse[T]":
        """Build a response from a repository (items, next_cursor, has_more) tuple."""
        items, next_cursor, has_more = page
        return cls(
            items=[convert(item) for item in items], next_cursor=next_cursor, has_more=has_more
        )


def encode_cursor(value: str) -> str:
    return base64.urlsafe_b64encode(value.encode()).decode()


def decode_cursor(cursor: str) -> str:
    """Decode a base64 cursor value.

    Raises:
        ValueError: If cursor is invalid
    """
    try:
        return base64.urlsafe_b64decode(cursor.encode()).decode()
    except Exception as e:
        raise ValueError("Invalid cursor") from e
