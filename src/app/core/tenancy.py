"""Tenant resolution and role ordering.

Everything here is pure: no I/O, no request objects. The FastAPI
dependencies in api/dependencies/tenant.py feed request data into these.
"""

from collections.abc import Mapping
from typing import Any, Final
from uuid import UUID

from src.app.core.exceptions import ValidationError
from src.app.models.enums import MembershipRole

TENANT_ID_KEY: Final[str] = "tenant_id"

MANAGEMENT_ROLES: Final[frozenset[MembershipRole]] = frozenset(
    {MembershipRole.OWNER, MembershipRole.ADMIN}
)
MODERATION_ROLES: Final[frozenset[MembershipRole]] = frozenset(
    {MembershipRole.OWNER, MembershipRole.ADMIN, MembershipRole.MODERATOR}
)
MEMBER_ROLES: Final[frozenset[MembershipRole]] = frozenset(MembershipRole)

_ROLE_RANK: Final[dict[str, int]] = {
    MembershipRole.OWNER.value: 4,
    MembershipRole.ADMIN.value: 3,
    MembershipRole.MODERATOR.value: 2,
    MembershipRole.MEMBER.value: 1,
}


def _parse_tenant_id(raw: Any) -> UUID:
    if isinstance(raw, UUID):
        return raw
    if not isinstance(raw, str):
        raise ValidationError("tenant_id must be a UUID string")
    try:
        return UUID(raw.strip())
    except ValueError as e:
        raise ValidationError("tenant_id is not a valid identifier") from e


def resolve_tenant_id(
    path_params: Mapping[str, Any],
    body: Mapping[str, Any] | None = None,
    query: Mapping[str, Any] | None = None,
) -> UUID:
    """Return the single tenant identifier a request is scoped to.

    A path-bound tenant_id always wins. Body and query values are only
    consulted when the route has no path-bound tenant_id, and they are
    never compared against or merged with it.

    Raises:
        ValidationError: no tenant_id anywhere, or the chosen value is malformed.
    """
    if path_params.get(TENANT_ID_KEY) is not None:
        return _parse_tenant_id(path_params[TENANT_ID_KEY])

    for source in (body, query):
        if source and source.get(TENANT_ID_KEY) is not None:
            return _parse_tenant_id(source[TENANT_ID_KEY])

    raise ValidationError("tenant_id is required")


def role_rank(role: str) -> int:
    return _ROLE_RANK.get(role, 0)


def stronger_role(current: str | None, offered: str) -> str:
    """Pick the higher of two roles so an upgrade never becomes a downgrade."""
    if current is None:
        return offered
    return current if role_rank(current) >= role_rank(offered) else offered


def role_allowed(role: str, allowed: frozenset[MembershipRole]) -> bool:
    return role in {r.value for r in allowed}
