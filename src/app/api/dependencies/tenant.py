"""Tenant resolution and the role gate.

Every /tenants/{tenant_id}/... route depends on one of the access aliases
at the bottom. The tenant id they carry is the only one handlers may use
for scoping.
"""

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Request

from src.app.api.dependencies.auth import CurrentUser
from src.app.api.dependencies.repositories import TenantRepo
from src.app.api.dependencies.services import MembershipServiceDep
from src.app.core.audit_context import mark_super_admin_bypass
from src.app.core.exceptions import Forbidden, NotFound
from src.app.core.logging import bind_tenant_context, get_logger
from src.app.core.tenancy import (
    MANAGEMENT_ROLES,
    MEMBER_ROLES,
    MODERATION_ROLES,
    resolve_tenant_id,
    role_allowed,
)
from src.app.models import Membership, MembershipRole, User

logger = get_logger(__name__)


async def _json_body(request: Request) -> dict[str, Any] | None:
    if request.headers.get("content-type", "").split(";")[0].strip() != "application/json":
        return None
    raw = await request.body()
    if not raw:
        return None
    try:
        body = json.loads(raw)
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


async def get_tenant_id(request: Request) -> UUID:
    """Resolve the request's tenant: path first, then body, then query."""
    body = None
    if "tenant_id" not in request.path_params:
        body = await _json_body(request)
    tenant_id = resolve_tenant_id(request.path_params, body, request.query_params)
    bind_tenant_context(tenant_id)
    return tenant_id


TenantId = Annotated[UUID, Depends(get_tenant_id)]


@dataclass(frozen=True)
class TenantAccess:
    """Outcome of the role gate for one request."""

    tenant_id: UUID
    user: User
    membership: Membership | None
    super_admin_bypass: bool = False

    @property
    def user_id(self) -> UUID:
        return self.user.id


def require_role(
    allowed: frozenset[MembershipRole],
) -> Callable[..., Awaitable[TenantAccess]]:
    """Build a dependency that admits ACTIVE members holding one of the allowed roles.

    A super-admin is let through without a qualifying membership. That
    skips the membership check only: the tenant must still exist, the
    returned tenant_id is still the resolved one, and the bypass is logged
    and flagged for audit.
    """

    async def gate(
        tenant_id: TenantId,
        user: CurrentUser,
        memberships: MembershipServiceDep,
        tenants: TenantRepo,
    ) -> TenantAccess:
        membership = await memberships.lookup(tenant_id, user.id)
        if membership is not None and role_allowed(membership.role, allowed):
            return TenantAccess(tenant_id=tenant_id, user=user, membership=membership)

        if user.is_super_admin:
            if await tenants.get_by_id(tenant_id) is None:
                raise NotFound("Tenant not found")
            mark_super_admin_bypass(tenant_id)
            logger.info(
                "Super-admin bypassed tenant role gate",
                tenant_id=str(tenant_id),
                user_id=str(user.id),
                allowed_roles=sorted(r.value for r in allowed),
            )
            return TenantAccess(
                tenant_id=tenant_id, user=user, membership=membership, super_admin_bypass=True
            )

        if membership is None:
            raise Forbidden("Not a tenant member")
        raise Forbidden("Insufficient tenant role")

    return gate


MemberAccess = Annotated[TenantAccess, Depends(require_role(MEMBER_ROLES))]
ModeratorAccess = Annotated[TenantAccess, Depends(require_role(MODERATION_ROLES))]
ManagerAccess = Annotated[TenantAccess, Depends(require_role(MANAGEMENT_ROLES))]
