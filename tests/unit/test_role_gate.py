"""Unit tests for the tenant role gate dependency."""

from unittest.mock import AsyncMock
from uuid import uuid7

import pytest

from src.app.api.dependencies.tenant import require_role
from src.app.core.audit_context import get_audit_context, set_audit_context
from src.app.core.exceptions import Forbidden, NotFound
from src.app.core.tenancy import MANAGEMENT_ROLES, MEMBER_ROLES, MODERATION_ROLES
from src.app.models import GlobalRole, Membership, Tenant, User

pytestmark = pytest.mark.unit


def make_user(super_admin: bool = False) -> User:
    return User(
        id=uuid7(),
        email="someone@example.com",
        hashed_password="x",
        full_name="Someone",
        global_role=GlobalRole.SUPER_ADMIN.value if super_admin else GlobalRole.USER.value,
    )


def memberships_returning(membership: Membership | None) -> AsyncMock:
    service = AsyncMock()
    service.lookup.return_value = membership
    return service


def tenants_returning(tenant: Tenant | None) -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.return_value = tenant
    return repo


def existing_tenant(tenant_id) -> AsyncMock:
    return tenants_returning(Tenant(id=tenant_id, name="Acme", slug="acme"))


async def test_member_with_allowed_role_passes():
    tenant_id, user = uuid7(), make_user()
    membership = Membership(tenant_id=tenant_id, user_id=user.id, role="MODERATOR")
    gate = require_role(MODERATION_ROLES)

    access = await gate(
        tenant_id, user, memberships_returning(membership), existing_tenant(tenant_id)
    )

    assert access.tenant_id == tenant_id
    assert access.membership is membership
    assert access.super_admin_bypass is False


async def test_lookup_uses_resolved_tenant():
    tenant_id, user = uuid7(), make_user()
    memberships = memberships_returning(
        Membership(tenant_id=tenant_id, user_id=user.id, role="MEMBER")
    )

    await require_role(MEMBER_ROLES)(tenant_id, user, memberships, existing_tenant(tenant_id))

    memberships.lookup.assert_awaited_once_with(tenant_id, user.id)


async def test_insufficient_role_is_forbidden():
    tenant_id, user = uuid7(), make_user()
    membership = Membership(tenant_id=tenant_id, user_id=user.id, role="MEMBER")

    with pytest.raises(Forbidden, match="Insufficient tenant role"):
        await require_role(MANAGEMENT_ROLES)(
            tenant_id, user, memberships_returning(membership), existing_tenant(tenant_id)
        )


async def test_no_active_membership_is_forbidden():
    tenant_id = uuid7()

    with pytest.raises(Forbidden, match="Not a tenant member"):
        await require_role(MEMBER_ROLES)(
            tenant_id, make_user(), memberships_returning(None), existing_tenant(tenant_id)
        )


async def test_super_admin_bypasses_without_membership():
    set_audit_context(ip_address="10.0.0.1", user_agent="pytest", request_id="req-1")
    tenant_id = uuid7()

    access = await require_role(MANAGEMENT_ROLES)(
        tenant_id,
        make_user(super_admin=True),
        memberships_returning(None),
        existing_tenant(tenant_id),
    )

    assert access.super_admin_bypass is True
    assert access.tenant_id == tenant_id
    ctx = get_audit_context()
    assert ctx is not None
    assert ctx.super_admin_bypass is True
    assert ctx.bypass_tenant_id == tenant_id
    # Request metadata survives the marker
    assert ctx.request_id == "req-1"


async def test_super_admin_with_qualifying_membership_is_not_a_bypass():
    tenant_id = uuid7()
    user = make_user(super_admin=True)
    membership = Membership(tenant_id=tenant_id, user_id=user.id, role="OWNER")

    access = await require_role(MANAGEMENT_ROLES)(
        tenant_id, user, memberships_returning(membership), existing_tenant(tenant_id)
    )

    assert access.super_admin_bypass is False
    assert get_audit_context() is None


async def test_super_admin_on_missing_tenant_is_not_found():
    with pytest.raises(NotFound, match="Tenant not found"):
        await require_role(MANAGEMENT_ROLES)(
            uuid7(),
            make_user(super_admin=True),
            memberships_returning(None),
            tenants_returning(None),
        )

    assert get_audit_context() is None


async def test_non_member_on_missing_tenant_stays_forbidden():
    tenants = tenants_returning(None)

    with pytest.raises(Forbidden):
        await require_role(MEMBER_ROLES)(uuid7(), make_user(), memberships_returning(None), tenants)

    tenants.get_by_id.assert_not_awaited()
