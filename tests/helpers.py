"""Test helper functions for common data creation patterns.

Every helper commits, so the rows are visible to requests made through
the test client right away.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.security import create_access_token, generate_invitation_token, hash_token
from src.app.models import (
    Invitation,
    Membership,
    MembershipRole,
    MembershipStatus,
    Tenant,
    TenantSettings,
    User,
)
from tests.factories import InvitationFactory, MembershipFactory, TenantFactory, UserFactory


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header for a user, as issued by login."""
    token = create_access_token(user.id, user.global_role)
    return {"Authorization": f"Bearer {token}"}


async def create_user(session: AsyncSession, super_admin: bool = False, **user_kwargs) -> User:
    if super_admin:
        user = UserFactory.super_admin(**user_kwargs)
    else:
        user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.commit()
    return user


async def create_tenant(
    session: AsyncSession,
    settings: dict[str, Any] | None = None,
    **tenant_kwargs,
) -> Tenant:
    """Create a tenant and its settings row.

    Args:
        session: Database session
        settings: Overrides for TenantSettings (e.g. approval_required=True)
        **tenant_kwargs: Args passed to TenantFactory
    """
    tenant = TenantFactory.build(**tenant_kwargs)
    session.add(tenant)
    await session.flush()
    session.add(TenantSettings(tenant_id=tenant.id, **(settings or {})))
    await session.commit()
    return tenant


async def create_member(
    session: AsyncSession,
    tenant: Tenant,
    role: MembershipRole = MembershipRole.MEMBER,
    status: MembershipStatus = MembershipStatus.ACTIVE,
    user: User | None = None,
    **user_kwargs,
) -> tuple[User, Membership]:
    """Create a user (unless given) and their membership in a tenant."""
    if user is None:
        user = UserFactory.build(**user_kwargs)
        session.add(user)
        await session.flush()

    membership = MembershipFactory.build(
        user_id=user.id,
        tenant_id=tenant.id,
        role=role.value,
        status=status.value,
    )
    session.add(membership)
    await session.commit()
    return user, membership


async def create_invitation(
    session: AsyncSession,
    tenant: Tenant,
    inviter: User | None = None,
    factory_method: str = "build",
    **invite_kwargs,
) -> tuple[Invitation, str]:
    """Create an invitation and return it with its plaintext token.

    Args:
        factory_method: InvitationFactory constructor to use ("build", "expired", "revoked")
    """
    token = generate_invitation_token()
    build = getattr(InvitationFactory, factory_method)
    invitation = build(
        tenant_id=tenant.id,
        invited_by_user_id=inviter.id if inviter else None,
        token_hash=hash_token(token),
        **invite_kwargs,
    )
    session.add(invitation)
    await session.commit()
    return invitation, token
