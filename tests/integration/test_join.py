"""Direct joins by tenant id and by slug."""

import asyncio

import pytest
from httpx import AsyncClient
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.app.models import Membership, MemberProfile, MembershipStatus, Tenant, User
from tests.helpers import auth_headers, create_member, create_tenant

pytestmark = pytest.mark.integration

PROFILE = {"full_name": "Jo Member", "phone": "555-0100"}


async def test_direct_join_is_active(client: AsyncClient, tenant: Tenant, outsider: User):
    response = await client.post(
        f"/api/v1/tenants/{tenant.id}/join", json=PROFILE, headers=auth_headers(outsider)
    )

    assert response.status_code == 201
    data = response.json()
    assert data["created"] is True
    assert data["membership"]["role"] == "MEMBER"
    assert data["membership"]["status"] == "ACTIVE"
    assert data["next_route"] == f"/c/{tenant.slug}"


async def test_join_with_approval_is_pending(
    client: AsyncClient, db_session: AsyncSession, outsider: User
):
    gated = await create_tenant(db_session, settings={"approval_required": True})

    response = await client.post(
        f"/api/v1/tenants/{gated.id}/join", json=PROFILE, headers=auth_headers(outsider)
    )

    assert response.status_code == 201
    assert response.json()["membership"]["status"] == "PENDING"
    assert response.json()["next_route"] == f"/c/{gated.slug}/pending"

    # Pending members are not admitted by the role gate
    page = await client.get(f"/api/v1/tenants/{gated.id}", headers=auth_headers(outsider))
    assert page.status_code == 403


async def test_rejoin_returns_existing_membership(
    client: AsyncClient, tenant: Tenant, moderator: User
):
    response = await client.post(
        f"/api/v1/tenants/{tenant.id}/join", json={}, headers=auth_headers(moderator)
    )

    assert response.status_code == 200
    data = response.json()
    assert data["created"] is False
    assert data["membership"]["role"] == "MODERATOR"
    assert data["next_route"] == f"/c/{tenant.slug}/admin"


async def test_join_without_public_signup(
    client: AsyncClient, db_session: AsyncSession, outsider: User
):
    closed = await create_tenant(db_session, settings={"public_signup": False})

    response = await client.post(
        f"/api/v1/tenants/{closed.id}/join", json=PROFILE, headers=auth_headers(outsider)
    )

    assert response.status_code == 403
    assert response.json()["code"] == "PUBLIC_JOIN_DISABLED"


async def test_banned_member_cannot_rejoin(
    client: AsyncClient, db_session: AsyncSession, tenant: Tenant
):
    user, _ = await create_member(db_session, tenant, status=MembershipStatus.BANNED)

    response = await client.post(
        f"/api/v1/tenants/{tenant.id}/join", json=PROFILE, headers=auth_headers(user)
    )

    assert response.status_code == 403


async def test_join_unknown_tenant(client: AsyncClient, outsider: User):
    response = await client.post(
        "/api/v1/tenants/0199f0e4-0000-7000-8000-000000000000/join",
        json=PROFILE,
        headers=auth_headers(outsider),
    )

    assert response.status_code == 404


@pytest.mark.parametrize(
    "body", [{"phone": "555-0100"}, {"full_name": "Jo"}, {"full_name": "  ", "phone": "1"}]
)
async def test_join_by_slug_requires_profile(
    client: AsyncClient, tenant: Tenant, outsider: User, body: dict
):
    response = await client.post(
        f"/api/v1/tenants/by-slug/{tenant.slug}/join", json=body, headers=auth_headers(outsider)
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


async def test_join_by_slug_stores_profile(
    client: AsyncClient, db_session: AsyncSession, tenant: Tenant, outsider: User
):
    response = await client.post(
        f"/api/v1/tenants/by-slug/{tenant.slug}/join",
        json={**PROFILE, "custom_fields": {"shirt_size": "M"}},
        headers=auth_headers(outsider),
    )

    assert response.status_code == 201
    profile = (
        await db_session.execute(
            select(MemberProfile).where(
                MemberProfile.tenant_id == tenant.id, MemberProfile.user_id == outsider.id
            )
        )
    ).scalar_one()
    assert profile.full_name == "Jo Member"
    assert profile.custom_fields == {"shirt_size": "M"}


async def test_concurrent_joins_converge(
    client: AsyncClient, db_session: AsyncSession, tenant: Tenant, outsider: User
):
    url = f"/api/v1/tenants/{tenant.id}/join"
    headers = auth_headers(outsider)

    responses = await asyncio.gather(
        *(client.post(url, json=PROFILE, headers=headers) for _ in range(3))
    )

    assert all(r.status_code in (200, 201) for r in responses)
    assert len({r.json()["membership"]["id"] for r in responses}) == 1
    count = await db_session.scalar(
        select(func.count())
        .select_from(Membership)
        .where(Membership.tenant_id == tenant.id, Membership.user_id == outsider.id)
    )
    assert count == 1
