"""Super-admin endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.app.models import AuditLog, Membership, Tenant, User
from tests.helpers import auth_headers, create_user

pytestmark = pytest.mark.integration


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("GET", "/api/v1/admin/overview"),
        ("GET", "/api/v1/admin/users"),
        ("GET", "/api/v1/admin/tenants"),
        ("GET", "/api/v1/admin/audit-logs"),
    ],
)
async def test_admin_routes_require_super_admin(
    client: AsyncClient, owner: User, method: str, path: str
):
    response = await client.request(method, path, headers=auth_headers(owner))

    assert response.status_code == 403


async def test_promote_creates_tenant(
    client: AsyncClient, db_session: AsyncSession, super_admin: User, outsider: User
):
    response = await client.post(
        f"/api/v1/admin/users/{outsider.id}/promote",
        json={"name": "Acme Runners", "slug": "Acme"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["tenant_created"] is True
    assert data["tenant"]["slug"] == "acme"
    assert data["membership"]["user_id"] == str(outsider.id)
    assert data["membership"]["role"] == "OWNER"
    assert data["membership"]["status"] == "ACTIVE"

    audit = (
        await db_session.execute(
            select(AuditLog).where(AuditLog.action == "SUPER_ADMIN_PROMOTE_USER_TO_TENANT")
        )
    ).scalar_one()
    assert audit.actor_user_id == super_admin.id
    assert str(audit.tenant_id) == data["tenant"]["id"]

    duplicate = await client.post(
        f"/api/v1/admin/users/{super_admin.id}/promote",
        json={"name": "Another Acme", "slug": "acme"},
        headers=auth_headers(super_admin),
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "SLUG_EXISTS"


async def test_promote_into_existing_tenant(
    client: AsyncClient, tenant: Tenant, member: User, super_admin: User
):
    body = {"existing_tenant_id": str(tenant.id), "membership_role": "ADMIN"}
    url = f"/api/v1/admin/users/{member.id}/promote"

    first = await client.post(url, json=body, headers=auth_headers(super_admin))
    again = await client.post(url, json=body, headers=auth_headers(super_admin))

    assert first.status_code == 200
    assert first.json()["tenant_created"] is False
    assert first.json()["membership"]["role"] == "ADMIN"
    assert again.json()["membership"]["id"] == first.json()["membership"]["id"]


async def test_promote_requires_a_target(client: AsyncClient, super_admin: User, member: User):
    response = await client.post(
        f"/api/v1/admin/users/{member.id}/promote",
        json={"name": "Only a name"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 422


async def test_create_tenant_makes_creator_owner(
    client: AsyncClient, db_session: AsyncSession, super_admin: User
):
    response = await client.post(
        "/api/v1/admin/tenants",
        json={"name": "Chess Club", "slug": "chess club!"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["slug"] == "chess-club"
    assert data["created_by_user_id"] == str(super_admin.id)

    membership = (
        await db_session.execute(select(Membership).where(Membership.user_id == super_admin.id))
    ).scalar_one()
    assert str(membership.tenant_id) == data["id"]
    assert membership.role == "OWNER"


async def test_suspended_tenant_leaves_public_directory(
    client: AsyncClient, tenant: Tenant, super_admin: User
):
    listed = await client.get("/api/v1/tenants/public")
    assert tenant.slug in {t["slug"] for t in listed.json()}

    response = await client.patch(
        f"/api/v1/admin/tenants/{tenant.id}/status",
        json={"status": "SUSPENDED"},
        headers=auth_headers(super_admin),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "SUSPENDED"
    assert response.json()["is_active"] is False

    listed = await client.get("/api/v1/tenants/public")
    assert tenant.slug not in {t["slug"] for t in listed.json()}


async def test_delete_tenant(
    client: AsyncClient, db_session: AsyncSession, tenant: Tenant, member: User, super_admin: User
):
    headers = auth_headers(super_admin)

    response = await client.delete(f"/api/v1/admin/tenants/{tenant.id}", headers=headers)
    assert response.status_code == 204

    memberships = (
        await db_session.execute(select(Membership).where(Membership.tenant_id == tenant.id))
    ).all()
    assert memberships == []

    again = await client.delete(f"/api/v1/admin/tenants/{tenant.id}", headers=headers)
    assert again.status_code == 404

    logs = await client.get(
        "/api/v1/admin/audit-logs", params={"action": "TENANT_DELETE"}, headers=headers
    )
    assert [log["tenant_id"] for log in logs.json()["items"]] == [str(tenant.id)]


async def test_update_user_status(
    client: AsyncClient, db_session: AsyncSession, super_admin: User
):
    target = await create_user(db_session)

    response = await client.patch(
        f"/api/v1/admin/users/{target.id}",
        json={"status": "SUSPENDED"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 200
    assert response.json()["status"] == "SUSPENDED"
    me = await client.get("/api/v1/users/me", headers=auth_headers(target))
    assert me.status_code == 403
    assert me.json()["code"] == "ACCOUNT_SUSPENDED"


async def test_overview(client: AsyncClient, tenant: Tenant, member: User, super_admin: User):
    response = await client.get("/api/v1/admin/overview", headers=auth_headers(super_admin))

    assert response.status_code == 200
    data = response.json()
    assert data["total_users"] == 2
    assert data["total_tenants"] == 1
    assert data["active_tenants"] == 1
    assert data["active_memberships"] == 1


async def test_list_users_search(client: AsyncClient, db_session: AsyncSession, super_admin: User):
    await create_user(db_session, email="findme@example.com")
    await create_user(db_session, email="other@example.com")

    response = await client.get(
        "/api/v1/admin/users", params={"search": "findme"}, headers=auth_headers(super_admin)
    )

    assert response.status_code == 200
    assert [u["email"] for u in response.json()["items"]] == ["findme@example.com"]
