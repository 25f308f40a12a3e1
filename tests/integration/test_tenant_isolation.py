"""Cross-tenant access must fail closed."""

from uuid import uuid7

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.app.models import MembershipRole, MembershipStatus, StoredFile, Tenant, User
from tests.helpers import auth_headers, create_member

pytestmark = pytest.mark.integration


async def test_member_of_one_tenant_is_forbidden_in_another(
    client: AsyncClient, member: User, tenant: Tenant, other_tenant: Tenant
):
    headers = auth_headers(member)

    own = await client.get(f"/api/v1/tenants/{tenant.id}", headers=headers)
    foreign = await client.get(f"/api/v1/tenants/{other_tenant.id}", headers=headers)

    assert own.status_code == 200
    assert foreign.status_code == 403
    assert foreign.json()["code"] == "FORBIDDEN"


async def test_body_tenant_id_cannot_override_path(
    client: AsyncClient, moderator: User, tenant: Tenant, other_tenant: Tenant
):
    response = await client.post(
        f"/api/v1/tenants/{other_tenant.id}/announcements",
        json={"tenant_id": str(tenant.id), "title": "Sneaky", "content": "Hello"},
        headers=auth_headers(moderator),
    )

    assert response.status_code == 403


@pytest.mark.parametrize(
    "status", [MembershipStatus.PENDING, MembershipStatus.SUSPENDED, MembershipStatus.BANNED]
)
async def test_inactive_membership_is_not_access(
    client: AsyncClient, db_session: AsyncSession, tenant: Tenant, status: MembershipStatus
):
    user, _ = await create_member(db_session, tenant, role=MembershipRole.ADMIN, status=status)

    response = await client.get(f"/api/v1/tenants/{tenant.id}", headers=auth_headers(user))

    assert response.status_code == 403


async def test_role_below_requirement_is_forbidden(
    client: AsyncClient, member: User, tenant: Tenant
):
    response = await client.get(
        f"/api/v1/tenants/{tenant.id}/members", headers=auth_headers(member)
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "Insufficient tenant role"


@pytest.mark.parametrize("bad_id", ["not-a-uuid", "12345"])
async def test_malformed_tenant_id(client: AsyncClient, member: User, bad_id: str):
    response = await client.get(f"/api/v1/tenants/{bad_id}", headers=auth_headers(member))

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


async def test_unauthenticated_tenant_request(client: AsyncClient, tenant: Tenant):
    response = await client.get(f"/api/v1/tenants/{tenant.id}")

    assert response.status_code == 401


async def test_file_from_another_tenant_is_not_found(
    client: AsyncClient,
    db_session: AsyncSession,
    moderator: User,
    tenant: Tenant,
    other_tenant: Tenant,
):
    upload = await client.post(
        f"/api/v1/tenants/{tenant.id}/files/resource",
        files={"file": ("notes.pdf", b"%PDF-1.4 notes", "application/pdf")},
        headers=auth_headers(moderator),
    )
    assert upload.status_code == 201
    file_id = upload.json()["file"]["id"]

    stranger, _ = await create_member(db_session, other_tenant)
    response = await client.get(
        f"/api/v1/tenants/{other_tenant.id}/files/{file_id}", headers=auth_headers(stranger)
    )
    missing = await client.get(
        f"/api/v1/tenants/{other_tenant.id}/files/0199f0e4-0000-7000-8000-000000000000",
        headers=auth_headers(stranger),
    )

    assert response.status_code == missing.status_code == 404
    leaked, absent = response.json(), missing.json()
    leaked.pop("request_id")
    absent.pop("request_id")
    assert leaked == absent
    # Nothing about the stored file shows through the error
    assert response.headers["content-type"] == "application/json"
    assert response.headers["content-length"] == str(len(response.content))
    assert "content-disposition" not in response.headers
    assert "notes.pdf" not in response.text


async def test_tenant_context_for_non_member(
    client: AsyncClient, outsider: User, tenant: Tenant
):
    response = await client.get(
        f"/api/v1/tenants/{tenant.id}/context", headers=auth_headers(outsider)
    )

    assert response.status_code == 200
    data = response.json()
    assert data["role"] is None
    assert data["membership_status"] is None
    assert data["next_route"] == f"/c/{tenant.slug}"


@pytest.mark.parametrize(
    ("path", "body"),
    [
        ("invitations", {"email": "guest@example.com"}),
        ("announcements", {"title": "Hello", "content": "Anyone there?"}),
        ("groups", {"name": "Ghosts"}),
    ],
)
async def test_super_admin_write_to_missing_tenant(
    client: AsyncClient, super_admin: User, path: str, body: dict
):
    response = await client.post(
        f"/api/v1/tenants/{uuid7()}/{path}", json=body, headers=auth_headers(super_admin)
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Tenant not found"


async def test_super_admin_logo_upload_to_deleted_tenant(
    client: AsyncClient, db_session: AsyncSession, tenant: Tenant, super_admin: User
):
    headers = auth_headers(super_admin)
    deleted = await client.delete(f"/api/v1/admin/tenants/{tenant.id}", headers=headers)
    assert deleted.status_code == 204

    response = await client.post(
        f"/api/v1/tenants/{tenant.id}/files/logo",
        files={"file": ("logo.png", b"\x89PNG\r\n\x1a\n", "image/png")},
        headers=headers,
    )

    assert response.status_code == 404
    assert (await db_session.execute(select(StoredFile))).all() == []
