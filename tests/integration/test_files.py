"""Tenant file uploads, downloads and the public logo."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.app.models import StoredFile, Tenant, User
from tests.helpers import auth_headers

pytestmark = pytest.mark.integration

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def files_url(tenant: Tenant, purpose: str = "") -> str:
    return f"/api/v1/tenants/{tenant.id}/files/{purpose}".rstrip("/")


async def test_upload_and_download_resource(
    client: AsyncClient, tenant: Tenant, moderator: User, member: User
):
    # Spans several storage chunks
    content = bytes(range(256)) * 2400

    upload = await client.post(
        files_url(tenant, "resource"),
        files={
            "file": ("Annual Report.pdf", content, "application/pdf"),
            "thumbnail": ("cover.png", PNG, "image/png"),
        },
        headers=auth_headers(moderator),
    )

    assert upload.status_code == 201
    data = upload.json()
    stored = data["file"]
    assert stored["tenant_id"] == str(tenant.id)
    assert stored["purpose"] == "resource"
    assert stored["original_filename"] == "Annual Report.pdf"
    assert stored["size"] == len(content)
    assert stored["url"] == f"/api/v1/tenants/{tenant.id}/files/{stored['id']}"
    assert data["thumbnail"]["content_type"] == "image/png"

    download = await client.get(stored["url"], headers=auth_headers(member))

    assert download.status_code == 200
    assert download.content == content
    assert download.headers["content-type"] == "application/pdf"


async def test_member_cannot_upload_resource(client: AsyncClient, tenant: Tenant, member: User):
    response = await client.post(
        files_url(tenant, "resource"),
        files={"file": ("notes.pdf", b"%PDF", "application/pdf")},
        headers=auth_headers(member),
    )

    assert response.status_code == 403


async def test_bad_thumbnail_stores_nothing(
    client: AsyncClient, db_session: AsyncSession, tenant: Tenant, moderator: User
):
    response = await client.post(
        files_url(tenant, "resource"),
        files={
            "file": ("notes.pdf", b"%PDF", "application/pdf"),
            "thumbnail": ("cover.pdf", b"%PDF", "application/pdf"),
        },
        headers=auth_headers(moderator),
    )

    assert response.status_code == 400
    assert (await db_session.execute(select(StoredFile))).all() == []


@pytest.mark.parametrize(
    ("purpose", "filename", "content_type"),
    [
        ("post-media", "clip.pdf", "application/pdf"),
        ("event-thumbnail", "script.js", "application/javascript"),
        ("announcement-attachment", "run.exe", "application/x-msdownload"),
    ],
)
async def test_wrong_content_type_is_rejected(
    client: AsyncClient,
    tenant: Tenant,
    moderator: User,
    purpose: str,
    filename: str,
    content_type: str,
):
    response = await client.post(
        files_url(tenant, purpose),
        files={"file": (filename, b"data", content_type)},
        headers=auth_headers(moderator),
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


async def test_missing_file_field(client: AsyncClient, tenant: Tenant, moderator: User):
    response = await client.post(
        files_url(tenant, "post-media"),
        files={"other": ("x.png", PNG, "image/png")},
        headers=auth_headers(moderator),
    )

    assert response.status_code == 400


async def test_post_media_requires_moderator(client: AsyncClient, tenant: Tenant, member: User):
    response = await client.post(
        files_url(tenant, "post-media"),
        files={"file": ("photo.png", PNG, "image/png")},
        headers=auth_headers(member),
    )

    assert response.status_code == 403


async def test_logo_upload_is_served_publicly(
    client: AsyncClient, tenant: Tenant, owner: User
):
    response = await client.post(
        files_url(tenant, "logo"),
        files={"file": ("logo.png", PNG, "image/png")},
        headers=auth_headers(owner),
    )

    assert response.status_code == 201
    logo_url = response.json()["logo_url"]
    assert logo_url == f"/api/v1/tenants/public/{tenant.slug}/logo"

    public = await client.get(logo_url)
    assert public.status_code == 200
    assert public.content == PNG
    assert public.headers["content-type"] == "image/png"

    listing = await client.get("/api/v1/tenants/public", params={"query": tenant.name})
    assert [t["logo_url"] for t in listing.json()] == [logo_url]


async def test_public_logo_missing(client: AsyncClient, tenant: Tenant):
    response = await client.get(f"/api/v1/tenants/public/{tenant.slug}/logo")

    assert response.status_code == 404
