"""Anonymous tenant directory endpoints.

Registered ahead of the /tenants/{tenant_id} routes so that "public" is
never read as a tenant id.
"""

from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import StreamingResponse

from src.app.api.dependencies import FileServiceDep, TenantServiceDep
from src.app.api.v1.files import file_response
from src.app.core.exceptions import NotFound
from src.app.schemas.tenant import JoinInfoResponse, PublicTenantRead

router = APIRouter(prefix="/tenants/public", tags=["public"])


@router.get(
    "",
    response_model=list[PublicTenantRead],
    responses={
        200: {
            "description": "Active tenants, optionally filtered by name or slug",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": "0199f0e4-8d2b-7e3f-8a10-4b5c6d7e8f91",
                            "name": "Acme Runners",
                            "slug": "acme",
                            "description": "Weekend trail running club",
                            "logo_url": "/api/v1/tenants/public/acme/logo",
                            "category": "Sports",
                            "location": "Leeds",
                        }
                    ]
                }
            },
        },
    },
)
async def list_public_tenants(
    tenants: TenantServiceDep,
    query: Annotated[str | None, Query(max_length=100, description="Search text")] = None,
) -> list[PublicTenantRead]:
    """List ACTIVE tenants. Suspended tenants are never shown."""
    return [PublicTenantRead.model_validate(t) for t in await tenants.list_public(query)]


@router.get(
    "/{slug}",
    response_model=PublicTenantRead,
    responses={404: {"description": "Tenant not found"}},
)
async def get_public_tenant(slug: str, tenants: TenantServiceDep) -> PublicTenantRead:
    return PublicTenantRead.model_validate(await tenants.get_by_slug(slug))


@router.get(
    "/{slug}/join-info",
    response_model=JoinInfoResponse,
    responses={404: {"description": "Tenant not found"}},
)
async def get_join_info(
    slug: str,
    tenants: TenantServiceDep,
    invite: Annotated[str | None, Query(description="Token from the invite link")] = None,
) -> JoinInfoResponse:
    """Everything the join page needs: signup rules, registration fields and,
    when a valid invite token is given, a preview of that invitation.
    """
    return await tenants.join_info(slug, invite)


@router.get(
    "/{slug}/logo",
    response_class=StreamingResponse,
    responses={
        200: {"description": "Logo image"},
        404: {"description": "Tenant or logo not found"},
    },
)
async def get_public_logo(
    slug: str, tenants: TenantServiceDep, files: FileServiceDep
) -> StreamingResponse:
    tenant = await tenants.get_by_slug(slug)
    if tenant.logo_file_id is None:
        raise NotFound("Logo not found")
    stored, chunks = await files.open_download(tenant.id, tenant.logo_file_id)
    return file_response(stored, chunks)
