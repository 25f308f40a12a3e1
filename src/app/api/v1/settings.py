"""Tenant settings endpoints."""

from fastapi import APIRouter

from src.app.api.dependencies import ManagerAccess, TenantServiceDep
from src.app.schemas.settings import TenantSettingsRead, TenantSettingsUpdate

router = APIRouter(prefix="/tenants/{tenant_id}/settings", tags=["settings"])


@router.get("", response_model=TenantSettingsRead)
async def get_tenant_settings(
    access: ManagerAccess, tenants: TenantServiceDep
) -> TenantSettingsRead:
    """Settings for the tenant, created with defaults on first read."""
    return TenantSettingsRead.model_validate(await tenants.get_settings(access.tenant_id))


@router.put("", response_model=TenantSettingsRead)
async def update_tenant_settings(
    data: TenantSettingsUpdate, access: ManagerAccess, tenants: TenantServiceDep
) -> TenantSettingsRead:
    settings = await tenants.update_settings(
        access.tenant_id, data.model_dump(exclude_none=True), access.user_id
    )
    return TenantSettingsRead.model_validate(settings)
