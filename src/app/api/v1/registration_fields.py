"""Custom registration fields shown on a tenant's join page."""

from uuid import UUID

from fastapi import APIRouter, status

from src.app.api.dependencies import ManagerAccess, TenantServiceDep
from src.app.schemas.notification import (
    RegistrationFieldCreate,
    RegistrationFieldRead,
    RegistrationFieldUpdate,
)

router = APIRouter(prefix="/tenants/{tenant_id}/registration-fields", tags=["settings"])


@router.get("", response_model=list[RegistrationFieldRead])
async def list_registration_fields(
    access: ManagerAccess, tenants: TenantServiceDep
) -> list[RegistrationFieldRead]:
    """All fields, including inactive ones, in display order."""
    fields = await tenants.list_fields(access.tenant_id)
    return [RegistrationFieldRead.model_validate(f) for f in fields]


@router.post("", response_model=RegistrationFieldRead, status_code=status.HTTP_201_CREATED)
async def create_registration_field(
    data: RegistrationFieldCreate, access: ManagerAccess, tenants: TenantServiceDep
) -> RegistrationFieldRead:
    field = await tenants.create_field(access.tenant_id, data.model_dump())
    return RegistrationFieldRead.model_validate(field)


@router.put(
    "/{field_id}",
    response_model=RegistrationFieldRead,
    responses={404: {"description": "Field not found"}},
)
async def update_registration_field(
    field_id: UUID,
    data: RegistrationFieldUpdate,
    access: ManagerAccess,
    tenants: TenantServiceDep,
) -> RegistrationFieldRead:
    field = await tenants.update_field(
        access.tenant_id, field_id, data.model_dump(exclude_unset=True)
    )
    return RegistrationFieldRead.model_validate(field)
