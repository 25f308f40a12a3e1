from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class TenantSettingsRead(BaseModel):
    tenant_id: UUID
    public_signup: bool
    approval_required: bool
    registration_fields_enabled: bool
    enabled_sections: list[str]
    updated_at: datetime

    model_config = {"from_attributes": True}


class TenantSettingsUpdate(BaseModel):
    public_signup: bool | None = None
    approval_required: bool | None = None
    registration_fields_enabled: bool | None = None
    enabled_sections: list[str] | None = None
