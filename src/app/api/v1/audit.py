"""Tenant audit log endpoints - OWNER/ADMIN only."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.app.api.dependencies import AuditServiceDep, ManagerAccess
from src.app.api.v1.params import CursorQuery, LimitQuery
from src.app.schemas.audit import AuditLogRead
from src.app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/tenants/{tenant_id}/audit-logs", tags=["audit"])

ActionQuery = Annotated[str | None, Query(description="Filter by action type")]
ActorQuery = Annotated[UUID | None, Query(description="Filter by acting user")]


@router.get(
    "",
    response_model=PaginatedResponse[AuditLogRead],
    responses={
        200: {
            "description": "Audit log entries for the tenant, newest first",
            "content": {
                "application/json": {
                    "example": {
                        "items": [
                            {
                                "id": "0199f0e6-2b3c-7d4e-9f50-6a7b8c9d0e1f",
                                "tenant_id": "0199f0e4-8d2b-7e3f-8a10-4b5c6d7e8f91",
                                "actor_user_id": "0199f0e4-7c1a-7d2e-9b1f-3a4c5d6e7f80",
                                "action": "INVITATION_CREATE",
                                "entity_type": "invitation",
                                "entity_id": "0199f0e5-1a2b-7c3d-8e4f-5a6b7c8d9e0f",
                                "details": {"email": "grace@example.com", "role": "MEMBER"},
                                "ip_address": "203.0.113.7",
                                "user_agent": "Mozilla/5.0...",
                                "request_id": "5d1f7c1e9a6b4f0e8c2d3b4a5e6f7a8b",
                                "status": "success",
                                "error_message": None,
                                "created_at": "2026-01-15T10:30:00Z",
                            }
                        ],
                        "next_cursor": "MjAyNi0wMS0xNVQxMDozMDowMC4wMDAwMDA=",
                        "has_more": True,
                    }
                }
            },
        },
        403: {"description": "OWNER or ADMIN role required"},
    },
)
async def list_tenant_audit_logs(
    access: ManagerAccess,
    audit_service: AuditServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
    action: ActionQuery = None,
    actor_user_id: ActorQuery = None,
) -> PaginatedResponse[AuditLogRead]:
    page = await audit_service.list_tenant_logs(
        access.tenant_id,
        cursor=cursor,
        limit=limit,
        action=action,
        actor_user_id=actor_user_id,
    )
    return PaginatedResponse.from_page(page, AuditLogRead.model_validate)
