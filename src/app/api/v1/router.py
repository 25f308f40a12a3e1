from fastapi import APIRouter

from src.app.api.v1 import (
    admin,
    announcements,
    audit,
    auth,
    events,
    files,
    groups,
    invitations,
    members,
    notifications,
    posts,
    programs,
    public_tenants,
    registration_fields,
    resources,
    settings,
    tenants,
    users,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(admin.router)
# Before tenants: /tenants/public must not be matched as /tenants/{tenant_id}
api_router.include_router(public_tenants.router)
api_router.include_router(tenants.router)
api_router.include_router(members.router)
api_router.include_router(invitations.router)
api_router.include_router(files.router)
api_router.include_router(announcements.router)
api_router.include_router(posts.router)
api_router.include_router(resources.router)
api_router.include_router(groups.router)
api_router.include_router(events.router)
api_router.include_router(programs.router)
api_router.include_router(notifications.router)
api_router.include_router(registration_fields.router)
api_router.include_router(settings.router)
api_router.include_router(audit.router)
