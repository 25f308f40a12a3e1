"""Current-user endpoints."""

from fastapi import APIRouter

from src.app.api.dependencies import CurrentUser, UserServiceDep
from src.app.schemas.user import MyTenantRead, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=UserRead,
    responses={
        200: {
            "description": "Current user profile",
            "content": {
                "application/json": {
                    "example": {
                        "id": "0199f0e4-7c1a-7d2e-9b1f-3a4c5d6e7f80",
                        "email": "ada@example.com",
                        "full_name": "Ada Lovelace",
                        "phone": "+44 20 7946 0000",
                        "avatar_url": None,
                        "global_role": "USER",
                        "status": "ACTIVE",
                        "created_at": "2026-01-15T10:30:00Z",
                    }
                }
            },
        },
        401: {"description": "Not authenticated"},
    },
)
async def get_current_user(current_user: CurrentUser) -> UserRead:
    """Get current authenticated user."""
    return UserRead.model_validate(current_user)


@router.patch(
    "/me",
    response_model=UserRead,
    responses={
        401: {"description": "Not authenticated"},
        422: {"description": "Validation error"},
    },
)
async def update_current_user(
    data: UserUpdate, current_user: CurrentUser, service: UserServiceDep
) -> UserRead:
    """Update name, phone or avatar of the current user.

    Only provided fields are changed.
    """
    user = await service.update(current_user, data)
    return UserRead.model_validate(user)


@router.get(
    "/me/tenants",
    response_model=list[MyTenantRead],
    responses={
        200: {
            "description": "Tenants the current user belongs to",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "tenant_id": "0199f0e4-8d2b-7e3f-8a10-4b5c6d7e8f91",
                            "name": "Acme Runners",
                            "slug": "acme",
                            "logo_url": None,
                            "role": "OWNER",
                            "status": "ACTIVE",
                        }
                    ]
                }
            },
        },
        401: {"description": "Not authenticated"},
    },
)
async def list_my_tenants(current_user: CurrentUser, service: UserServiceDep) -> list[MyTenantRead]:
    """List every tenant the current user has a membership in, whatever its status."""
    return await service.my_tenants(current_user.id)
