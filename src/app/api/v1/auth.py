"""Authentication endpoints: account registration and password login."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.app.api.dependencies import AuditServiceDep, IdentityServiceDep
from src.app.core.config import get_settings
from src.app.core.exceptions import Unauthorized
from src.app.core.rate_limit import limiter
from src.app.models import AuditAction
from src.app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from src.app.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])

_settings = get_settings()

_TOKEN_EXAMPLE = {
    "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "token_type": "bearer",
    "user": {
        "id": "0199f0e4-7c1a-7d2e-9b1f-3a4c5d6e7f80",
        "email": "ada@example.com",
        "full_name": "Ada Lovelace",
        "phone": None,
        "avatar_url": None,
        "global_role": "USER",
        "status": "ACTIVE",
        "created_at": "2026-01-15T10:30:00Z",
    },
}


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Account created",
            "content": {"application/json": {"example": _TOKEN_EXAMPLE}},
        },
        409: {"description": "Email already registered (EMAIL_EXISTS)"},
        422: {"description": "Invalid email or weak password"},
    },
)
@limiter.limit(_settings.register_rate_limit)
async def register(
    request: Request,
    register_data: RegisterRequest,
    service: IdentityServiceDep,
    audit: AuditServiceDep,
) -> TokenResponse:
    """Create a regular user account and sign it in.

    New accounts never hold the super-admin role.
    """
    user, token = await service.register(
        email=register_data.email,
        password=register_data.password,
        full_name=register_data.full_name,
        phone=register_data.phone,
    )
    await audit.record(
        AuditAction.USER_REGISTER, entity_type="user", entity_id=user.id, actor_user_id=user.id
    )
    return TokenResponse(access_token=token, user=UserRead.model_validate(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {"application/json": {"example": _TOKEN_EXAMPLE}},
        },
        401: {"description": "Invalid credentials"},
        403: {"description": "Account suspended or banned"},
    },
)
@limiter.limit(_settings.login_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: IdentityServiceDep,
    audit: AuditServiceDep,
) -> TokenResponse:
    """Authenticate with email and password."""
    try:
        user, token = await service.login(login_data.email, login_data.password)
    except Unauthorized as e:
        await audit.record_failure(
            AuditAction.USER_LOGIN, entity_type="user", error_message=e.message
        )
        raise

    await audit.record(
        AuditAction.USER_LOGIN, entity_type="user", entity_id=user.id, actor_user_id=user.id
    )
    return TokenResponse(access_token=token, user=UserRead.model_validate(user))
