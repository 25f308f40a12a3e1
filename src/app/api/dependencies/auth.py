"""Authentication and authorization dependencies."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.app.api.dependencies.services import IdentityServiceDep
from src.app.core.exceptions import Forbidden
from src.app.core.logging import bind_user_context
from src.app.models import User

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    identity: IdentityServiceDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User:
    """Validate the bearer token and return the current, non-suspended user.

    Status and global role are re-read on every request.
    """
    user = await identity.verify(credentials.credentials if credentials else None)
    bind_user_context(user.id, user.email)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_super_admin(user: CurrentUser) -> User:
    """Require the current user to be a super-admin.

    This dependency should be used for platform-wide admin endpoints.
    """
    if not user.is_super_admin:
        raise Forbidden("Super admin privileges required")
    return user


SuperUser = Annotated[User, Depends(require_super_admin)]
