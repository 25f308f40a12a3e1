"""Identity service - credential verification, login and registration."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.exceptions import AccountBanned, AccountSuspended, Conflict, Unauthorized
from src.app.core.logging import get_logger
from src.app.core.security import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    hash_password,
    normalize_email,
    verify_password,
)
from src.app.models import User, UserStatus
from src.app.repositories import UserRepository

logger = get_logger(__name__)


def check_account_status(user: User) -> None:
    """Raise if the account state forbids access, whatever the credential says."""
    if user.status == UserStatus.BANNED.value:
        raise AccountBanned()
    if user.status == UserStatus.SUSPENDED.value:
        raise AccountSuspended()


class IdentityService:
    """Turns a bearer credential into a current User.

    Stateless per call: the account is re-read on every verify so status
    and global role changes apply immediately.
    """

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def verify(self, token: str | None) -> User:
        """Return the user behind an access token.

        Raises:
            Unauthorized: missing, malformed, expired or non-access token, or unknown subject
            AccountSuspended / AccountBanned: the account exists but may not act
        """
        if not token:
            raise Unauthorized()

        payload = decode_token(token)
        if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
            raise Unauthorized("Invalid or expired token")

        try:
            user_id = UUID(str(payload.get("sub")))
        except ValueError as e:
            raise Unauthorized("Invalid or expired token") from e

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise Unauthorized("Invalid or expired token")

        check_account_status(user)
        return user

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Authenticate by email and password and issue an access token."""
        user = await self.user_repo.get_by_email(normalize_email(email))

        # Always verify so unknown emails cost the same as wrong passwords
        password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid:
            logger.info("Login failed")
            raise Unauthorized("Invalid email or password")

        check_account_status(user)

        token = create_access_token(user.id, user.global_role)
        logger.info("User logged in", user_id=str(user.id))
        return user, token

    async def register(
        self,
        email: str,
        password: str,
        full_name: str,
        phone: str | None = None,
    ) -> tuple[User, str]:
        """Create a regular user account and issue an access token."""
        email = normalize_email(email)
        if await self.user_repo.exists_by_email(email):
            raise Conflict("Email already registered", code="EMAIL_EXISTS")

        user = User(
            email=email,
            hashed_password=hash_password(password),
            full_name=full_name.strip(),
            phone=phone.strip() if phone else None,
        )
        self.user_repo.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise Conflict("Email already registered", code="EMAIL_EXISTS") from e
        await self.session.refresh(user)

        logger.info("User registered", user_id=str(user.id))
        return user, create_access_token(user.id, user.global_role)
