"""Unit tests for IdentityService token verification and login."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid7

import pytest
from jose import jwt

from src.app.core.config import get_settings
from src.app.core.exceptions import AccountBanned, AccountSuspended, Conflict, Unauthorized
from src.app.core.security import create_access_token, decode_token, hash_password
from src.app.models import User, UserStatus
from src.app.services.identity_service import IdentityService

pytestmark = pytest.mark.unit

PASSWORD = "Correct-Horse-Battery-9"


def make_user(**overrides) -> User:
    values = {
        "id": uuid7(),
        "email": "ada@example.com",
        "hashed_password": hash_password(PASSWORD),
        "full_name": "Ada",
    }
    values.update(overrides)
    return User(**values)


@pytest.fixture
def user_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.add = MagicMock()
    return repo


@pytest.fixture
def service(user_repo) -> IdentityService:
    return IdentityService(user_repo, AsyncMock())


class TestVerify:
    async def test_valid_token_returns_user(self, service, user_repo):
        user = make_user()
        user_repo.get_by_id.return_value = user

        assert await service.verify(create_access_token(user.id, user.global_role)) is user
        user_repo.get_by_id.assert_awaited_once_with(user.id)

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    async def test_missing_or_malformed_token(self, service, token):
        with pytest.raises(Unauthorized):
            await service.verify(token)

    async def test_expired_token(self, service):
        token = create_access_token(uuid7(), "USER", expires_delta=timedelta(seconds=-1))

        with pytest.raises(Unauthorized):
            await service.verify(token)

    async def test_wrong_token_type(self, service):
        settings = get_settings()
        token = jwt.encode(
            {"sub": str(uuid7()), "type": "refresh", "exp": datetime.now(UTC) + timedelta(hours=1)},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(Unauthorized):
            await service.verify(token)

    async def test_unknown_subject(self, service, user_repo):
        user_repo.get_by_id.return_value = None

        with pytest.raises(Unauthorized):
            await service.verify(create_access_token(uuid7(), "USER"))

    @pytest.mark.parametrize(
        ("status", "error"),
        [(UserStatus.SUSPENDED, AccountSuspended), (UserStatus.BANNED, AccountBanned)],
    )
    async def test_blocked_account_is_rejected_with_valid_token(
        self, service, user_repo, status, error
    ):
        user = make_user(status=status.value)
        user_repo.get_by_id.return_value = user

        with pytest.raises(error):
            await service.verify(create_access_token(user.id, user.global_role))


class TestLogin:
    async def test_login_issues_access_token(self, service, user_repo):
        user = make_user()
        user_repo.get_by_email.return_value = user

        logged_in, token = await service.login("  ADA@example.com ", PASSWORD)

        assert logged_in is user
        user_repo.get_by_email.assert_awaited_once_with("ada@example.com")
        payload = decode_token(token)
        assert payload["sub"] == str(user.id)
        assert payload["global_role"] == "USER"

    async def test_wrong_password(self, service, user_repo):
        user_repo.get_by_email.return_value = make_user()

        with pytest.raises(Unauthorized, match="Invalid email or password"):
            await service.login("ada@example.com", "Wrong-Password-42")

    async def test_unknown_email_gets_same_error(self, service, user_repo):
        user_repo.get_by_email.return_value = None

        with pytest.raises(Unauthorized, match="Invalid email or password"):
            await service.login("nobody@example.com", PASSWORD)

    async def test_banned_user_cannot_log_in(self, service, user_repo):
        user_repo.get_by_email.return_value = make_user(status=UserStatus.BANNED.value)

        with pytest.raises(AccountBanned):
            await service.login("ada@example.com", PASSWORD)


class TestRegister:
    async def test_register_normalizes_email(self, service, user_repo):
        user_repo.exists_by_email.return_value = False

        user, token = await service.register(" Grace@Example.com ", PASSWORD, " Grace ")

        assert user.email == "grace@example.com"
        assert user.full_name == "Grace"
        assert user.global_role == "USER"
        assert decode_token(token)["sub"] == str(user.id)

    async def test_duplicate_email_conflicts(self, service, user_repo):
        user_repo.exists_by_email.return_value = True

        with pytest.raises(Conflict) as exc_info:
            await service.register("grace@example.com", PASSWORD, "Grace")

        assert exc_info.value.code == "EMAIL_EXISTS"
