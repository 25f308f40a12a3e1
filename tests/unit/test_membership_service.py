"""Unit tests for MembershipService join and grant rules."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid7

import pytest

from src.app.core.exceptions import Forbidden, NotFound
from src.app.models import Membership, Notification, TenantSettings
from src.app.services.membership_service import PUBLIC_JOIN_DISABLED, MembershipService

pytestmark = pytest.mark.unit


@pytest.fixture
def membership_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_membership.return_value = None

    async def upsert(tenant_id, user_id, role, status, overwrite=True):
        return Membership(tenant_id=tenant_id, user_id=user_id, role=role, status=status)

    repo.upsert_membership.side_effect = upsert
    return repo


@pytest.fixture
def profile_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def notification_repo() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(membership_repo, profile_repo, notification_repo) -> MembershipService:
    return MembershipService(membership_repo, profile_repo, notification_repo, AsyncMock())


def settings(**overrides) -> TenantSettings:
    return TenantSettings(tenant_id=uuid7(), **overrides)


class TestJoin:
    async def test_open_tenant_joins_active(self, service, membership_repo):
        tenant_id, user_id = uuid7(), uuid7()

        membership, created = await service.join(tenant_id, user_id, settings())

        assert created is True
        assert membership.status == "ACTIVE"
        assert membership.role == "MEMBER"
        assert membership_repo.upsert_membership.await_args.kwargs["overwrite"] is False

    async def test_approval_required_joins_pending(self, service):
        membership, _ = await service.join(
            uuid7(), uuid7(), settings(approval_required=True)
        )
        assert membership.status == "PENDING"

    async def test_existing_membership_is_returned_unchanged(self, service, membership_repo):
        existing = Membership(tenant_id=uuid7(), user_id=uuid7(), role="ADMIN", status="ACTIVE")
        membership_repo.get_membership.return_value = existing

        membership, created = await service.join(
            existing.tenant_id, existing.user_id, settings(approval_required=True)
        )

        assert membership is existing
        assert created is False
        membership_repo.upsert_membership.assert_not_awaited()

    async def test_existing_membership_ignores_disabled_signup(self, service, membership_repo):
        existing = Membership(tenant_id=uuid7(), user_id=uuid7(), status="PENDING")
        membership_repo.get_membership.return_value = existing

        membership, created = await service.join(
            existing.tenant_id, existing.user_id, settings(public_signup=False)
        )

        assert (membership, created) == (existing, False)

    async def test_banned_user_cannot_rejoin(self, service, membership_repo):
        membership_repo.get_membership.return_value = Membership(
            tenant_id=uuid7(), user_id=uuid7(), status="BANNED"
        )

        with pytest.raises(Forbidden, match="banned"):
            await service.join(uuid7(), uuid7(), settings())

    async def test_disabled_signup_requires_invitation(self, service, membership_repo):
        with pytest.raises(Forbidden) as exc_info:
            await service.join(uuid7(), uuid7(), settings(public_signup=False))

        assert exc_info.value.code == PUBLIC_JOIN_DISABLED
        membership_repo.upsert_membership.assert_not_awaited()

    async def test_profile_is_upserted_with_new_membership(self, service, profile_repo):
        tenant_id, user_id = uuid7(), uuid7()
        profile = {"full_name": "Ada", "phone": "555-0100"}

        await service.join(tenant_id, user_id, settings(), profile=profile)

        profile_repo.upsert_profile.assert_awaited_once_with(tenant_id, user_id, profile)


class TestGrant:
    @pytest.mark.parametrize(
        ("current", "offered", "expected"),
        [
            (None, "MEMBER", "MEMBER"),
            ("MEMBER", "ADMIN", "ADMIN"),
            ("ADMIN", "MEMBER", "ADMIN"),
            ("OWNER", "MODERATOR", "OWNER"),
        ],
    )
    async def test_grant_never_downgrades(
        self, service, membership_repo, current, offered, expected
    ):
        tenant_id, user_id = uuid7(), uuid7()
        if current is not None:
            membership_repo.get_membership.return_value = Membership(
                tenant_id=tenant_id, user_id=user_id, role=current, status="PENDING"
            )

        membership = await service.grant(tenant_id, user_id, offered)

        assert membership.role == expected
        assert membership.status == "ACTIVE"

    async def test_grant_refuses_banned_user(self, service, membership_repo):
        membership_repo.get_membership.return_value = Membership(
            tenant_id=uuid7(), user_id=uuid7(), status="BANNED"
        )

        with pytest.raises(Forbidden):
            await service.grant(uuid7(), uuid7(), "MEMBER")


class TestEnsureAndUpdate:
    async def test_ensure_membership_requires_active(self, service, membership_repo):
        membership_repo.get_active_membership.return_value = None

        with pytest.raises(Forbidden, match="Not a tenant member"):
            await service.ensure_membership(uuid7(), uuid7())

    async def test_status_change_notifies_member(
        self, service, membership_repo, notification_repo
    ):
        tenant_id, user_id = uuid7(), uuid7()
        membership_repo.get_membership.return_value = Membership(
            tenant_id=tenant_id, user_id=user_id, status="PENDING"
        )
        membership_repo.update_membership.return_value = Membership(
            tenant_id=tenant_id, user_id=user_id, status="ACTIVE"
        )

        await service.update_member(tenant_id, user_id, uuid7(), status="ACTIVE")

        notification = notification_repo.add.call_args[0][0]
        assert isinstance(notification, Notification)
        assert notification.user_id == user_id
        assert notification.title == "Your membership is active"

    async def test_role_only_change_does_not_notify(
        self, service, membership_repo, notification_repo
    ):
        tenant_id, user_id = uuid7(), uuid7()
        membership_repo.get_membership.return_value = Membership(
            tenant_id=tenant_id, user_id=user_id, status="ACTIVE"
        )
        membership_repo.update_membership.return_value = Membership(
            tenant_id=tenant_id, user_id=user_id, role="MODERATOR", status="ACTIVE"
        )

        await service.update_member(tenant_id, user_id, uuid7(), role="MODERATOR")

        notification_repo.add.assert_not_called()

    async def test_update_missing_member(self, service, membership_repo):
        membership_repo.get_membership.return_value = None

        with pytest.raises(NotFound):
            await service.update_member(uuid7(), uuid7(), uuid7(), role="ADMIN")
