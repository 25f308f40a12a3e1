"""Unit tests for InvitationService with mocked repositories."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid7

import pytest

from src.app.core.exceptions import Conflict, Forbidden, InvalidState, InvitationInvalid, NotFound
from src.app.core.security import hash_token
from src.app.models import Invitation, InvitationStatus, Membership, User
from src.app.models.base import utc_now
from src.app.services.invitation_service import INVITATION_EXISTS, InvitationService

pytestmark = pytest.mark.unit

TOKEN = "a-very-long-invitation-token-value"


@pytest.fixture
def invitation_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.add = MagicMock()
    repo.get_outstanding.return_value = None
    repo.mark_accepted.return_value = True
    return repo


@pytest.fixture
def membership_service() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(invitation_repo, membership_service, session) -> InvitationService:
    return InvitationService(invitation_repo, membership_service, session)


@pytest.fixture
def tenant_id():
    return uuid7()


@pytest.fixture
def user() -> User:
    return User(
        id=uuid7(), email="invitee@example.com", hashed_password="x", full_name="Invitee"
    )


def make_invitation(tenant_id, **overrides) -> Invitation:
    values = {
        "tenant_id": tenant_id,
        "email": "invitee@example.com",
        "role": "MODERATOR",
        "status": InvitationStatus.SENT.value,
        "token_hash": hash_token(TOKEN),
        "expires_at": utc_now() + timedelta(days=3),
    }
    values.update(overrides)
    return Invitation(**values)


class TestCreate:
    async def test_create_stores_only_the_hash(self, service, invitation_repo, tenant_id):
        invitation, token = await service.create(tenant_id, " New@Example.com ", uuid7())

        assert invitation.email == "new@example.com"
        assert invitation.token_hash == hash_token(token)
        assert token not in invitation.token_hash
        assert invitation.status == InvitationStatus.SENT.value
        invitation_repo.add.assert_called_once_with(invitation)

    async def test_ttl_is_clamped(self, service, tenant_id):
        invitation, _ = await service.create(tenant_id, "a@example.com", uuid7(), ttl_days=365)

        remaining = invitation.expires_at - utc_now()
        assert timedelta(days=29) < remaining <= timedelta(days=30)

    async def test_outstanding_invitation_conflicts(self, service, invitation_repo, tenant_id):
        invitation_repo.get_outstanding.return_value = make_invitation(tenant_id)

        with pytest.raises(Conflict) as exc_info:
            await service.create(tenant_id, "invitee@example.com", uuid7())

        assert exc_info.value.code == INVITATION_EXISTS
        invitation_repo.add.assert_not_called()

    async def test_duplicate_check_runs_under_tenant_lock(
        self, service, invitation_repo, session, tenant_id
    ):
        await service.create(tenant_id, "invitee@example.com", uuid7())

        called = [name for name, _, _ in invitation_repo.mock_calls]
        assert called[:3] == ["lock_tenant", "get_outstanding", "add"]
        invitation_repo.lock_tenant.assert_awaited_once_with(tenant_id)
        session.commit.assert_awaited_once()


class TestAccept:
    async def test_accept_grants_invited_role(
        self, service, invitation_repo, membership_service, session, tenant_id, user
    ):
        invitation = make_invitation(tenant_id)
        invitation_repo.get_by_token_hash.return_value = invitation
        membership_service.grant.return_value = Membership(
            tenant_id=tenant_id, user_id=user.id, role="MODERATOR", status="ACTIVE"
        )

        _, membership = await service.accept(tenant_id, TOKEN, user)

        invitation_repo.get_by_token_hash.assert_awaited_once_with(hash_token(TOKEN))
        membership_service.grant.assert_awaited_once_with(tenant_id, user.id, "MODERATOR")
        session.commit.assert_awaited()
        assert membership.status == "ACTIVE"

    async def test_token_from_another_tenant_is_not_found(
        self, service, invitation_repo, tenant_id, user
    ):
        invitation_repo.get_by_token_hash.return_value = make_invitation(uuid7())

        with pytest.raises(NotFound):
            await service.accept(tenant_id, TOKEN, user)

    @pytest.mark.parametrize(
        ("overrides", "label"),
        [
            ({"status": "REVOKED"}, "revoked"),
            ({"status": "ACCEPTED"}, "accepted"),
            ({"expires_at": utc_now() - timedelta(minutes=1)}, "expired"),
        ],
    )
    async def test_non_sent_invitation_is_invalid(
        self, service, invitation_repo, membership_service, tenant_id, user, overrides, label
    ):
        invitation_repo.get_by_token_hash.return_value = make_invitation(tenant_id, **overrides)

        with pytest.raises(InvitationInvalid, match=label):
            await service.accept(tenant_id, TOKEN, user)
        membership_service.grant.assert_not_awaited()

    async def test_email_mismatch_is_forbidden(self, service, invitation_repo, tenant_id, user):
        invitation_repo.get_by_token_hash.return_value = make_invitation(
            tenant_id, email="someone-else@example.com"
        )

        with pytest.raises(Forbidden):
            await service.accept(tenant_id, TOKEN, user)

    async def test_email_match_ignores_case(
        self, service, invitation_repo, membership_service, tenant_id, user
    ):
        invitation_repo.get_by_token_hash.return_value = make_invitation(
            tenant_id, email="INVITEE@example.com"
        )
        membership_service.grant.return_value = Membership(tenant_id=tenant_id, user_id=user.id)

        await service.accept(tenant_id, TOKEN, user)

        membership_service.grant.assert_awaited_once()

    async def test_lost_race_is_invalid(
        self, service, invitation_repo, membership_service, session, tenant_id, user
    ):
        """The conditional update matched nothing: someone else accepted first."""
        invitation_repo.get_by_token_hash.return_value = make_invitation(tenant_id)
        invitation_repo.mark_accepted.return_value = False

        with pytest.raises(InvitationInvalid):
            await service.accept(tenant_id, TOKEN, user)

        session.rollback.assert_awaited_once()
        membership_service.grant.assert_not_awaited()


class TestResendRevoke:
    async def test_resend_revoked_reissues(self, service, invitation_repo, tenant_id):
        invitation = make_invitation(
            tenant_id, status="REVOKED", revoked_at=utc_now(), revoked_by_user_id=uuid7()
        )
        old_hash = invitation.token_hash
        invitation_repo.get_scoped.return_value = invitation

        _, token = await service.resend(tenant_id, invitation.id, uuid7())

        assert invitation.status == InvitationStatus.SENT.value
        assert invitation.revoked_at is None
        assert invitation.revoked_by_user_id is None
        assert invitation.token_hash == hash_token(token) != old_hash

    async def test_resend_accepted_is_invalid_state(self, service, invitation_repo, tenant_id):
        invitation_repo.get_scoped.return_value = make_invitation(tenant_id, status="ACCEPTED")

        with pytest.raises(InvalidState):
            await service.resend(tenant_id, uuid7(), uuid7())

    async def test_revoke_accepted_is_invalid_state(self, service, invitation_repo, tenant_id):
        invitation_repo.get_scoped.return_value = make_invitation(tenant_id, status="ACCEPTED")

        with pytest.raises(InvalidState):
            await service.revoke(tenant_id, uuid7(), uuid7())

    async def test_revoke_sets_actor(self, service, invitation_repo, tenant_id):
        invitation = make_invitation(tenant_id)
        invitation_repo.get_scoped.return_value = invitation
        actor = uuid7()

        await service.revoke(tenant_id, invitation.id, actor)

        assert invitation.status == InvitationStatus.REVOKED.value
        assert invitation.revoked_by_user_id == actor
        assert invitation.revoked_at is not None

    async def test_missing_invitation_is_not_found(self, service, invitation_repo, tenant_id):
        invitation_repo.get_scoped.return_value = None

        with pytest.raises(NotFound):
            await service.revoke(tenant_id, uuid7(), uuid7())
