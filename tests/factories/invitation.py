"""Invitation factory for test data generation."""

from datetime import timedelta

from polyfactory import Use

from src.app.core.security import generate_invitation_token, hash_token
from src.app.models import Invitation, InvitationStatus, MembershipRole
from src.app.models.base import utc_now
from tests.factories.base import TenantOwnedFactory, unique_suffix


def generate_token_hash() -> str:
    """Generate a random token hash."""
    return hash_token(generate_invitation_token())


class InvitationFactory(TenantOwnedFactory):
    """Factory for generating Invitation test data.

    The plaintext token is not recoverable from a built invitation; pass
    token_hash=hash_token(token) when the test needs to accept it.
    """

    __model__ = Invitation

    email = Use(lambda: f"invite_{unique_suffix()}@example.com")
    phone = None
    role = MembershipRole.MEMBER.value
    status = InvitationStatus.SENT.value
    token_hash = Use(generate_token_hash)
    invited_by_user_id = None
    expires_at = Use(lambda: utc_now() + timedelta(days=7))
    revoked_at = None
    revoked_by_user_id = None
    accepted_at = None
    accepted_by_user_id = None

    @classmethod
    def expired(cls, **kwargs):
        """Create an invitation whose expiry has passed (stored status stays SENT)."""
        return cls.build(expires_at=utc_now() - timedelta(days=1), **kwargs)

    @classmethod
    def revoked(cls, **kwargs):
        return cls.build(
            status=InvitationStatus.REVOKED.value, revoked_at=utc_now(), **kwargs
        )
