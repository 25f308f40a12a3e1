"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, TenantFactory, ...
"""

from tests.factories.base import BaseFactory, TenantOwnedFactory, unique_suffix
from tests.factories.invitation import InvitationFactory
from tests.factories.tenant import TenantFactory
from tests.factories.user import DEFAULT_TEST_PASSWORD, MembershipFactory, UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "TenantOwnedFactory",
    "unique_suffix",
    # Tenant
    "TenantFactory",
    # User
    "UserFactory",
    "MembershipFactory",
    "DEFAULT_TEST_PASSWORD",
    # Invitation
    "InvitationFactory",
]
