"""Tests for tenant resolution and role ordering."""

from uuid import UUID, uuid7

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.app.core.exceptions import ValidationError
from src.app.core.tenancy import (
    MANAGEMENT_ROLES,
    MEMBER_ROLES,
    MODERATION_ROLES,
    resolve_tenant_id,
    role_allowed,
    stronger_role,
)
from src.app.models import MembershipRole

pytestmark = pytest.mark.unit

ROLES = [r.value for r in MembershipRole]


class TestResolveTenantId:
    def test_path_wins_over_body_and_query(self):
        path_id, body_id, query_id = uuid7(), uuid7(), uuid7()

        resolved = resolve_tenant_id(
            {"tenant_id": str(path_id)},
            {"tenant_id": str(body_id)},
            {"tenant_id": str(query_id)},
        )

        assert resolved == path_id

    def test_body_wins_over_query_without_path(self):
        body_id, query_id = uuid7(), uuid7()

        resolved = resolve_tenant_id({}, {"tenant_id": str(body_id)}, {"tenant_id": str(query_id)})

        assert resolved == body_id

    def test_query_used_last(self):
        query_id = uuid7()
        assert resolve_tenant_id({}, None, {"tenant_id": str(query_id)}) == query_id

    def test_null_body_value_falls_through_to_query(self):
        query_id = uuid7()
        assert resolve_tenant_id({}, {"tenant_id": None}, {"tenant_id": str(query_id)}) == query_id

    def test_missing_everywhere_raises(self):
        with pytest.raises(ValidationError, match="required"):
            resolve_tenant_id({}, {}, {})

    @pytest.mark.parametrize("raw", ["not-a-uuid", "123", ""])
    def test_malformed_path_value_raises(self, raw: str):
        with pytest.raises(ValidationError):
            resolve_tenant_id({"tenant_id": raw}, {"tenant_id": str(uuid7())})

    def test_non_string_body_value_raises(self):
        with pytest.raises(ValidationError, match="UUID string"):
            resolve_tenant_id({}, {"tenant_id": 42})

    def test_malformed_path_does_not_fall_back_to_body(self):
        """A bad path value is an error, never a cue to trust the body instead."""
        with pytest.raises(ValidationError):
            resolve_tenant_id({"tenant_id": "nope"}, {"tenant_id": str(uuid7())})

    @given(path_id=st.uuids(), other=st.uuids())
    def test_path_always_wins(self, path_id: UUID, other: UUID):
        resolved = resolve_tenant_id(
            {"tenant_id": str(path_id)}, {"tenant_id": str(other)}, {"tenant_id": str(other)}
        )
        assert resolved == path_id


class TestRoles:
    @given(current=st.sampled_from(ROLES), offered=st.sampled_from(ROLES))
    def test_stronger_role_never_downgrades(self, current: str, offered: str):
        result = stronger_role(current, offered)
        assert result in (current, offered)
        assert stronger_role(result, current) == result
        assert stronger_role(result, offered) == result

    def test_stronger_role_without_current(self):
        assert stronger_role(None, "MEMBER") == "MEMBER"

    def test_admin_is_not_downgraded_by_member_invite(self):
        assert stronger_role("ADMIN", "MEMBER") == "ADMIN"

    def test_member_is_upgraded_by_moderator_invite(self):
        assert stronger_role("MEMBER", "MODERATOR") == "MODERATOR"

    @pytest.mark.parametrize(
        ("role", "allowed", "expected"),
        [
            ("OWNER", MANAGEMENT_ROLES, True),
            ("ADMIN", MANAGEMENT_ROLES, True),
            ("MODERATOR", MANAGEMENT_ROLES, False),
            ("MODERATOR", MODERATION_ROLES, True),
            ("MEMBER", MODERATION_ROLES, False),
            ("MEMBER", MEMBER_ROLES, True),
            ("SOMETHING", MEMBER_ROLES, False),
        ],
    )
    def test_role_allowed(self, role: str, allowed, expected: bool):
        assert role_allowed(role, allowed) is expected
