"""Property tests for the derived invitation status."""

from datetime import datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.app.models import InvitationStatus
from src.app.services.invitation_service import clamp_ttl_days, invitation_status

pytestmark = pytest.mark.unit

NOW = datetime(2026, 1, 15, 12, 0, 0)

offsets = st.timedeltas(min_value=timedelta(days=-365), max_value=timedelta(days=365))


@given(offset=offsets)
def test_revoked_wins_regardless_of_expiry(offset: timedelta):
    assert invitation_status("REVOKED", NOW + offset, NOW) is InvitationStatus.REVOKED


@given(offset=offsets)
def test_accepted_wins_regardless_of_expiry(offset: timedelta):
    assert invitation_status("ACCEPTED", NOW + offset, NOW) is InvitationStatus.ACCEPTED


@given(offset=st.timedeltas(min_value=timedelta(microseconds=1), max_value=timedelta(days=365)))
def test_sent_past_expiry_is_expired(offset: timedelta):
    assert invitation_status("SENT", NOW - offset, NOW) is InvitationStatus.EXPIRED


@given(offset=st.timedeltas(min_value=timedelta(0), max_value=timedelta(days=365)))
def test_sent_before_expiry_is_sent(offset: timedelta):
    assert invitation_status("SENT", NOW + offset, NOW) is InvitationStatus.SENT


def test_expiry_equal_to_now_is_still_sent():
    assert invitation_status("SENT", NOW, NOW) is InvitationStatus.SENT


@pytest.mark.parametrize(
    ("requested", "expected"),
    [(None, 7), (0, 1), (-5, 1), (1, 1), (14, 14), (30, 30), (90, 30)],
)
def test_clamp_ttl_days(requested: int | None, expected: int):
    assert clamp_ttl_days(requested) == expected
