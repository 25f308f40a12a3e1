"""Property-based tests for input normalizers using hypothesis."""

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from src.app.core.security import normalize_email, normalize_slug, sanitize_filename
from src.app.schemas.tenant import TenantCreate

pytestmark = pytest.mark.unit

SLUG_SHAPE = re.compile(r"^([a-z0-9]+(-[a-z0-9]+)*)?$")


@given(text=st.text(max_size=120))
def test_normalized_slug_has_canonical_shape(text: str):
    """Only [a-z0-9-], no dash runs, no leading or trailing dash."""
    assert SLUG_SHAPE.match(normalize_slug(text))


@given(text=st.text(max_size=120))
def test_normalize_slug_is_idempotent(text: str):
    once = normalize_slug(text)
    assert normalize_slug(once) == once


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Acme", "acme"),
        ("  Acme Corp! ", "acme-corp"),
        ("--a__b--", "a-b"),
        ("Riverside  Runners 2026", "riverside-runners-2026"),
        ("!!!", ""),
    ],
)
def test_normalize_slug_examples(raw: str, expected: str):
    assert normalize_slug(raw) == expected


def test_tenant_create_normalizes_slug():
    assert TenantCreate(name="Acme", slug=" ACME Runners ").slug == "acme-runners"


@given(slug=st.text(alphabet="!@#$%^&*()_ ", min_size=1, max_size=20))
def test_tenant_create_rejects_slug_that_normalizes_to_empty(slug: str):
    with pytest.raises(ValidationError) as exc_info:
        TenantCreate(name="Test", slug=slug)
    assert any(error["loc"] == ("slug",) for error in exc_info.value.errors())


@given(name=st.text(max_size=80))
def test_sanitized_filename_is_safe(name: str):
    assert re.fullmatch(r"[a-zA-Z0-9._-]*", sanitize_filename(name))


def test_normalize_email():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"
