"""Tests for password hashing, access tokens and token hashing."""

from datetime import timedelta
from uuid import uuid7

import pytest

from src.app.core.security import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_token,
    generate_invitation_token,
    hash_password,
    hash_token,
    verify_password,
)

pytestmark = pytest.mark.unit


def test_password_round_trip():
    hashed = hash_password("Correct-Horse-Battery-9")

    assert hashed.startswith("$argon2id$")
    assert verify_password("Correct-Horse-Battery-9", hashed)
    assert not verify_password("correct-horse-battery-9", hashed)


def test_verify_password_with_garbage_hash():
    assert verify_password("anything", "not-an-argon2-hash") is False


def test_access_token_claims():
    user_id = uuid7()

    payload = decode_token(create_access_token(user_id, "SUPER_ADMIN"))

    assert payload["sub"] == str(user_id)
    assert payload["global_role"] == "SUPER_ADMIN"
    assert payload["type"] == ACCESS_TOKEN_TYPE


def test_expired_token_decodes_to_none():
    token = create_access_token(uuid7(), "USER", expires_delta=timedelta(seconds=-5))
    assert decode_token(token) is None


def test_tampered_token_decodes_to_none():
    header, payload, signature = create_access_token(uuid7(), "USER").split(".")
    forged = ("A" if signature[0] != "A" else "B") + signature[1:]
    assert decode_token(f"{header}.{payload}.{forged}") is None


def test_invitation_tokens_are_unique_and_hash_is_stable():
    tokens = {generate_invitation_token() for _ in range(50)}

    assert len(tokens) == 50
    token = tokens.pop()
    assert hash_token(token) == hash_token(token)
    assert len(hash_token(token)) == 64
