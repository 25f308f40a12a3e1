"""Security utilities - crypto and validators.

Re-exports all security-related functions for convenience.
"""

from src.app.core.security.crypto import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    generate_invitation_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.app.core.security.validators import (
    normalize_email,
    normalize_slug,
    sanitize_filename,
)

__all__ = [
    # Crypto
    "ACCESS_TOKEN_TYPE",
    "DUMMY_PASSWORD_HASH",
    "create_access_token",
    "decode_token",
    "generate_invitation_token",
    "hash_password",
    "hash_token",
    "verify_password",
    # Validators
    "normalize_email",
    "normalize_slug",
    "sanitize_filename",
]
