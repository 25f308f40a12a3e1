"""Input normalizers for slugs, emails and uploaded file names."""

import re
from typing import Final

MAX_TENANT_SLUG_LENGTH: Final[int] = 80

_SLUG_INVALID_CHARS: Final[re.Pattern[str]] = re.compile(r"[^a-z0-9-]")
_SLUG_DASH_RUNS: Final[re.Pattern[str]] = re.compile(r"-+")
_FILENAME_INVALID_CHARS: Final[re.Pattern[str]] = re.compile(r"[^a-zA-Z0-9.-]")


def normalize_slug(value: str) -> str:
    """Normalize free text into a tenant slug.

    Trim, lowercase, replace anything outside [a-z0-9-] with a dash,
    collapse dash runs and strip leading/trailing dashes. May return "".

    Examples:
        >>> normalize_slug("  Acme Corp! ")
        'acme-corp'
        >>> normalize_slug("--a__b--")
        'a-b'
    """
    slug = _SLUG_INVALID_CHARS.sub("-", value.strip().lower())
    slug = _SLUG_DASH_RUNS.sub("-", slug)
    return slug.strip("-")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def sanitize_filename(name: str) -> str:
    """Replace every character outside [a-zA-Z0-9.-] with an underscore."""
    return _FILENAME_INVALID_CHARS.sub("_", name)

