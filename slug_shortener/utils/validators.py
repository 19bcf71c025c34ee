"""
Input validators for slugs and target URLs.

Both functions return the cleaned value (trimmed, and for URLs optionally
given a default scheme) or raise the matching ShortenerError.
"""

import re
from typing import Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from slug_shortener.exceptions import InvalidSlugError, InvalidUrlError

SLUG_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
ALLOWED_SCHEMES = ("http", "https", "ftp")
DEFAULT_SCHEME = "http"

_SCHEME_PREFIX = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
_url_adapter = TypeAdapter(AnyUrl)


def validate_slug(slug: str, min_length: int = 5, max_length: int = 20) -> str:
    """
    Trim and validate a user-chosen slug.

    Args:
        slug: Raw slug from the request
        min_length: Minimum length after trimming
        max_length: Maximum length after trimming

    Returns:
        The trimmed slug, case preserved

    Raises:
        InvalidSlugError: wrong length or a character outside [A-Za-z0-9_-]
    """
    cleaned = slug.strip()
    if not (min_length <= len(cleaned) <= max_length) or not SLUG_PATTERN.match(cleaned):
        raise InvalidSlugError(
            f"Slug must be {min_length}-{max_length} characters of letters, "
            f"digits, '_' or '-'."
        )
    return cleaned


def validate_url(url: Optional[str], add_default_scheme: bool = True) -> str:
    """
    Trim and validate a target URL.

    A URL without ``scheme://`` gets ``http://`` prepended when
    ``add_default_scheme`` is set, so ``example.com`` becomes
    ``http://example.com``. The returned string is the trimmed input (plus
    any added scheme), not pydantic's normalized form.

    Raises:
        InvalidUrlError: empty, unparseable, unsupported scheme, or no host
    """
    if url is None or not url.strip():
        raise InvalidUrlError("URL required.")

    cleaned = url.strip()
    if add_default_scheme and not _SCHEME_PREFIX.match(cleaned):
        cleaned = f"{DEFAULT_SCHEME}://{cleaned}"

    if any(ch.isspace() for ch in cleaned):
        raise InvalidUrlError(f"Invalid URL: {cleaned}")

    try:
        parsed = _url_adapter.validate_python(cleaned)
    except ValidationError:
        raise InvalidUrlError(f"Invalid URL: {cleaned}")

    if parsed.scheme not in ALLOWED_SCHEMES or not _is_routable_host(parsed.host):
        raise InvalidUrlError(f"Invalid URL: {cleaned}")

    return cleaned


def _is_routable_host(host: Optional[str]) -> bool:
    """Dotted domain, IP literal or localhost; rejects bare words like ``foo``."""
    if not host:
        return False
    return "." in host or ":" in host or host.lower() == "localhost"
