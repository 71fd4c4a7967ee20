"""Validation utilities for URL shortener."""

import re
from urllib.parse import urlsplit
from typing import Tuple

from ..shortcode import ShortIDGenerator

ALLOWED_SCHEMES = ("http", "https")

# Characters never allowed in a host
HOST_FORBIDDEN_CHARS = frozenset(" {}|\\^`")

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_PORT = re.compile(r"[0-9]*")


def _port_text(host: str) -> str:
    """Text after the port colon of a host, or ''."""
    if host.startswith("["):
        rest = host[host.find("]") + 1:]
        return rest[1:] if rest.startswith(":") else ""
    _, sep, port = host.rpartition(":")
    return port if sep else ""


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Whitespace is trimmed for the checks only; callers keep the raw string.
    The scheme is compared case-sensitively, so ``HTTP://`` is rejected.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(url, str):
        return False, "URL is required"

    candidate = url.strip()
    if not candidate:
        return False, "URL is required"

    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in candidate):
        return False, "Invalid URL format: control character in URL"

    if _BAD_ESCAPE.search(candidate):
        return False, "Invalid URL format: invalid percent escape"

    try:
        result = urlsplit(candidate)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    # urlsplit lowercases the scheme; compare the text as written
    scheme = candidate[:len(result.scheme)] if result.scheme else ""
    if scheme not in ALLOWED_SCHEMES:
        return False, "URL must use http or https protocol"

    host = result.netloc.rpartition("@")[2]
    if not host:
        return False, "URL must have a valid host"

    if any(c in HOST_FORBIDDEN_CHARS for c in host):
        return False, "Invalid URL format: invalid character in host"

    # Only digits are checked; the numeric range is not
    if not _PORT.fullmatch(_port_text(host)):
        return False, "Invalid URL format: invalid port"

    return True, ""


def is_valid_short_id(short_id: str, min_length: int = 6, max_length: int = 8) -> Tuple[bool, str]:
    """Validate the format of a short ID.

    Generated IDs are always 8 characters; shorter ones are accepted so the
    generator can change without breaking existing links.

    Args:
        short_id: The short ID to validate
        min_length: Minimum length for short ID
        max_length: Maximum length for short ID

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_id or not isinstance(short_id, str):
        return False, "Short ID is required"

    if len(short_id) < min_length:
        return False, f"Short ID must be at least {min_length} characters"

    if len(short_id) > max_length:
        return False, f"Short ID must be at most {max_length} characters"

    if not ShortIDGenerator.is_valid_format(short_id):
        return False, "Short ID can only contain letters, numbers, hyphens, and underscores"

    return True, ""
