"""Short URL building."""

from typing import Mapping

from .headers import get_forwarded_path_prefix


def build_short_url(
    short_id: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build complete short URL.

    Args:
        short_id: The short ID
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{short_id}"
    return f"{base}/{short_id}"


def resolve_path_prefix(headers: Mapping[str, str], configured_prefix: str = "") -> str:
    """Prefix set by a proxy wins over the configured one."""
    prefix = get_forwarded_path_prefix(headers)
    if prefix:
        return prefix
    p = (configured_prefix or "").strip().strip("/")
    return "/" + p if p else ""
