"""X-Forwarded-* header handling for requests arriving through a proxy."""

from typing import Mapping, NamedTuple, Optional


class ForwardedHeaders(NamedTuple):
    """Proxy-supplied request attributes, first hop only."""

    proto: Optional[str]
    host: Optional[str]
    client: Optional[str]
    prefix: str


def _first_hop(value: Optional[str]) -> Optional[str]:
    # Chained proxies append comma-separated values; the client-facing one is first
    if not value:
        return None
    first = value.split(",")[0].strip()
    return first or None


def _normalize_prefix(value: Optional[str]) -> str:
    """Leading slash, no trailing slash, '' when unset."""
    p = (value or "").strip().strip("/")
    return "/" + p if p else ""


def extract_forwarded_headers(headers: Mapping[str, str]) -> ForwardedHeaders:
    """Extract X-Forwarded-* headers from request.

    Args:
        headers: Request headers (any casing)

    Returns:
        ForwardedHeaders with proto, host, client and normalized prefix
    """
    lower = {k.lower(): v for k, v in headers.items()}
    return ForwardedHeaders(
        proto=_first_hop(lower.get("x-forwarded-proto")),
        host=_first_hop(lower.get("x-forwarded-host")),
        client=_first_hop(lower.get("x-forwarded-for")),
        prefix=_normalize_prefix(_first_hop(lower.get("x-forwarded-prefix"))),
    )


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build the public base URL for short links.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    forwarded = extract_forwarded_headers(headers)

    if forwarded.proto and forwarded.host:
        return f"{forwarded.proto}://{forwarded.host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def get_forwarded_path_prefix(headers: Mapping[str, str]) -> str:
    """Path prefix from X-Forwarded-Prefix (e.g. '/s'), or '' if not set."""
    return extract_forwarded_headers(headers).prefix
