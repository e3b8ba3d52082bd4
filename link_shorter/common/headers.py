"""Header parsing utilities for link shorter."""

from typing import Dict, Mapping, Optional
from urllib.parse import urlsplit

from ..errors import BadInput


def extract_forwarded_headers(headers: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers from request.

    Args:
        headers: Request headers dictionary

    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for
    """
    # Convert headers to lowercase for case-insensitive lookup
    headers_lower = {k.lower(): v for k, v in headers.items()}

    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_for": headers_lower.get("x-forwarded-for"),
    }


def build_base_url(
    headers: Mapping[str, str],
    request_scheme: Optional[str] = None,
) -> str:
    """Build the base URL short links are returned under.

    Priority for the host: X-Forwarded-Host, then Host. The scheme comes from
    X-Forwarded-Proto, then the request scheme, then plain http.

    Args:
        headers: Request headers
        request_scheme: Request scheme (http/https)

    Returns:
        Base URL without trailing slash (e.g. http://short.ly)

    Raises:
        BadInput: if no host was sent or it does not parse as one
    """
    forwarded = extract_forwarded_headers(headers)
    headers_lower = {k.lower(): v for k, v in headers.items()}

    host = (forwarded["forwarded_host"] or headers_lower.get("host") or "").strip()
    if not host:
        raise BadInput("missing host header")

    # Proxies may send a comma separated chain; the first hop is the client's
    scheme = (forwarded["forwarded_proto"] or request_scheme or "http").split(",")[0].strip()
    host = host.split(",")[0].strip()

    base = f"{scheme}://{host}"
    try:
        parsed = urlsplit(base)
    except ValueError as e:
        raise BadInput(f"invalid host header: {host!r}") from e
    if (
        not parsed.hostname
        or parsed.username is not None
        or parsed.path
        or parsed.query
        or parsed.fragment
        or any(c.isspace() for c in host)
    ):
        raise BadInput(f"invalid host header: {host!r}")
    try:
        parsed.port
    except ValueError as e:
        raise BadInput(f"invalid port in host header: {host!r}") from e

    return base
