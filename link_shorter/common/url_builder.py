"""URL building utilities for link shorter."""

from urllib.parse import quote


def build_short_url(path: str, base_url: str) -> str:
    """Build complete short URL.

    Args:
        path: The shorter path, percent-encoded on the way out
        base_url: Base URL (e.g., http://short.ly)

    Returns:
        Complete short URL
    """
    return f"{base_url.rstrip('/')}/{quote(path, safe='/')}"
