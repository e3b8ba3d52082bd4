"""Validation utilities for link shorter."""

from typing import Optional
from urllib.parse import unquote

from ..errors import BadInput


def decode_target_url(url: Optional[str]) -> str:
    """Percent-decode a caller supplied target URL.

    The URL is otherwise kept opaque: no scheme or domain checks.

    Raises:
        BadInput: if decoding yields invalid UTF-8 or an empty string
    """
    if not url:
        raise BadInput("url is required")

    try:
        decoded = unquote(url, errors="strict")
    except UnicodeDecodeError as e:
        raise BadInput("url is not valid percent-encoded UTF-8") from e

    if not decoded:
        raise BadInput("url is empty")
    return decoded


def normalize_path(path: Optional[str]) -> Optional[str]:
    """Treat an absent or empty path the same way."""
    if path is None or path == "":
        return None
    return path
