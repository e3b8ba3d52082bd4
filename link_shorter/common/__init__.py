"""Common utilities for link shorter."""

from .validators import decode_target_url, normalize_path
from .headers import extract_forwarded_headers, build_base_url
from .url_builder import build_short_url
from .logging_config import setup_logging

__all__ = [
    "decode_target_url",
    "normalize_path",
    "extract_forwarded_headers",
    "build_base_url",
    "build_short_url",
    "setup_logging",
]
