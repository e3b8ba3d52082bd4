"""Expiry instants.

A ttl is stored as an absolute instant in integer microseconds since the Unix
epoch (UTC), never as a duration.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from .errors import BadInput

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MICROSECOND = timedelta(microseconds=1)

# SQLite INTEGER is a signed 64-bit value
MAX_INSTANT = 2**63 - 1
MIN_INSTANT = -(2**63)


def now_micros() -> int:
    """Current instant in microseconds."""
    return (datetime.now(timezone.utc) - EPOCH) // ONE_MICROSECOND


def to_absolute(seconds: int) -> int:
    """Convert a relative duration into an absolute expiry instant.

    Zero or negative durations give an instant that has already passed.

    Raises:
        BadInput: if the instant does not fit in a stored integer
    """
    instant = now_micros() + seconds * 1_000_000
    if not MIN_INSTANT <= instant <= MAX_INSTANT:
        raise BadInput(f"lifetime of {seconds} seconds is out of range")
    return instant


def optional_expiry(seconds: Optional[int]) -> Optional[int]:
    """``to_absolute`` for an optional duration; None means never expires."""
    if seconds is None:
        return None
    return to_absolute(seconds)


def _is_instant(ttl) -> bool:
    return isinstance(ttl, int) and not isinstance(ttl, bool)


def from_micros(ttl: int) -> datetime:
    """Turn a stored instant back into an aware datetime.

    Raises:
        TypeError: if ``ttl`` is not an integer
        OverflowError: if ``ttl`` lies outside the datetime range
    """
    if not _is_instant(ttl):
        raise TypeError(f"ttl must be an integer, got {type(ttl).__name__}")
    return EPOCH + timedelta(microseconds=ttl)


def is_expired(ttl) -> bool:
    """True once ``now >= ttl``. Non-integer instants count as expired."""
    if not _is_instant(ttl):
        logger.warning(f"Invalid timestamp {ttl!r} in storage, treating as expired")
        return True
    return now_micros() >= ttl


def describe_expiry(ttl: Optional[int]) -> str:
    """Human readable expiry used by the listing commands."""
    if ttl is None:
        return "-"
    if not _is_instant(ttl):
        return "invalid (expired)"
    try:
        text = from_micros(ttl).strftime("%Y-%m-%d %H:%M:%S UTC")
    except (ValueError, OverflowError):
        text = f"{ttl} us since epoch"
    if is_expired(ttl):
        return f"{text} (expired)"
    return text
