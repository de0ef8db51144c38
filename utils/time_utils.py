"""
utils/time_utils.py

Purpose: Timestamp utilities
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """
    Current UTC time as ISO-8601 with a trailing Z, e.g. 2024-06-20T12:00:00.000Z
    """
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
