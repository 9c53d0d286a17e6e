from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Naive UTC now; every timestamp in this package is naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 datetime string and normalize to UTC-naive datetime.

    - None / "" -> None
    - "YYYY-MM-DDTHH:MM" (naive) is interpreted as UTC
    - "...Z" or "...+/-HH:MM" is converted to UTC and tzinfo is stripped
    - fractional seconds longer than microseconds (Go emits nanoseconds) are truncated
    """
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None

    # Accept trailing Z
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    s = _truncate_fraction(s)
    dt = datetime.fromisoformat(s)

    # Normalize to UTC-naive
    if dt.tzinfo is None:
        return dt

    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def _truncate_fraction(s: str) -> str:
    if "." not in s:
        return s
    head, _, rest = s.partition(".")
    digits = ""
    for ch in rest:
        if not ch.isdigit():
            break
        digits += ch
    tail = rest[len(digits):]
    return f"{head}.{digits[:6].ljust(6, '0')}{tail}"


def format_timestamp(dt: Optional[datetime]) -> str:
    """Human-readable UTC timestamp for tables; empty string when unknown."""
    if dt is None:
        return ""
    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")
