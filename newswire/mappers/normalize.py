"""Text and timestamp normalization for mapped articles."""

import calendar
import time
from datetime import datetime
from typing import Iterable, Optional, Union

import pendulum

ELLIPSIS = "..."

# feedparser's parsed UTC date, or date text it could not parse
DateCandidate = Union[time.struct_time, str, None]


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters, ending in an ellipsis when cut.

    Already-short text is returned unchanged, so truncation is idempotent.
    """
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def parse_timestamp(value: Optional[str]) -> Optional[int]:
    """Parse an RFC 822 or ISO 8601 date into epoch milliseconds.

    Values without a timezone are taken as UTC. Returns None if the value
    cannot be parsed.
    """
    if not value or not value.strip():
        return None

    try:
        parsed = pendulum.parse(value.strip(), strict=False)
    except (ValueError, OverflowError, TypeError):
        return None
    if not isinstance(parsed, datetime):
        return None
    return int(parsed.timestamp() * 1000)


def resolve_timestamp(candidates: Iterable[DateCandidate]) -> int:
    """First usable candidate date, or the current time if none parse."""
    for candidate in candidates:
        if isinstance(candidate, time.struct_time):
            return calendar.timegm(candidate) * 1000
        timestamp = parse_timestamp(candidate)
        if timestamp is not None:
            return timestamp
    return now_ms()
