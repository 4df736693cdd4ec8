"""Retry-After header parsing."""

from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime


def parse_retry_after(
    header_value: str | None,
    now: datetime | None = None,
) -> timedelta | None:
    """Parse a Retry-After value as delta-seconds or an HTTP date.

    Dates in the past yield a zero duration. Anything unparsable yields
    None: a missing hint is never an error.
    """
    if header_value is None:
        return None
    value = header_value.strip()
    if not value:
        return None

    if value.isascii() and value.isdigit():
        try:
            return timedelta(seconds=int(value))
        except (ValueError, OverflowError):
            return None

    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        return None
    if when is None:
        return None
    if when.tzinfo is None:
        # "-0000" means UTC with no further information
        when = when.replace(tzinfo=UTC)

    if now is None:
        now = datetime.now(UTC)
    return max(when - now, timedelta(0))
