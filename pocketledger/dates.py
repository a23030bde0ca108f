"""Date utilities for pocketledger.

All bucketing happens in UTC. Entries are stamped in UTC by the store and
month keys are derived from the UTC calendar, so an entry created near
midnight lands in the same month no matter what the caller's local clock says.
"""

import re
from datetime import UTC, datetime

from pocketledger.domain.models import Month
from pocketledger.errors import InvalidMonthKey

REFERENCE_TZ = UTC

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")

# The month after 9999-12 has no datetime, so the last year is excluded
MIN_YEAR = 1
MAX_YEAR = 9998


def to_reference_tz(timestamp: datetime) -> datetime:
    """Convert a timestamp to UTC, treating naive values as already UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=REFERENCE_TZ)
    return timestamp.astimezone(REFERENCE_TZ)


def month_key_of(timestamp: datetime) -> Month:
    """Get the YYYY-MM key of the UTC calendar month containing timestamp."""
    ts = to_reference_tz(timestamp)
    return Month(f"{ts.year:04d}-{ts.month:02d}")


def parse_month_key(month: str) -> tuple[int, int]:
    """Parse a month key into (year, month).

    Raises:
        InvalidMonthKey: If the key is not YYYY-MM with a month of 01-12
            and a year between MIN_YEAR and MAX_YEAR.
    """
    if not isinstance(month, str):
        raise InvalidMonthKey(f"Month must be a YYYY-MM string, got {month!r}")
    match = _MONTH_KEY_RE.match(month)
    if match is None:
        raise InvalidMonthKey(f"Invalid month '{month}', expected YYYY-MM")
    year, month_num = int(match.group(1)), int(match.group(2))
    if not 1 <= month_num <= 12:
        raise InvalidMonthKey(f"Invalid month '{month}', expected YYYY-MM")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidMonthKey(f"Month '{month}' is out of range ({MIN_YEAR:04d}-{MAX_YEAR:04d})")
    return year, month_num


def month_range(month: str) -> tuple[datetime, datetime]:
    """Calculate the half-open UTC interval covering a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (start, end) where start is midnight on the first of the month
        and end is midnight on the first of the following month.

    Raises:
        InvalidMonthKey: If month is not a valid month key.
    """
    year, month_num = parse_month_key(month)
    start = datetime(year, month_num, 1, tzinfo=REFERENCE_TZ)
    if month_num == 12:
        end = datetime(year + 1, 1, 1, tzinfo=REFERENCE_TZ)
    else:
        end = datetime(year, month_num + 1, 1, tzinfo=REFERENCE_TZ)
    return start, end


def month_label(month: str) -> str:
    """Human-readable label for a month key (e.g., "January 2025")."""
    start, _ = month_range(month)
    return start.strftime("%B %Y")


def current_month(now: datetime | None = None) -> Month:
    """Get the month key for now (or the given timestamp) in UTC."""
    if now is None:
        now = datetime.now(REFERENCE_TZ)
    return month_key_of(now)


def format_timestamp(timestamp: datetime) -> str:
    """Format a timestamp as the fixed-width UTC text stored in the database."""
    # Fixed width (microseconds always present) so stored values sort as text
    return to_reference_tz(timestamp).isoformat(timespec="microseconds")


def parse_timestamp(text: str) -> datetime:
    """Parse a stored timestamp back into an aware UTC datetime."""
    return to_reference_tz(datetime.fromisoformat(text))
