"""Date parsing utilities for timestamps found in issue payloads."""

from datetime import datetime, timezone


def parse_date_input(date_str: str) -> datetime:
    """Parse various date formats into timezone-aware datetime objects.

    Supports:
    - ISO dates: 2024-01-01, 2024-01-01T10:00:00Z, 2024-01-01T10:00:00+08:00
    - Common formats: January 1, 2024, Jan 1 2024, 2024/01/01

    Naive values are taken to be UTC.

    Args:
        date_str: Date string to parse

    Returns:
        Parsed datetime object

    Raises:
        ValueError: If date format is not recognized
    """
    date_str = date_str.strip()

    try:
        return ensure_aware(datetime.fromisoformat(date_str.replace("Z", "+00:00")))
    except ValueError:
        pass

    # Common date formats to try
    formats = [
        "%Y-%m-%d %H:%M:%S",  # 2024-01-01 10:00:00
        "%Y/%m/%d %H:%M:%S",  # 2024/01/01 10:00:00
        "%Y/%m/%d",  # 2024/01/01
        "%B %d, %Y",  # January 1, 2024
        "%b %d, %Y",  # Jan 1, 2024
        "%B %d %Y",  # January 1 2024
        "%b %d %Y",  # Jan 1 2024
    ]

    for fmt in formats:
        try:
            return ensure_aware(datetime.strptime(date_str, fmt))
        except ValueError:
            continue

    # If none of the formats worked, raise a helpful error
    raise ValueError(
        f"Unable to parse date '{date_str}'. "
        f"Supported formats include: YYYY-MM-DD, YYYY-MM-DDTHH:MM:SSZ, "
        f"'January 1, 2024', 'Jan 1 2024', YYYY/MM/DD"
    )


def ensure_aware(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes so they compare with GitHub timestamps."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
