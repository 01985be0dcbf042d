"""Date manipulation utilities for monthly score history"""

from datetime import date, datetime, timezone
from typing import List


def month_key(day: date) -> str:
    """Format a date as its YYYY-MM history bucket"""
    return f"{day.year:04d}-{day.month:02d}"


def generate_month_range(end: date, months: int) -> List[str]:
    """Generate YYYY-MM keys for the `months` months ending at `end` (inclusive)"""
    keys = []
    year, month = end.year, end.month
    for _ in range(max(months, 0)):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


def utc_today() -> date:
    """Current date in UTC, the timezone snapshot months are bucketed in"""
    return datetime.now(timezone.utc).date()
