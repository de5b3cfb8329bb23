"""Utility constants and helpers for calspan.

Fixed-length unit constants represent durations in milliseconds.
Calendar-variable unit constants represent durations in months.
"""

from zoneinfo import ZoneInfo

# Fixed-length unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1_000
MINUTE = 60_000
HOUR = 3_600_000
DAY = 86_400_000
WEEK = 604_800_000

# Calendar-variable unit constants (all values in months)
MONTH = 1
QUARTER = 3
YEAR = 12

# Zone in which calendar fields are added to time points
REFERENCE_TZ = "UTC"

# Bounds of a calendar field amount
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def zone(tz: str | ZoneInfo) -> ZoneInfo:
    """Resolve an IANA zone name (or pass a ZoneInfo through)."""
    if isinstance(tz, ZoneInfo):
        return tz
    return ZoneInfo(tz)
