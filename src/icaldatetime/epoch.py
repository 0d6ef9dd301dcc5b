"""Civil calendar to epoch-second arithmetic.

Pure integer conversions between proleptic Gregorian civil fields and
seconds since 1970-01-01T00:00:00Z. Unlike the standard library these
functions accept year 0 and days past the end of a month, which roll over
into the following month the same way C ``mktime`` normalizes them.

Reference: H. Hinnant, "chrono-Compatible Low-Level Date Algorithms"
"""

from __future__ import annotations

# =============================================================================
# Calendar Constants
# =============================================================================

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

DAYS_PER_ERA = 146097  # Days in a 400 year Gregorian cycle
EPOCH_DAY_OFFSET = 719468  # Days from 0000-03-01 to 1970-01-01

CivilFields = tuple[int, int, int, int, int, int]


def days_from_civil(year: int, month: int, day: int) -> int:
    """Count days from 1970-01-01 to the given civil date.

    Args:
        year: Proleptic Gregorian year (may be 0 or negative)
        month: Month 1-12
        day: Day of month, values past the month length roll over

    Returns:
        Signed day count relative to the Unix epoch
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")

    # Shift the year so that it starts in March, putting leap days last
    year -= month <= 2
    era = year // 400
    year_of_era = year - era * 400
    day_of_year = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year

    return era * DAYS_PER_ERA + day_of_era - EPOCH_DAY_OFFSET


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Convert a day count relative to the Unix epoch into (year, month, day)."""
    days += EPOCH_DAY_OFFSET
    era = days // DAYS_PER_ERA
    day_of_era = days - era * DAYS_PER_ERA
    year_of_era = (day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    month_index = (5 * day_of_year + 2) // 153  # 0 = March

    day = day_of_year - (153 * month_index + 2) // 5 + 1
    month = month_index + 3 if month_index < 10 else month_index - 9
    year = year_of_era + era * 400 + (month <= 2)

    return year, month, day


def civil_to_seconds(year: int, month: int, day: int, hour: int, minute: int, second: int) -> int:
    """Convert civil fields read as UTC into seconds since the Unix epoch."""
    return (
        days_from_civil(year, month, day) * SECONDS_PER_DAY
        + hour * SECONDS_PER_HOUR
        + minute * SECONDS_PER_MINUTE
        + second
    )


def seconds_to_civil(timestamp: int) -> CivilFields:
    """Convert seconds since the Unix epoch into UTC civil fields.

    Negative timestamps (before 1970) are supported.
    """
    days, remainder = divmod(timestamp, SECONDS_PER_DAY)
    hour, remainder = divmod(remainder, SECONDS_PER_HOUR)
    minute, second = divmod(remainder, SECONDS_PER_MINUTE)

    year, month, day = civil_from_days(days)
    return year, month, day, hour, minute, second


def normalize_civil(year: int, month: int, day: int, hour: int, minute: int, second: int) -> CivilFields:
    """Roll over out-of-month days, e.g. February 31 into early March."""
    return seconds_to_civil(civil_to_seconds(year, month, day, hour, minute, second))
