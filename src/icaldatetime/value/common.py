"""Common types and constants shared across the value layer.

This module contains the field table describing the six date-time fields,
their order in the canonical encoding and their allowed domains, together
with the compiled canonical text patterns.

Reference: RFC 5545, Section 3.3.5 (DATE-TIME)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import NamedTuple

# =============================================================================
# Canonical Encoding Constants (RFC 5545, Section 3.3.5)
# =============================================================================

UTC_MARKER = "Z"  # Trailing marker for fixed (UTC) time
TIME_SEPARATOR = "T"  # Literal between date and time parts

# Full text form: YYYYMMDDTHHMMSS with optional trailing Z
DATE_TIME_PATTERN = re.compile(
    r"(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})"
    r"T(?P<hour>\d{2})(?P<minute>\d{2})(?P<second>\d{2})(?P<utc>Z)?",
    re.ASCII,
)

# Civil text form without separator or marker: YYYYMMDDHHMMSS
CIVIL_TEXT_PATTERN = re.compile(r"(\d{4})(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})", re.ASCII)

CIVIL_TEXT_FORMAT = "{:04d}{:02d}{:02d}{:02d}{:02d}{:02d}"


class _FieldDescriptor(NamedTuple):
    """Descriptor for a single date-time field."""

    key: str  # Mapping key and attribute name
    minimum: int  # Lowest allowed value (inclusive)
    maximum: int  # Highest allowed value (inclusive)


class DateTimeField(Enum):
    """The six date-time fields in canonical encoding order.

    Day of month is checked against 1-31 only, without regard to month
    length or leap years.
    """

    YEAR = _FieldDescriptor(key="year", minimum=0, maximum=9999)
    MONTH = _FieldDescriptor(key="month", minimum=1, maximum=12)
    DAY = _FieldDescriptor(key="day", minimum=1, maximum=31)
    HOUR = _FieldDescriptor(key="hour", minimum=0, maximum=23)
    MINUTE = _FieldDescriptor(key="minute", minimum=0, maximum=59)
    SECOND = _FieldDescriptor(key="second", minimum=0, maximum=59)

    @property
    def key(self) -> str:
        return self.value.key

    @property
    def minimum(self) -> int:
        return self.value.minimum

    @property
    def maximum(self) -> int:
        return self.value.maximum


FIELD_KEYS: tuple[str, ...] = tuple(field.key for field in DateTimeField)
