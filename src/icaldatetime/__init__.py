"""pyICalDateTime: iCalendar DATE-TIME values for Python.

This library parses, validates and serializes ``YYYYMMDDTHHMMSS[Z]`` values,
keeping fixed (UTC) and floating (wall-clock) time apart.
"""

from __future__ import annotations

from .clock import FixedClock, SystemClock, TimeSource
from .exceptions import (
    FieldRangeError,
    ICalError,
    ICalTimezoneError,
    ICalValueError,
    InvalidInputTypeError,
    MalformedTextError,
    MissingFieldError,
)
from .timezone import FixedOffsetResolver, TimezoneResolver, TzInfoResolver, ZoneInfoResolver
from .value import (
    DateTimeAdapter,
    DateTimeValue,
    EncodedText,
    ExternalObject,
    FieldSet,
    NumericInstant,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Values
    "DateTimeValue",
    "DateTimeAdapter",
    "EncodedText",
    "ExternalObject",
    "FieldSet",
    "NumericInstant",
    # Collaborators
    "FixedClock",
    "SystemClock",
    "TimeSource",
    "FixedOffsetResolver",
    "TimezoneResolver",
    "TzInfoResolver",
    "ZoneInfoResolver",
    # Exceptions
    "FieldRangeError",
    "ICalError",
    "ICalTimezoneError",
    "ICalValueError",
    "InvalidInputTypeError",
    "MalformedTextError",
    "MissingFieldError",
]
