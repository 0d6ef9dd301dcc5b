"""Value layer components for iCalendar property values.

This package contains the DATE-TIME value type, its construction inputs and
the field table shared between them.

Reference: RFC 5545, Section 3.3
"""

from .common import DateTimeField
from .date_time import DateTimeValue, Value
from .source import (
    DateTimeAdapter,
    DateTimeSource,
    EncodedText,
    ExternalDateTime,
    ExternalObject,
    FieldSet,
    NumericInstant,
    coerce,
)

__all__ = [
    # Common types
    "DateTimeField",
    # Values
    "DateTimeValue",
    "Value",
    # Construction inputs
    "DateTimeAdapter",
    "DateTimeSource",
    "EncodedText",
    "ExternalDateTime",
    "ExternalObject",
    "FieldSet",
    "NumericInstant",
    "coerce",
]
