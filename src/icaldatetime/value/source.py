"""Construction inputs for date-time values.

A date-time value is built from exactly one of four input variants:

Classes:
    - NumericInstant: Seconds since the Unix epoch
    - FieldSet: Mapping of year, month, day, hour, minute and second
    - ExternalObject: Date object exposing an instant and civil text
    - EncodedText: Canonical ``YYYYMMDDTHHMMSS[Z]`` text

``coerce`` maps raw Python values onto these variants, trying numbers,
mappings, date objects and text in that order.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from ..clock import SystemClock, TimeSource
from ..epoch import civil_to_seconds
from ..exceptions import InvalidInputTypeError
from .common import CIVIL_TEXT_FORMAT

# Decimal number in text form, optionally signed, with optional exponent
_NUMERIC_TEXT_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def as_number(value: Any) -> int | float | None:
    """Interpret value as a finite number.

    Accepts ints, finite floats, ``Decimal`` and other real numbers, and
    decimal text (surrounding whitespace allowed). Booleans are not numbers.

    Returns:
        The number, or None if value is not numeric
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, (numbers.Real, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return None
        return number if math.isfinite(number) else None

    if isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_TEXT_PATTERN.fullmatch(text):
            return None
        try:
            if text.lstrip("+-").isdigit():
                return int(text)
            number = float(text)
        except ValueError:
            # Digit strings beyond the interpreter's int conversion limit
            return None
        return number if math.isfinite(number) else None

    return None


# =============================================================================
# External Date Objects
# =============================================================================


@runtime_checkable
class ExternalDateTime(Protocol):
    """Date object that can report an absolute instant and its civil fields."""

    def get_timestamp(self) -> int:
        """Seconds since the Unix epoch."""
        ...

    def format_civil(self) -> str:
        """Civil fields as 14 digits ``YYYYMMDDHHMMSS``."""
        ...


class DateTimeAdapter:
    """Expose a Python ``datetime`` as an external date object.

    Aware datetimes report their own instant. Naive datetimes are local time
    of the given time source. Microseconds are dropped.
    """

    value: datetime
    clock: TimeSource

    def __init__(self, value: datetime, clock: TimeSource | None = None) -> None:
        self.value = value
        self.clock = clock if clock is not None else SystemClock()

    def get_timestamp(self) -> int:
        dt = self.value
        offset = dt.utcoffset()

        if offset is None:
            return self.clock.local_timestamp(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

        wall = civil_to_seconds(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)
        return wall - offset // timedelta(seconds=1)

    def format_civil(self) -> str:
        dt = self.value
        return CIVIL_TEXT_FORMAT.format(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def __repr__(self) -> str:
        return f"DateTimeAdapter({self.value!r})"


# =============================================================================
# Input Variants
# =============================================================================


@dataclass(frozen=True)
class NumericInstant:
    timestamp: int | float  # Seconds since the Unix epoch, truncated to int on use


@dataclass(frozen=True)
class FieldSet:
    fields: Mapping[str, Any]  # year, month, day, hour, minute, second


@dataclass(frozen=True)
class ExternalObject:
    obj: ExternalDateTime


@dataclass(frozen=True)
class EncodedText:
    text: str  # YYYYMMDDTHHMMSS with optional trailing Z


DateTimeSource = NumericInstant | FieldSet | ExternalObject | EncodedText


def coerce(raw: Any, clock: TimeSource | None = None) -> DateTimeSource:
    """Map a raw Python value onto one of the input variants.

    Numeric text becomes a ``NumericInstant``; any other text is treated as
    canonical encoded text.

    Args:
        raw: Variant instance, number, mapping, ``datetime``, external date
            object or text
        clock: Local time source for naive ``datetime`` input

    Raises:
        InvalidInputTypeError: If raw matches none of the input shapes
    """
    if isinstance(raw, (NumericInstant, FieldSet, ExternalObject, EncodedText)):
        return raw

    number = as_number(raw)
    if number is not None:
        return NumericInstant(number)

    if isinstance(raw, Mapping):
        return FieldSet(raw)

    if isinstance(raw, datetime):
        return ExternalObject(DateTimeAdapter(raw, clock))

    if isinstance(raw, ExternalDateTime):
        return ExternalObject(raw)

    if isinstance(raw, str):
        return EncodedText(raw)

    raise InvalidInputTypeError(
        f"Supplied datetime of type {type(raw).__name__} is neither a unix timestamp, "
        "a field mapping, a date object nor encoded text"
    )
