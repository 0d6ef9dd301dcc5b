"""iCalendar DATE-TIME value representation.

This module contains the DateTimeValue class representing a DATE-TIME
property value with support for:
- Fixed (UTC) and floating (wall-clock) time
- Construction from timestamps, field mappings, date objects and text
- Canonical text encoding and best-effort decoding
- Conversion to an absolute instant

Every construction path ends in the same place: the fields are rendered to
14 digit civil text and destructured again, so timestamps, mappings and
date objects share one normalization.

Reference: RFC 5545, Section 3.3.5
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, Self

from ..clock import SystemClock, TimeSource
from ..epoch import CivilFields, civil_to_seconds, seconds_to_civil
from ..exceptions import (
    FieldRangeError,
    InvalidInputTypeError,
    MalformedTextError,
    MissingFieldError,
)
from ..timezone import TimezoneResolver
from .common import (
    CIVIL_TEXT_FORMAT,
    CIVIL_TEXT_PATTERN,
    DATE_TIME_PATTERN,
    FIELD_KEYS,
    TIME_SEPARATOR,
    UTC_MARKER,
    DateTimeField,
)
from .source import (
    DateTimeSource,
    EncodedText,
    ExternalDateTime,
    ExternalObject,
    FieldSet,
    NumericInstant,
    as_number,
    coerce,
)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class Value(ABC):
    """Property value that can be read from and written to its text form."""

    __slots__ = ()

    @classmethod
    @abstractmethod
    def from_string(cls, text: str) -> Self | None:
        """Decode text, returning None if it is not in this value's format."""

    @abstractmethod
    def to_string(self) -> str:
        """Encode the value to its text form."""

    def __str__(self) -> str:
        return self.to_string()


# =============================================================================
# Field Validation Helpers
# =============================================================================


def _check_domains(values: Iterable[int]) -> CivilFields:
    """Verify each field lies within its domain.

    Raises:
        FieldRangeError: For the first field outside of its domain
    """
    fields = tuple(values)

    for field, number in zip(DateTimeField, fields, strict=True):
        if number < field.minimum:
            raise FieldRangeError(field.key, "minimum", field.minimum)
        if number > field.maximum:
            raise FieldRangeError(field.key, "maximum", field.maximum)

    return fields  # type: ignore[return-value]


def _validate_field_set(fields: Mapping[str, Any]) -> CivilFields:
    """Validate a field mapping and coerce each value to int.

    Fields are checked in canonical order (year first). Each must be present,
    numeric and inside its domain.

    Raises:
        MissingFieldError: If a field is absent, None or not numeric
        FieldRangeError: If a field is below its minimum or above its maximum
    """
    values = []

    for field in DateTimeField:
        number = as_number(fields.get(field.key))

        if number is None:
            raise MissingFieldError(field.key)
        if number < field.minimum:
            raise FieldRangeError(field.key, "minimum", field.minimum)
        if number > field.maximum:
            raise FieldRangeError(field.key, "maximum", field.maximum)

        values.append(int(number))

    return tuple(values)  # type: ignore[return-value]


def _compose(fields: Iterable[int]) -> str:
    """Render fields as 14 digit civil text ``YYYYMMDDHHMMSS``."""
    return CIVIL_TEXT_FORMAT.format(*_check_domains(fields))


def _destructure(civil_text: str) -> CivilFields:
    """Split 14 digit civil text into validated fields.

    Raises:
        MalformedTextError: If the text is not exactly 14 ASCII digits
        FieldRangeError: If a field is outside of its domain
    """
    if not isinstance(civil_text, str) or not (match := CIVIL_TEXT_PATTERN.fullmatch(civil_text)):
        raise MalformedTextError(f"Invalid civil datetime text: {civil_text!r} (expected YYYYMMDDHHMMSS)")

    return _check_domains(int(group) for group in match.groups())


class DateTimeValue(Value):
    """iCalendar DATE-TIME value, either fixed (UTC) or floating.

    The value is immutable. ``with_date_time`` builds a fully replaced value.

    Args:
        date_time: Input variant or raw value (see ``coerce``); None means the
            current instant of the clock, always as UTC
        is_utc: Whether the value is fixed (UTC) or floating
        clock: Time source for the current instant and local time

    Raises:
        InvalidInputTypeError: If date_time matches no input shape
        MissingFieldError: If a field mapping lacks a numeric field
        FieldRangeError: If a field falls outside its domain
        MalformedTextError: If text input is not canonical

    Examples:
        >>> DateTimeValue({"year": 2024, "month": 1, "day": 1, "hour": 0, "minute": 0, "second": 0})
        DateTimeValue(year=2024, month=1, day=1, hour=0, minute=0, second=0, is_utc=True)
        >>> str(DateTimeValue(1704067200))
        '20240101T000000Z'
        >>> DateTimeValue.from_string("20240101T120000").is_utc
        False
    """

    __slots__ = ("_fields", "_is_utc")

    _fields: CivilFields
    _is_utc: bool

    def __init__(
        self,
        date_time: DateTimeSource | Any = None,
        is_utc: bool = True,
        *,
        clock: TimeSource | None = None,
    ) -> None:
        clock = clock if clock is not None else SystemClock()

        if date_time is None:
            date_time = NumericInstant(clock.now())
            is_utc = True

        fields, is_utc = self._resolve(coerce(date_time, clock), is_utc, clock)

        # Only reached with a complete, validated field set
        self._fields = fields
        self._is_utc = is_utc

    @staticmethod
    def _resolve(source: DateTimeSource, is_utc: bool, clock: TimeSource) -> tuple[CivilFields, bool]:
        """Reduce an input variant to validated fields and the UTC flag."""
        timestamp: int | None = None

        match source:
            case NumericInstant(timestamp=raw_number):
                number = as_number(raw_number)
                if number is None:
                    raise InvalidInputTypeError(f"Numeric instant must be a finite number, not {raw_number!r}")
                if is_utc:
                    timestamp = int(number)
                else:
                    # Floating timestamps seed local wall-clock fields
                    civil_text = _compose(clock.local_civil(int(number)))

            case FieldSet(fields=fields):
                if not isinstance(fields, Mapping):
                    raise InvalidInputTypeError(f"Field set must be a mapping, not {type(fields).__name__}")
                civil_text = _compose(_validate_field_set(fields))

            case ExternalObject(obj=obj):
                if not isinstance(obj, ExternalDateTime):
                    raise InvalidInputTypeError(f"{type(obj).__name__} is not a date object")
                if is_utc:
                    timestamp = int(obj.get_timestamp())
                else:
                    civil_text = obj.format_civil()

            case EncodedText(text=text):
                if not isinstance(text, str) or not (match := DATE_TIME_PATTERN.fullmatch(text)):
                    raise MalformedTextError(f"Invalid datetime text: {text!r} (expected YYYYMMDDTHHMMSS[Z])")
                is_utc = match["utc"] is not None
                civil_text = _compose(_validate_field_set(match.groupdict()))

            case _:
                raise InvalidInputTypeError(f"Unsupported datetime input: {type(source).__name__}")

        if timestamp is not None:
            civil_text = _compose(seconds_to_civil(timestamp))

        return _destructure(civil_text), bool(is_utc)

    # =========================================================================
    # Alternate constructors
    # =========================================================================

    @classmethod
    def now(cls, clock: TimeSource | None = None) -> Self:
        """Current instant of the clock as a UTC value."""
        return cls(None, clock=clock)

    @classmethod
    def from_timestamp(cls, timestamp: int | float, is_utc: bool = True, clock: TimeSource | None = None) -> Self:
        return cls(NumericInstant(timestamp), is_utc, clock=clock)

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], is_utc: bool = True) -> Self:
        return cls(FieldSet(fields), is_utc)

    @classmethod
    def from_object(cls, obj: Any, is_utc: bool = True, clock: TimeSource | None = None) -> Self:
        """Build from a ``datetime`` or any object exposing an instant and civil text."""
        source = coerce(obj, clock)
        if not isinstance(source, ExternalObject):
            raise InvalidInputTypeError(f"{type(obj).__name__} is not a date object")
        return cls(source, is_utc, clock=clock)

    @classmethod
    def from_string(cls, text: str) -> Self | None:
        """Decode canonical ``YYYYMMDDTHHMMSS[Z]`` text.

        A trailing ``Z`` marks the value as UTC, otherwise it is floating.

        Returns:
            The decoded value, or None if text is not in canonical form

        Raises:
            FieldRangeError: If well-formed text holds an out-of-range field
        """
        if not isinstance(text, str) or not (match := DATE_TIME_PATTERN.fullmatch(text)):
            return None

        fields = {key: match[key] for key in FIELD_KEYS}
        return cls(FieldSet(fields), match["utc"] is not None)

    def with_date_time(
        self, date_time: DateTimeSource | Any, is_utc: bool = True, clock: TimeSource | None = None
    ) -> Self:
        """Return a new value with all fields and the UTC flag replaced."""
        return type(self)(date_time, is_utc, clock=clock)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def year(self) -> int:
        return self._fields[0]

    @property
    def month(self) -> int:
        return self._fields[1]

    @property
    def day(self) -> int:
        return self._fields[2]

    @property
    def hour(self) -> int:
        return self._fields[3]

    @property
    def minute(self) -> int:
        return self._fields[4]

    @property
    def second(self) -> int:
        return self._fields[5]

    @property
    def fields(self) -> CivilFields:
        """(year, month, day, hour, minute, second)"""
        return self._fields

    @property
    def is_utc(self) -> bool:
        """True for fixed (UTC) time, False for floating time."""
        return self._is_utc

    @property
    def is_floating(self) -> bool:
        return not self._is_utc

    def as_dict(self) -> dict[str, int]:
        """Fields as a mapping accepted by ``FieldSet``."""
        return dict(zip(FIELD_KEYS, self._fields, strict=True))

    # =========================================================================
    # Conversion
    # =========================================================================

    def timestamp(self, timezone: TimezoneResolver | None = None, clock: TimeSource | None = None) -> int:
        """Seconds since the Unix epoch.

        Fixed values are read as UTC and ignore timezone. Floating values are
        resolved by timezone when given, otherwise read as local time of the
        clock (the process zone by default). Days past the end of a month roll
        over into the next month.

        Raises:
            ICalTimezoneError: If a floating value cannot be resolved
        """
        if self._is_utc:
            return civil_to_seconds(*self._fields)

        if timezone is not None:
            return timezone.to_timestamp(*self._fields)

        clock = clock if clock is not None else SystemClock()
        return clock.local_timestamp(*self._fields)

    def to_datetime(self, timezone: TimezoneResolver | None = None, clock: TimeSource | None = None) -> datetime:
        """Instant as an aware ``datetime`` in UTC.

        Raises:
            ValueError: If the instant lies outside what ``datetime`` supports
        """
        try:
            return _UNIX_EPOCH + timedelta(seconds=self.timestamp(timezone, clock))
        except OverflowError as e:
            raise ValueError(f"Cannot convert {self} to datetime: {e}") from e

    def to_string(self) -> str:
        """Canonical text ``YYYYMMDDTHHMMSS``, with trailing ``Z`` if UTC."""
        civil_text = CIVIL_TEXT_FORMAT.format(*self._fields)
        return f"{civil_text[:8]}{TIME_SEPARATOR}{civil_text[8:]}{UTC_MARKER if self._is_utc else ''}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTimeValue):
            return NotImplemented
        return self._fields == other._fields and self._is_utc == other._is_utc

    def __hash__(self) -> int:
        return hash((self._fields, self._is_utc))

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_is_utc"):
            raise AttributeError(f"{type(self).__name__} is immutable, use with_date_time()")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        year, month, day, hour, minute, second = self._fields
        return (
            f"DateTimeValue(year={year}, month={month}, day={day}, hour={hour}, "
            f"minute={minute}, second={second}, is_utc={self._is_utc})"
        )
