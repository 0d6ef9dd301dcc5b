"""iCalendar value exception classes."""

from __future__ import annotations


class ICalError(Exception):
    """Base exception for all iCalendar value errors."""


class ICalValueError(ICalError, ValueError):
    """Validation errors raised while building a value."""


class InvalidInputTypeError(ICalError, TypeError):
    """Construction input is none of the accepted input shapes."""


class MissingFieldError(ICalValueError):
    """A required date-time field is absent or not numeric."""

    field: str

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Supplied datetime fields are missing {field} element")


class FieldRangeError(ICalValueError):
    """A date-time field lies outside of its domain."""

    field: str
    bound: str  # "minimum" or "maximum"
    limit: int

    def __init__(self, field: str, bound: str, limit: int) -> None:
        self.field = field
        self.bound = bound
        self.limit = limit
        relation = "lower" if bound == "minimum" else "greater"
        super().__init__(f"{field} element is {relation} than {limit}")


class MalformedTextError(ICalValueError):
    """Text handed to a constructor is not in canonical form."""


class ICalTimezoneError(ICalError):
    """Civil time could not be resolved against a timezone."""
