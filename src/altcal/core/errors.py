from __future__ import annotations

from typing import Any, Optional


class AltcalError(Exception):
    """Base error."""


class RangeError(AltcalError, ValueError):
    """A year, month, day or epoch day is outside the calendar's valid range.

    >>> raise RangeError("Invalid value for month_of_year (valid values 1 - 13): 14",
    ...                  field="month_of_year", value=14)
    Traceback (most recent call last):
    ...
    altcal.core.errors.RangeError: Invalid value for month_of_year (valid values 1 - 13): 14
    """

    def __init__(self, message: str, *, field: Optional[str] = None, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class ConfigurationError(AltcalError, ValueError):
    """Raised when an accounting calendar (or any spec) is missing or contradicts settings."""


class EraMismatchError(AltcalError, TypeError):
    """Raised when an era belonging to another calendar is used."""


class CalendarMismatchError(AltcalError, ValueError):
    """Raised when a date of one calendar is handed to another calendar system."""


class UnsupportedFieldError(AltcalError, ValueError):
    """Raised for an unknown field or unit name."""
