"""altcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    accounting_builder,
    calendar_info,
    convert,
    date,
    date_year_day,
    from_date,
    from_epoch_day,
    from_iso,
    get_calendar,
    is_leap_year,
    list_calendars,
    make_calendar,
    minus,
    period_until,
    plus,
    register_calendar,
    to_date,
    to_epoch_day,
    to_iso,
    until,
)
from .core.errors import (
    AltcalError,
    CalendarMismatchError,
    ConfigurationError,
    EraMismatchError,
    RangeError,
    UnsupportedFieldError,
)
from .core.types import CalendarDate, Era, Period, ValueRange
from .engines.accounting import AccountingCalendarBuilder, AccountingYearDivision

__all__ = [
    "accounting_builder",
    "calendar_info",
    "convert",
    "date",
    "date_year_day",
    "from_date",
    "from_epoch_day",
    "from_iso",
    "get_calendar",
    "is_leap_year",
    "list_calendars",
    "make_calendar",
    "minus",
    "period_until",
    "plus",
    "register_calendar",
    "to_date",
    "to_epoch_day",
    "to_iso",
    "until",
    "AltcalError",
    "CalendarMismatchError",
    "ConfigurationError",
    "EraMismatchError",
    "RangeError",
    "UnsupportedFieldError",
    "CalendarDate",
    "Era",
    "Period",
    "ValueRange",
    "AccountingCalendarBuilder",
    "AccountingYearDivision",
]
