"""
altcal.engines.accounting
-------------------------
Configurable fiscal ("accounting", 52/53-week) calendars.

A fiscal year always ends on the same weekday: either the last such weekday
of an ISO month, or the one nearest the end of that month (at most three
days into the next month). Years therefore hold 52 or 53 whole weeks, and
the extra week is attached to one configured month.

Everything is derived from the configuration in closed form. With
`limit(Y)` the ISO last day of the anchor month in ISO year `Y + offset`
(plus three days for "nearest") and `E0` the end of fiscal year 0:

    W(Y)   = floor((Y + I(Y) - I(0) + (limit(0) - E0)) / 7)
    End(Y) = E0 + 364 * Y + 7 * W(Y)

where I(Y) counts ISO leap days up to the anchor month. A year is leap
(53 weeks) exactly when W(Y) != W(Y - 1).
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from ..core.errors import ConfigurationError, RangeError
from ..core.time import (
    iso_leaps_through,
    iso_length_of_month,
    iso_to_epoch_day,
    previous_or_same,
)
from ..core.types import CalendarDate, Era, ValueRange
from .base import YMD, CalendarSystem

if TYPE_CHECKING:
    from .specs import AccountingSpec

log = logging.getLogger(__name__)

DAYS_IN_WEEK = 7
WEEKS_IN_YEAR = 52
DAYS_IN_YEAR = WEEKS_IN_YEAR * DAYS_IN_WEEK
DAYS_PER_CYCLE = 146097

WEEKDAY_NAMES = ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY")
MONTH_NAMES = (
    "JANUARY", "FEBRUARY", "MARCH", "APRIL", "MAY", "JUNE",
    "JULY", "AUGUST", "SEPTEMBER", "OCTOBER", "NOVEMBER", "DECEMBER",
)


class AccountingYearDivision(Enum):
    """How the 52 weeks of a fiscal year are split into months."""

    QUARTERS_OF_PATTERN_4_4_5_WEEKS = (4, 4, 5, 4, 4, 5, 4, 4, 5, 4, 4, 5)
    QUARTERS_OF_PATTERN_4_5_4_WEEKS = (4, 5, 4, 4, 5, 4, 4, 5, 4, 4, 5, 4)
    QUARTERS_OF_PATTERN_5_4_4_WEEKS = (5, 4, 4, 5, 4, 4, 5, 4, 4, 5, 4, 4)
    THIRTEEN_EVEN_MONTHS_OF_4_WEEKS = (4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4)

    @property
    def weeks_in_months(self) -> Tuple[int, ...]:
        return self.value

    @property
    def elapsed_weeks(self) -> Tuple[int, ...]:
        """Weeks before the start of each month, without a leap week."""
        out = [0]
        for weeks in self.value[:-1]:
            out.append(out[-1] + weeks)
        return tuple(out)

    @property
    def months_in_year_range(self) -> ValueRange:
        return ValueRange.of(1, len(self.value))

    def length_of_year_in_months(self) -> int:
        return len(self.value)

    def _check_leap_week_month(self, leap_week_in_month: int) -> int:
        if leap_week_in_month == 0:
            return 0
        return self.months_in_year_range.check(leap_week_in_month, "month_of_year")

    def get_weeks_in_month(self, month: int, leap_week_in_month: int = 0) -> int:
        month = self.months_in_year_range.check(month, "month_of_year")
        leap_week_in_month = self._check_leap_week_month(leap_week_in_month)
        return self.value[month - 1] + (1 if month == leap_week_in_month else 0)

    def get_weeks_at_start_of_month(self, month: int, leap_week_in_month: int = 0) -> int:
        month = self.months_in_year_range.check(month, "month_of_year")
        leap_week_in_month = self._check_leap_week_month(leap_week_in_month)
        shifted = leap_week_in_month != 0 and month > leap_week_in_month
        return self.elapsed_weeks[month - 1] + (1 if shifted else 0)

    def get_month_from_elapsed_weeks(self, weeks_elapsed: int, leap_week_in_month: int = 0) -> int:
        """Month holding the week that starts after `weeks_elapsed` whole weeks of the year."""
        limit = WEEKS_IN_YEAR + (0 if leap_week_in_month == 0 else 1)
        if weeks_elapsed < 0 or weeks_elapsed >= limit:
            raise RangeError(
                f"Count of '{weeks_elapsed}' elapsed weeks not valid, should be in the range [0, {limit})",
                field="aligned_week_of_year", value=weeks_elapsed,
            )
        leap_week_in_month = self._check_leap_week_month(leap_week_in_month)
        elapsed = self.elapsed_weeks
        month = bisect_right(elapsed, weeks_elapsed)
        # the first week of a month after the leap week is the leap week itself
        if leap_week_in_month and month > leap_week_in_month and weeks_elapsed == elapsed[month - 1]:
            return month - 1
        return month


def _lookup(value: Union[int, str, None], names: Tuple[str, ...]) -> Optional[int]:
    """Accept a 1-based number or an English name (any case)."""
    if value is None or isinstance(value, int):
        return value
    key = value.strip().upper()
    for i, name in enumerate(names):
        if name == key or name[:3] == key:
            return i + 1
    raise ConfigurationError(f"Unknown name {value!r}, expected one of {list(names)}")


class AccountingCalendar(CalendarSystem):
    """A fiscal calendar frozen from an AccountingSpec."""

    family = "accounting"
    eras = (Era("accounting", "BCE", 0), Era("accounting", "CE", 1))

    year_range = ValueRange.of(-999_999, 999_999)
    day_of_year_range = ValueRange.of(1, DAYS_IN_YEAR, DAYS_IN_YEAR + DAYS_IN_WEEK)
    aligned_week_of_year_range = ValueRange.of(1, WEEKS_IN_YEAR, WEEKS_IN_YEAR + 1)

    def __init__(self, spec: "AccountingSpec") -> None:
        self.spec = spec
        self.id = spec.calendar_id
        self.division = spec.division
        self.leap_week_in_month = spec.leap_week_in_month
        self.months_per_year = spec.division.length_of_year_in_months()

        longest = max(
            spec.division.get_weeks_in_month(m, spec.leap_week_in_month)
            for m in range(1, self.months_per_year + 1)
        )
        self.month_range = ValueRange.of(1, self.months_per_year)
        self.day_of_month_range = ValueRange.of(1, 4 * DAYS_IN_WEEK, longest * DAYS_IN_WEEK)
        self.aligned_week_of_month_range = ValueRange.of(1, 4, longest)

        self._leap_day_shift = 1 if spec.end == 1 else 0
        limit = iso_to_epoch_day(spec.year_offset, spec.end, iso_length_of_month(spec.year_offset, spec.end))
        if not spec.in_last_week:
            limit += 3
        self.year_zero_end = previous_or_same(limit, spec.ends_on)
        self._year_zero_shift = limit - self.year_zero_end
        self._leaps_at_zero = self._iso_leaps(0)

    def _iso_leaps(self, year: int) -> int:
        return iso_leaps_through(year + self.spec.year_offset - self._leap_day_shift)

    def _weeks_gained(self, year: int) -> int:
        # whole extra weeks accumulated by the end of `year` relative to year 0
        return (year + self._iso_leaps(year) - self._leaps_at_zero + self._year_zero_shift) // DAYS_IN_WEEK

    def year_end(self, year: int) -> int:
        """Epoch day of the last day of fiscal `year`."""
        return self.year_zero_end + DAYS_IN_YEAR * year + DAYS_IN_WEEK * self._weeks_gained(year)

    def is_leap_year(self, year: int) -> bool:
        return self._weeks_gained(year) != self._weeks_gained(year - 1)

    def leap_years_before(self, year: int) -> int:
        return self._weeks_gained(year - 1)

    # alias kept for the fiscal vocabulary
    previous_leap_years = leap_years_before

    def _leap_month(self, year: int) -> int:
        return self.leap_week_in_month if self.is_leap_year(year) else 0

    def month_length(self, year: int, month: int) -> int:
        return self.division.get_weeks_in_month(month, self._leap_month(year)) * DAYS_IN_WEEK

    def year_length(self, year: int) -> int:
        return DAYS_IN_YEAR + (DAYS_IN_WEEK if self.is_leap_year(year) else 0)

    def _day_of_year(self, year: int, month: int, day: int) -> int:
        return self.division.get_weeks_at_start_of_month(month, self._leap_month(year)) * DAYS_IN_WEEK + day

    def _month_day(self, year: int, day_of_year: int) -> Tuple[int, int]:
        leap_month = self._leap_month(year)
        month = self.division.get_month_from_elapsed_weeks((day_of_year - 1) // DAYS_IN_WEEK, leap_month)
        start = self.division.get_weeks_at_start_of_month(month, leap_month) * DAYS_IN_WEEK
        return month, day_of_year - start

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        return self.year_end(year - 1) + self._day_of_year(year, month, day)

    def _from_epoch_day(self, epoch_day: int) -> YMD:
        year = ((epoch_day - self.year_zero_end - 1) * 400) // DAYS_PER_CYCLE + 1
        # the estimate is off by at most one year in either direction
        if epoch_day > self.year_end(year):
            year += 1
        elif epoch_day <= self.year_end(year - 1):
            year -= 1
        return (year, *self._month_day(year, epoch_day - self.year_end(year - 1)))

    def _check_date(self, year: int, month: int, day: int) -> None:
        self.month_range.check(month, "month_of_year")
        self.day_of_month_range.check(day, "day_of_month")
        if day > self.month_length(year, month):
            raise RangeError(f"Invalid date: {year}/{month}/{day}", field="day_of_month", value=day)

    def range(self, field: str, d: Optional[CalendarDate] = None) -> ValueRange:
        if d is not None and field == "aligned_week_of_year":
            return ValueRange.of(1, WEEKS_IN_YEAR + (1 if self.is_leap(d) else 0))
        return super().range(field, d)

    def info(self):
        out = super().info()
        out.update(self.spec.describe())
        out["year_zero_end"] = self.year_zero_end
        return out

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AccountingCalendar) and other.spec == self.spec

    def __hash__(self) -> int:
        return hash(self.spec)


class AccountingCalendarBuilder:
    """
    Mutable, single-use collector of the fiscal configuration.

        cal = (AccountingCalendarBuilder()
               .ends_on("SUNDAY").nearest_end_of("AUGUST")
               .with_division(AccountingYearDivision.THIRTEEN_EVEN_MONTHS_OF_4_WEEKS)
               .leap_week_in_month(13)
               .to_calendar())

    `nearest_end_of` and `in_last_week_of` share one setting; the last call wins.
    """

    def __init__(self) -> None:
        self._ends_on: Optional[int] = None
        self._end: Optional[int] = None
        self._in_last_week = False
        self._division: Optional[AccountingYearDivision] = None
        self._leap_week_in_month = 0
        self._year_offset = 0

    def ends_on(self, weekday: Union[int, str]) -> "AccountingCalendarBuilder":
        self._ends_on = _lookup(weekday, WEEKDAY_NAMES)
        return self

    def nearest_end_of(self, month: Union[int, str]) -> "AccountingCalendarBuilder":
        self._in_last_week = False
        self._end = _lookup(month, MONTH_NAMES)
        return self

    def in_last_week_of(self, month: Union[int, str]) -> "AccountingCalendarBuilder":
        self._in_last_week = True
        self._end = _lookup(month, MONTH_NAMES)
        return self

    def with_division(self, division: Union[AccountingYearDivision, str]) -> "AccountingCalendarBuilder":
        if isinstance(division, str):
            try:
                division = AccountingYearDivision[division.upper()]
            except KeyError:
                raise ConfigurationError(
                    f"Unknown division {division!r}, expected one of {[d.name for d in AccountingYearDivision]}"
                ) from None
        self._division = division
        return self

    def leap_week_in_month(self, month: int) -> "AccountingCalendarBuilder":
        self._leap_week_in_month = month
        return self

    def accounting_year_ends_in_iso_year(self) -> "AccountingCalendarBuilder":
        self._year_offset = 0
        return self

    def accounting_year_starts_in_iso_year(self) -> "AccountingCalendarBuilder":
        self._year_offset = 1
        return self

    def to_spec(self) -> "AccountingSpec":
        from .specs import AccountingSpec

        if self._ends_on is None:
            raise ConfigurationError("Accounting calendar needs ends_on() to be set")
        if self._end is None:
            raise ConfigurationError("Accounting calendar needs nearest_end_of() or in_last_week_of() to be set")
        if self._division is None:
            raise ConfigurationError("Accounting calendar needs with_division() to be set")
        return AccountingSpec(
            ends_on=self._ends_on,
            end=self._end,
            in_last_week=self._in_last_week,
            division=self._division,
            leap_week_in_month=self._leap_week_in_month,
            year_offset=self._year_offset,
        )

    def to_calendar(self) -> AccountingCalendar:
        cal = AccountingCalendar(self.to_spec())
        log.debug("built %s (year 0 ends on epoch day %d)", cal.id, cal.year_zero_end)
        return cal

    to_chronology = to_calendar
