"""
altcal.engines.international_fixed
----------------------------------
International Fixed (Cotsworth) calendar: thirteen months of four weeks,
every month starting on a Sunday, with the Gregorian leap rule.

Two days belong to no month and no week:
  * Year Day, the last day of every year, encoded (0, 0);
  * Leap Day, after June 28 in leap years (day-of-year 169), encoded (-1, -1).
Both report day-of-week 0 and 0 for the aligned week fields.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..core.errors import RangeError
from ..core.time import iso_leaps_through, trunc_div
from ..core.types import CalendarDate, Era, Period, ValueRange
from .base import YMD, CalendarSystem

DAYS_IN_WEEK = 7
WEEKS_IN_MONTH = 4
MONTHS_IN_YEAR = 13
DAYS_IN_MONTH = WEEKS_IN_MONTH * DAYS_IN_WEEK
DAYS_IN_YEAR = MONTHS_IN_YEAR * DAYS_IN_MONTH + 1
WEEKS_IN_YEAR = DAYS_IN_YEAR // DAYS_IN_WEEK
DAYS_PER_CYCLE = 146097
LEAP_DAY_AS_DAY_OF_YEAR = 6 * DAYS_IN_MONTH + 1

# days from year 0 day 0 to 1970-01-01
DAYS_0000_TO_1970 = DAYS_PER_CYCLE * 5 - (30 * 365 + 7)

YEAR_DAY = (0, 0)
LEAP_DAY = (-1, -1)


def is_year_day(d: CalendarDate) -> bool:
    return d.month == 0


def is_leap_day(d: CalendarDate) -> bool:
    return d.month == -1


def _is_special(d: CalendarDate) -> bool:
    return d.month < 1


class InternationalFixedCalendar(CalendarSystem):
    id = "international_fixed"
    family = "international_fixed"
    eras = (Era("international_fixed", "CE", 1),)
    months_per_year = MONTHS_IN_YEAR
    month_names = (
        "January", "February", "March", "April", "May", "June", "Sol", "July",
        "August", "September", "October", "November", "December",
    )

    year_range = ValueRange.of(1, 1_000_000)
    month_range = ValueRange.of(-1, 0, -1, MONTHS_IN_YEAR)
    day_of_month_range = ValueRange.of(-1, 0, -1, DAYS_IN_MONTH)
    day_of_year_range = ValueRange.of(1, DAYS_IN_YEAR, DAYS_IN_YEAR + 1)
    aligned_week_of_month_range = ValueRange.of(0, 1, 0, WEEKS_IN_MONTH)
    aligned_week_of_year_range = ValueRange.of(0, WEEKS_IN_YEAR)

    # ---------------------------------------------------------
    # Tables
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)

    def leap_years_before(self, year: int) -> int:
        return iso_leaps_through(year - 1)

    def month_length(self, year: int, month: int) -> int:
        return DAYS_IN_MONTH if month > 0 else 1

    def year_length(self, year: int) -> int:
        return DAYS_IN_YEAR + (1 if self.is_leap_year(year) else 0)

    def month_name(self, month: int) -> str:
        if month == 0:
            return "Year Day"
        if month == -1:
            return "Leap Day"
        return super().month_name(month)

    def _day_of_year(self, year: int, month: int, day: int) -> int:
        if month == -1:
            return LEAP_DAY_AS_DAY_OF_YEAR
        if month == 0:
            return self.year_length(year)
        return (month - 1) * DAYS_IN_MONTH + day + (1 if month > 6 and self.is_leap_year(year) else 0)

    def _adjusted_day_of_year(self, d: CalendarDate) -> int:
        """Day-of-year with Leap Day removed, so every week lines up."""
        day_of_year = self._day_of_year(d.year, d.month, d.day)
        return day_of_year - 1 if d.month > 6 and self.is_leap_year(d.year) else day_of_year

    def _month_day(self, year: int, day_of_year: int) -> Tuple[int, int]:
        leap = self.is_leap_year(year)
        if day_of_year == self.year_length(year):
            return YEAR_DAY
        if leap:
            if day_of_year == LEAP_DAY_AS_DAY_OF_YEAR:
                return LEAP_DAY
            if day_of_year > LEAP_DAY_AS_DAY_OF_YEAR:
                day_of_year -= 1
        return 1 + (day_of_year - 1) // DAYS_IN_MONTH, 1 + (day_of_year - 1) % DAYS_IN_MONTH

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        return (
            year * DAYS_IN_YEAR
            + self.leap_years_before(year)
            + self._day_of_year(year, month, day)
            - DAYS_0000_TO_1970
        )

    def _from_epoch_day(self, epoch_day: int) -> YMD:
        zero_day = epoch_day + DAYS_0000_TO_1970
        year = (400 * zero_day) // DAYS_PER_CYCLE
        day_of_year = zero_day - (DAYS_IN_YEAR * year + self.leap_years_before(year))
        # the estimate is at most one year off around the first and last day of a year
        if day_of_year < 1:
            year -= 1
            day_of_year += self.year_length(year)
        elif day_of_year > self.year_length(year):
            day_of_year -= self.year_length(year)
            year += 1
        return (year, *self._month_day(year, day_of_year))

    def _not_leap_message(self, year: int, day_of_year: int) -> str:
        return f"Invalid year/year day: {year}/{day_of_year}"

    def _check_date(self, year: int, month: int, day: int) -> None:
        self.month_range.check(month, "month_of_year")
        self.day_of_month_range.check(day, "day_of_month")
        if ((month < 1 or day < 1) and day != month) or (
            (month, day) == LEAP_DAY and not self.is_leap_year(year)
        ):
            raise RangeError(f"Invalid date: {year}/{month}/{day}", field="day_of_month", value=day)

    def _resolve_previous(self, year: int, month: int, day: int) -> YMD:
        if (month, day) == YEAR_DAY:
            return (year, *YEAR_DAY)
        if (month, day) == LEAP_DAY and self.is_leap_year(year):
            return (year, *LEAP_DAY)
        month_r = 7 if month == -1 else MONTHS_IN_YEAR if month == 0 else min(month, MONTHS_IN_YEAR)
        day_r = 1 if day == -1 else DAYS_IN_MONTH if day == 0 else min(day, DAYS_IN_MONTH)
        return year, month_r, day_r

    def year_day(self, year: int) -> CalendarDate:
        self.year_range.check(year, "year")
        return self._make(year, *YEAR_DAY)

    def leap_day(self, year: int) -> CalendarDate:
        self.year_range.check(year, "year")
        if not self.is_leap_year(year):
            raise RangeError(f"Invalid leap day for year: {year}", field="year", value=year)
        return self._make(year, *LEAP_DAY)

    # ---------------------------------------------------------
    # Fields
    # ---------------------------------------------------------

    def _calculated_month(self, d: CalendarDate) -> int:
        if d.month == 0:
            return MONTHS_IN_YEAR
        if d.month == -1:
            return 7
        return d.month

    def _calculated_day_of_month(self, d: CalendarDate) -> int:
        if d.month == 0:
            return DAYS_IN_MONTH + 1
        if d.month == -1:
            return 1
        return d.day

    def _day_of_week(self, d: CalendarDate) -> int:
        if _is_special(d):
            return 0
        # months start on Sunday (7)
        return 1 + (5 + self._adjusted_day_of_year(d)) % DAYS_IN_WEEK

    def _proleptic_month(self, year: int, month: int) -> int:
        calc_month = MONTHS_IN_YEAR if month == 0 else 7 if month == -1 else month
        return year * MONTHS_IN_YEAR + calc_month - 1

    def proleptic_week(self, d: CalendarDate) -> int:
        return (
            d.year * WEEKS_IN_YEAR
            + self._calculated_month(d) * WEEKS_IN_MONTH
            + (self._calculated_day_of_month(d) - 1) // DAYS_IN_WEEK
            - 1
        )

    def label(self, d: CalendarDate) -> str:
        if is_leap_day(d):
            return f"{self.id} CE {d.year} Leap Day"
        if is_year_day(d):
            return f"{self.id} CE {d.year} Year Day"
        return super().label(d)

    def get(self, d: CalendarDate, field: str) -> int:
        self._own(d)
        if field in (
            "aligned_day_of_week_in_month",
            "aligned_day_of_week_in_year",
            "aligned_week_of_month",
            "aligned_week_of_year",
        ):
            if _is_special(d):
                return 0
            adjusted = self._adjusted_day_of_year(d)
            if field == "aligned_day_of_week_in_month":
                return (d.day - 1) % DAYS_IN_WEEK + 1
            if field == "aligned_day_of_week_in_year":
                return (adjusted - 1) % DAYS_IN_WEEK + 1
            if field == "aligned_week_of_month":
                return (d.day - 1) // DAYS_IN_WEEK + 1
            return (adjusted - 1) // DAYS_IN_WEEK + 1
        return super().get(d, field)

    def chrono_range(self, field: str) -> ValueRange:
        if field == "day_of_week":
            return ValueRange.of(0, 1, 0, DAYS_IN_WEEK)
        if field in ("aligned_day_of_week_in_month", "aligned_day_of_week_in_year"):
            return ValueRange.of(0, DAYS_IN_WEEK)
        return super().chrono_range(field)

    def range(self, field: str, d: Optional[CalendarDate] = None) -> ValueRange:
        if d is None:
            return self.chrono_range(field)
        self._own(d)
        special = _is_special(d)
        empty = ValueRange.of(0, 0)
        if field in ("day_of_week", "aligned_day_of_week_in_month", "aligned_day_of_week_in_year"):
            return empty if special else ValueRange.of(1, DAYS_IN_WEEK)
        if field == "aligned_week_of_month":
            return empty if special else ValueRange.of(1, WEEKS_IN_MONTH)
        if field == "aligned_week_of_year":
            return empty if special else ValueRange.of(1, WEEKS_IN_YEAR)
        if field in ("day_of_month", "month_of_year"):
            if is_year_day(d):
                return empty
            if is_leap_day(d):
                return ValueRange.of(-1, -1)
            if field == "day_of_month":
                return ValueRange.of(1, DAYS_IN_MONTH)
            return ValueRange.of(-1 if self.is_leap_year(d.year) else 0, MONTHS_IN_YEAR)
        return super().range(field, d)

    def with_field(self, d: CalendarDate, field: str, value: int) -> CalendarDate:
        self._own(d)
        self.chrono_range(field).check(value, field)
        if field in ("day_of_month", "month_of_year"):
            if value == 0:
                return self.year_day(d.year)
            if value == -1:
                return self.leap_day(d.year)
            return super().with_field(d, field, value)

        week_fields = (
            "day_of_week",
            "aligned_day_of_week_in_month",
            "aligned_day_of_week_in_year",
            "aligned_week_of_month",
            "aligned_week_of_year",
        )
        if field not in week_fields:
            return super().with_field(d, field, value)
        if value == 0:
            return d
        if _is_special(d):
            # Year Day joins the last week of December, Leap Day the first week of Sol
            base = 21 if is_year_day(d) else 0
            return self.resolve_previous(d.year, d.month, base + value)

        self.range(field, d).check(value, field)
        if field == "day_of_week":
            week_start = ((d.day - 1) // DAYS_IN_WEEK) * DAYS_IN_WEEK + 1
            return self.date(d.year, d.month, week_start + value % DAYS_IN_WEEK)
        if field == "aligned_week_of_year":
            adjusted = (value - 1) * DAYS_IN_WEEK + (self._adjusted_day_of_year(d) - 1) % DAYS_IN_WEEK
            return self.date(d.year, 1 + adjusted // DAYS_IN_MONTH, 1 + adjusted % DAYS_IN_MONTH)
        if field == "aligned_week_of_month":
            return self.plus_days(d, (value - self.get(d, field)) * DAYS_IN_WEEK)
        return self.plus_days(d, value - self.get(d, field))

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def plus_weeks(self, d: CalendarDate, weeks: int) -> CalendarDate:
        if weeks == 0:
            return d
        if weeks % WEEKS_IN_MONTH == 0:
            return self.plus_months(d, weeks // WEEKS_IN_MONTH)
        if _is_special(d):
            return self.plus_days(d, DAYS_IN_WEEK * weeks)
        # count whole IFC weeks, so Year Day and Leap Day are skipped
        week = d.year * WEEKS_IN_YEAR + self.get(d, "aligned_week_of_year") - 1 + weeks
        year, week_of_year = divmod(week, WEEKS_IN_YEAR)
        month, week_of_month = divmod(week_of_year, WEEKS_IN_MONTH)
        return self.date(year, month + 1, week_of_month * DAYS_IN_WEEK + (d.day - 1) % DAYS_IN_WEEK + 1)

    def plus_months(self, d: CalendarDate, months: int) -> CalendarDate:
        if months == 0:
            return d
        if months % MONTHS_IN_YEAR == 0:
            return self.plus_years(d, months // MONTHS_IN_YEAR)
        day = DAYS_IN_MONTH if is_year_day(d) else self._calculated_day_of_month(d)
        calc = self.proleptic_month(d) + months
        return self.date(calc // MONTHS_IN_YEAR, 1 + calc % MONTHS_IN_YEAR, day)

    def weeks_until(self, start: CalendarDate, end: CalendarDate) -> int:
        return trunc_div(self._packed_week(end) - self._packed_week(start), 8)

    def _packed_week(self, d: CalendarDate) -> int:
        if _is_special(d):
            return self.proleptic_week(d) * 8 - 1
        return self.proleptic_week(d) * 8 + 1 + (d.day - 1) % DAYS_IN_WEEK

    def months_until(self, start: CalendarDate, end: CalendarDate) -> int:
        packed1 = self.proleptic_month(start) * 32 + self._calculated_day_of_month(start)
        packed2 = self.proleptic_month(end) * 32 + self._calculated_day_of_month(end)
        return trunc_div(packed2 - packed1, 32)

    def years_until(self, start: CalendarDate, end: CalendarDate) -> int:
        packed1 = start.year * 512 + self.day_of_year(start)
        packed2 = end.year * 512 + self.day_of_year(end)
        return trunc_div(packed2 - packed1, 512)

    def period_until(self, start: CalendarDate, end: CalendarDate) -> Period:
        self._own(start)
        self._own(end)
        return self._period_years_first(start, end)
