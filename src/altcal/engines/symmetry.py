"""
altcal.engines.symmetry
-----------------------
Symmetry010 and Symmetry454: perennial calendars of 364 days (52 whole
weeks) with a leap week appended to December in 52 of every 293 years.

Each quarter holds 91 days. Symmetry010 splits it 30 + 31 + 30 days,
Symmetry454 splits it 4 + 5 + 4 weeks (28 + 35 + 28 days). The leap week
makes December 37 days (Symmetry010) or 35 days (Symmetry454) long.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..core.errors import RangeError
from ..core.time import trunc_div
from ..core.types import CalendarDate, Era, Period, ValueRange
from .base import YMD, CalendarSystem

DAYS_IN_WEEK = 7
MONTHS_IN_YEAR = 12
DAYS_IN_QUARTER = 91
DAYS_IN_YEAR = 4 * DAYS_IN_QUARTER
DAYS_IN_YEAR_LONG = DAYS_IN_YEAR + DAYS_IN_WEEK
WEEKS_IN_YEAR = DAYS_IN_YEAR // DAYS_IN_WEEK
YEARS_IN_CYCLE = 293
DAYS_PER_CYCLE = YEARS_IN_CYCLE * DAYS_IN_YEAR + WEEKS_IN_YEAR * DAYS_IN_WEEK

# days from 0001-01-01 (as day 0) to 1970-01-01
DAYS_0001_TO_1970 = 146097 * 5 - (31 * 365 + 7) - 1

ISO_ERAS = (Era("iso", "BCE", 0), Era("iso", "CE", 1))


class SymmetryCalendar(CalendarSystem):
    family = "iso"
    eras = ISO_ERAS
    months_per_year = MONTHS_IN_YEAR

    year_range = ValueRange.of(-1_000_000, 1_000_000)
    month_range = ValueRange.of(1, MONTHS_IN_YEAR)
    day_of_year_range = ValueRange.of(1, DAYS_IN_YEAR, DAYS_IN_YEAR_LONG)
    aligned_week_of_year_range = ValueRange.of(1, WEEKS_IN_YEAR, WEEKS_IN_YEAR + 1)

    # ordinary month length and the long (middle of quarter) month length
    short_month: int
    long_month: int

    def is_leap_year(self, year: int) -> bool:
        return (WEEKS_IN_YEAR * year + 146) % YEARS_IN_CYCLE < WEEKS_IN_YEAR

    def leap_years_before(self, year: int) -> int:
        return (WEEKS_IN_YEAR * (year - 1) + 146) // YEARS_IN_CYCLE

    def year_length(self, year: int) -> int:
        return DAYS_IN_YEAR_LONG if self.is_leap_year(year) else DAYS_IN_YEAR

    def _day_of_week(self, d: CalendarDate) -> int:
        # every year starts on a Monday and holds whole weeks
        return (self._day_of_year(d.year, d.month, d.day) - 1) % DAYS_IN_WEEK + 1

    def _month_day(self, year: int, day_of_year: int) -> Tuple[int, int]:
        quarter = (min(day_of_year, DAYS_IN_YEAR) - 1) // DAYS_IN_QUARTER
        day = day_of_year - quarter * DAYS_IN_QUARTER
        month = 1 + quarter * 3
        if day > self.short_month + self.long_month:
            month += 2
            day -= self.short_month + self.long_month
        elif day > self.short_month:
            month += 1
            day -= self.short_month
        return month, day

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        return (
            (year - 1) * DAYS_IN_YEAR
            + self.leap_years_before(year) * DAYS_IN_WEEK
            + self._day_of_year(year, month, day)
            - DAYS_0001_TO_1970 - 1
        )

    def _from_epoch_day(self, epoch_day: int) -> YMD:
        zero_day = epoch_day + DAYS_0001_TO_1970 + 1
        year = 1 + (YEARS_IN_CYCLE * zero_day) // DAYS_PER_CYCLE
        day_of_year = zero_day - (DAYS_IN_YEAR * (year - 1) + self.leap_years_before(year) * DAYS_IN_WEEK)
        if day_of_year < 1:
            year -= 1
            day_of_year += self.year_length(year)
        elif day_of_year > self.year_length(year):
            day_of_year -= self.year_length(year)
            year += 1
        return (year, *self._month_day(year, day_of_year))

    def _check_date(self, year: int, month: int, day: int) -> None:
        self.month_range.check(month, "month_of_year")
        self.day_of_month_range.check(day, "day_of_month")
        if day > self.month_length(year, month):
            if month == MONTHS_IN_YEAR and not self.is_leap_year(year):
                raise RangeError(f"Invalid Leap Day as '{year}' is not a leap year", field="day_of_month", value=day)
            raise RangeError(f"Invalid date: {year}/{month}/{day}", field="day_of_month", value=day)

    def is_leap_week(self, d: CalendarDate) -> bool:
        """True for the seven days appended to December in a leap year."""
        return self.is_leap(d) and self.day_of_year(d) > DAYS_IN_YEAR

    def proleptic_week(self, d: CalendarDate) -> int:
        return (
            d.year * WEEKS_IN_YEAR
            + self.leap_years_before(d.year)
            + (self._day_of_year(d.year, d.month, d.day) - 1) // DAYS_IN_WEEK
            - 1
        )

    def range(self, field: str, d: Optional[CalendarDate] = None) -> ValueRange:
        if d is not None and field == "aligned_week_of_year":
            return ValueRange.of(1, WEEKS_IN_YEAR + (1 if self.is_leap(d) else 0))
        return super().range(field, d)

    def with_field(self, d: CalendarDate, field: str, value: int) -> CalendarDate:
        if field == "day_of_month":
            self._own(d)
            self.chrono_range(field).check(value, field)
            return self.date(d.year, d.month, value)
        return super().with_field(d, field, value)

    def _with_day_of_year(self, d: CalendarDate, value: int) -> CalendarDate:
        return self.date_year_day(d.year, value)

    def years_until(self, start: CalendarDate, end: CalendarDate) -> int:
        packed1 = start.year * 512 + self.day_of_year(start)
        packed2 = end.year * 512 + self.day_of_year(end)
        return trunc_div(packed2 - packed1, 512)

    def months_until(self, start: CalendarDate, end: CalendarDate) -> int:
        packed1 = self.proleptic_month(start) * 64 + start.day
        packed2 = self.proleptic_month(end) * 64 + end.day
        return trunc_div(packed2 - packed1, 64)

    def weeks_until(self, start: CalendarDate, end: CalendarDate) -> int:
        packed1 = self.proleptic_week(start) * 8 + self.day_of_week(start)
        packed2 = self.proleptic_week(end) * 8 + self.day_of_week(end)
        return trunc_div(packed2 - packed1, 8)

    def period_until(self, start: CalendarDate, end: CalendarDate) -> Period:
        self._own(start)
        self._own(end)
        return self._period_years_first(start, end)


class Symmetry010Calendar(SymmetryCalendar):
    id = "symmetry010"
    short_month = 30
    long_month = 31

    day_of_month_range = ValueRange.of(1, 30, 37)
    aligned_week_of_month_range = ValueRange.of(1, 4, 6)

    def month_length(self, year: int, month: int) -> int:
        if month == MONTHS_IN_YEAR and self.is_leap_year(year):
            return self.short_month + DAYS_IN_WEEK
        return self.long_month if month % 3 == 2 else self.short_month

    def _day_of_year(self, year: int, month: int, day: int) -> int:
        return 30 * (month - 1) + month // 3 + day

    def with_field(self, d: CalendarDate, field: str, value: int) -> CalendarDate:
        if field == "day_of_week":
            self._own(d)
            self.chrono_range(field).check(value, field)
            week = (self._day_of_year(d.year, d.month, d.day) - 1) // DAYS_IN_WEEK
            return self.date_year_day(d.year, DAYS_IN_WEEK * week + value)
        return super().with_field(d, field, value)


class Symmetry454Calendar(SymmetryCalendar):
    id = "symmetry454"
    short_month = 28
    long_month = 35

    day_of_month_range = ValueRange.of(1, 28, 35)
    aligned_week_of_month_range = ValueRange.of(1, 4, 5)

    def month_length(self, year: int, month: int) -> int:
        if month % 3 == 2 or (month == MONTHS_IN_YEAR and self.is_leap_year(year)):
            return self.long_month
        return self.short_month

    def _day_of_year(self, year: int, month: int, day: int) -> int:
        return 28 * (month - 1) + DAYS_IN_WEEK * (month // 3) + day

    def with_field(self, d: CalendarDate, field: str, value: int) -> CalendarDate:
        # every month is whole weeks, so weekday moves stay inside the month
        if field in ("day_of_week", "aligned_day_of_week_in_month", "aligned_day_of_week_in_year"):
            self._own(d)
            self.range(field, d).check(value, field)
            week_start = ((d.day - 1) // DAYS_IN_WEEK) * DAYS_IN_WEEK
            return self.resolve_previous(d.year, d.month, week_start + value)
        if field == "aligned_week_of_month":
            self._own(d)
            self.range(field, d).check(value, field)
            return self.resolve_previous(d.year, d.month, (value - 1) * DAYS_IN_WEEK + (d.day - 1) % DAYS_IN_WEEK + 1)
        return super().with_field(d, field, value)
