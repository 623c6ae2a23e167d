"""
altcal.engines.pax
------------------
Pax calendar: thirteen months of four weeks. Leap years insert a one-week
month "Columbus" as month 13, pushing the last month "Pax" to number 14.

Leap years are those whose last two digits are 99 or divisible by 6,
except years divisible by 400. The count runs symmetrically for negative
years, which is why the leap rule uses truncated remainders.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..core.errors import RangeError
from ..core.time import trunc_div, trunc_mod
from ..core.types import CalendarDate, Era, Period, ValueRange
from .base import YMD, CalendarSystem

DAYS_IN_WEEK = 7
DAYS_IN_MONTH = 28
MONTHS_IN_YEAR = 13
DAYS_IN_YEAR = MONTHS_IN_YEAR * DAYS_IN_MONTH

# days from Pax 0001-01-01 (as day 0) to 1970-01-01
PAX_0001_TO_ISO_1970 = 719163
DAYS_PER_LONG_CYCLE = DAYS_IN_YEAR * 400 + DAYS_IN_WEEK * 71
DAYS_PER_CYCLE = DAYS_IN_YEAR * 100 + DAYS_IN_WEEK * 18
DAYS_PER_SIX_CYCLE = DAYS_IN_YEAR * 6 + DAYS_IN_WEEK


def _leap_years_before(year: int) -> int:
    neg = year <= 0
    in_century = (year - 1) % 100
    return (
        18 * ((year - 1) // 100)
        - (year - 1) // 400
        + trunc_div(in_century - (99 if neg else 0), 99)
        + (1 if neg else 0)
        + (in_century + (2 if neg else 0)) // 6
    )


def _leap_months_before(proleptic_month: int) -> int:
    offset = proleptic_month - (13 if proleptic_month <= 0 else 12)
    neg = offset <= 0
    in_cycle = offset % 1318
    return (
        18 * (offset // 1318)
        - offset // 5272
        + trunc_div(in_cycle - (1317 if neg else 0), 1304)
        + (1 if neg else 0)
        + (in_cycle + (25 if neg else 0)) // 79
    )


class PaxCalendar(CalendarSystem):
    id = "pax"
    family = "pax"
    eras = (Era("pax", "BCE", 0), Era("pax", "CE", 1))
    months_per_year = MONTHS_IN_YEAR

    year_range = ValueRange.of(-999_998, 999_999)
    month_range = ValueRange.of(1, 13, 14)
    day_of_month_range = ValueRange.of(1, 7, 28)
    day_of_year_range = ValueRange.of(1, 364, 371)
    aligned_week_of_month_range = ValueRange.of(1, 1, 4)
    aligned_week_of_year_range = ValueRange.of(1, 52, 53)

    def is_leap_year(self, year: int) -> bool:
        last_two = trunc_mod(year, 100)
        return abs(last_two) == 99 or (
            trunc_mod(year, 400) != 0 and (last_two == 0 or trunc_mod(last_two, 6) == 0)
        )

    def leap_years_before(self, year: int) -> int:
        return _leap_years_before(year)

    def leap_months_before(self, proleptic_month: int) -> int:
        return _leap_months_before(proleptic_month)

    def months_in_year(self, year: int) -> int:
        return MONTHS_IN_YEAR + (1 if self.is_leap_year(year) else 0)

    def month_length(self, year: int, month: int) -> int:
        if month == 13 and self.is_leap_year(year):
            return DAYS_IN_WEEK
        return DAYS_IN_MONTH

    def year_length(self, year: int) -> int:
        return DAYS_IN_YEAR + (DAYS_IN_WEEK if self.is_leap_year(year) else 0)

    def _day_of_year(self, year: int, month: int, day: int) -> int:
        return (month - 1) * DAYS_IN_MONTH - (DAYS_IN_MONTH - DAYS_IN_WEEK if month == 14 else 0) + day

    def _month_day(self, year: int, day_of_year: int) -> Tuple[int, int]:
        month = (day_of_year - 1) // DAYS_IN_MONTH + 1
        if (
            self.is_leap_year(year)
            and month == MONTHS_IN_YEAR
            and day_of_year >= DAYS_IN_YEAR + DAYS_IN_WEEK - DAYS_IN_MONTH + 1
        ):
            month += 1
        day = day_of_year - (month - 1) * DAYS_IN_MONTH
        if month == 14:
            day += DAYS_IN_MONTH - DAYS_IN_WEEK
        return month, day

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        return (
            (year - 1) * DAYS_IN_YEAR
            + self.leap_years_before(year) * DAYS_IN_WEEK
            + self._day_of_year(year, month, day) - 1
            - PAX_0001_TO_ISO_1970
        )

    def _from_epoch_day(self, epoch_day: int) -> YMD:
        pax_day = epoch_day + PAX_0001_TO_ISO_1970
        long_cycle, rem = divmod(pax_day, DAYS_PER_LONG_CYCLE)
        cycle, day_of_cycle = divmod(rem, DAYS_PER_CYCLE)
        base_year = long_cycle * 400 + cycle * 100

        century_start = DAYS_PER_CYCLE - DAYS_IN_YEAR - DAYS_IN_WEEK
        if day_of_cycle >= century_start:
            return self._ymd(base_year + 100, day_of_cycle - century_start + 1)

        # for negative years the '99 and six-year runs go the other way
        if pax_day >= 0:
            ninety_nine_start = DAYS_PER_CYCLE - 2 * DAYS_IN_YEAR - 2 * DAYS_IN_WEEK
            if day_of_cycle >= ninety_nine_start:
                return self._ymd(base_year + 99, day_of_cycle - ninety_nine_start + 1)
            year, day_of_year = self._six_cycle(day_of_cycle)
            return self._ymd(base_year + year, day_of_year)

        if day_of_cycle < DAYS_IN_YEAR + DAYS_IN_WEEK:
            return self._ymd(base_year + 1, day_of_cycle + 1)
        year, day_of_year = self._six_cycle(day_of_cycle + 2 * DAYS_IN_YEAR - DAYS_IN_WEEK)
        return self._ymd(base_year - 2 + year, day_of_year)

    @staticmethod
    def _six_cycle(days: int) -> Tuple[int, int]:
        """(year within the run, day-of-year); the sixth year holds the leap week."""
        six_cycle, day_of_six = divmod(days, DAYS_PER_SIX_CYCLE)
        year = day_of_six // DAYS_IN_YEAR + 1
        day_of_year = day_of_six % DAYS_IN_YEAR + 1
        if year == 7:
            year -= 1
            day_of_year += DAYS_IN_YEAR
        return six_cycle * 6 + year, day_of_year

    def _ymd(self, year: int, day_of_year: int) -> YMD:
        return (year, *self._month_day(year, day_of_year))

    def _check_date(self, year: int, month: int, day: int) -> None:
        self.month_range.check(month, "month_of_year")
        self.day_of_month_range.check(day, "day_of_month")
        leap = self.is_leap_year(year)
        if month == 14 and not leap:
            raise RangeError(f"Invalid month 14 as {year} is not a leap year", field="month_of_year", value=month)
        if month == 13 and leap and day > DAYS_IN_WEEK:
            raise RangeError(f"Invalid date during Pax as {year} is a leap year", field="day_of_month", value=day)

    def _proleptic_month(self, year: int, month: int) -> int:
        return year * MONTHS_IN_YEAR + self.leap_years_before(year) + month - 1

    def range(self, field: str, d: Optional[CalendarDate] = None) -> ValueRange:
        if d is not None and field == "aligned_week_of_year":
            return ValueRange.of(1, 52 + (1 if self.is_leap(d) else 0))
        if d is not None and field == "month_of_year":
            return ValueRange.of(1, self.length_of_year_in_months(d))
        return super().range(field, d)

    def with_field(self, d: CalendarDate, field: str, value: int) -> CalendarDate:
        if field == "year":
            self.year_range.check(value, "year")
            return self.plus_years(d, value - self._own(d).year)
        return super().with_field(d, field, value)

    def plus_years(self, d: CalendarDate, years: int) -> CalendarDate:
        if years == 0:
            return d
        new_year = self.year_range.check(self._own(d).year + years, "year")
        # keep the real month when a leap month gets inserted before it
        if d.month == MONTHS_IN_YEAR and not self.is_leap_year(d.year) and self.is_leap_year(new_year):
            return self.date(new_year, 14, d.day)
        return self.resolve_previous(new_year, d.month, d.day)

    def plus_months(self, d: CalendarDate, months: int) -> CalendarDate:
        if months == 0:
            return d
        calc = self.proleptic_month(d) + months
        regularized = calc - self.leap_months_before(calc)
        new_year = regularized // MONTHS_IN_YEAR
        new_month = calc - self._proleptic_month(new_year, 1) + 1
        # the estimate can land a year off next to a Columbus month
        while new_month < 1:
            new_year -= 1
            new_month += self.months_in_year(new_year)
        while new_month > self.months_in_year(new_year):
            new_month -= self.months_in_year(new_year)
            new_year += 1
        return self.resolve_previous(new_year, new_month, d.day)

    def years_until(self, start: CalendarDate, end: CalendarDate) -> int:
        start_leap = self.is_leap_year(start.year)
        end_leap = self.is_leap_year(end.year)
        # simulate the inserted month when only the other year has it
        packed1 = start.year * 512 + self.day_of_year(start) + (
            DAYS_IN_WEEK if start.month == MONTHS_IN_YEAR and not start_leap and end_leap else 0
        )
        packed2 = end.year * 512 + self.day_of_year(end) + (
            DAYS_IN_WEEK if end.month == MONTHS_IN_YEAR and not end_leap and start_leap else 0
        )
        return trunc_div(packed2 - packed1, 512)

    def period_until(self, start: CalendarDate, end: CalendarDate) -> Period:
        self._own(start)
        self._own(end)
        return self._period_years_first(start, end)
