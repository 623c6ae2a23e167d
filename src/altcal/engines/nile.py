"""
altcal.engines.nile
-------------------
The Nile-valley calendars: twelve 30-day months followed by a short
thirteenth month of 5 days (6 in a leap year). Coptic and Ethiopic differ
only in their epoch and era names; the French Republican calendar reuses
the same table (see french_republic.py).

Leap years are the years with `year mod 4 == 3`.
"""

from __future__ import annotations

from typing import Tuple

from ..core.errors import RangeError
from ..core.types import CalendarDate, Era, ValueRange
from .base import YMD, CalendarSystem


class NileCalendar(CalendarSystem):
    months_per_year = 13

    # days between the calendar's year 1 day 1 and 1970-01-01
    epoch_offset: int = 0
    # name of month 13 used in error messages
    intercalary_name: str = "Nasi"

    year_range = ValueRange.of(-999_998, 999_999)
    month_range = ValueRange.of(1, 13)
    day_of_month_range = ValueRange.of(1, 5, 30)
    day_of_year_range = ValueRange.of(1, 365, 366)
    aligned_week_of_month_range = ValueRange.of(1, 1, 5)
    aligned_week_of_year_range = ValueRange.of(1, 53)

    def is_leap_year(self, year: int) -> bool:
        return year % 4 == 3

    def leap_years_before(self, year: int) -> int:
        return year // 4

    def month_length(self, year: int, month: int) -> int:
        if month == 13:
            return 6 if self.is_leap_year(year) else 5
        return 30

    def year_length(self, year: int) -> int:
        return 366 if self.is_leap_year(year) else 365

    def _day_of_year(self, year: int, month: int, day: int) -> int:
        return (month - 1) * 30 + day

    def _month_day(self, year: int, day_of_year: int) -> Tuple[int, int]:
        return (day_of_year - 1) // 30 + 1, (day_of_year - 1) % 30 + 1

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        return (
            (year - 1) * 365
            + self.leap_years_before(year)
            + self._day_of_year(year, month, day) - 1
            - self.epoch_offset
        )

    def _from_epoch_day(self, epoch_day: int) -> YMD:
        cal_day = epoch_day + self.epoch_offset
        year = (4 * cal_day + 1463) // 1461
        start = (year - 1) * 365 + year // 4
        doy0 = cal_day - start
        return year, doy0 // 30 + 1, doy0 % 30 + 1

    def _check_date(self, year: int, month: int, day: int) -> None:
        self.month_range.check(month, "month_of_year")
        ValueRange.of(1, 30).check(day, "day_of_month")
        if month == 13 and day > 5:
            if day > 6:
                raise RangeError(
                    f"Invalid date '{self.intercalary_name} {day}', valid range from 1 to 5, "
                    f"or 1 to 6 in a leap year",
                    field="day_of_month", value=day,
                )
            if not self.is_leap_year(year):
                raise RangeError(
                    f"Invalid date '{self.intercalary_name} 6' as '{year}' is not a leap year",
                    field="day_of_month", value=day,
                )

    def _with_day_of_year(self, d: CalendarDate, value: int) -> CalendarDate:
        return self.resolve_previous(d.year, (value - 1) // 30 + 1, (value - 1) % 30 + 1)


class CopticCalendar(NileCalendar):
    id = "coptic"
    family = "coptic"
    calendar_type = "coptic"
    epoch_offset = 615558       # year 1 = ISO 0284-08-29
    intercalary_name = "Nasi"
    eras = (Era("coptic", "BEFORE_AM", 0), Era("coptic", "AM", 1))
    month_names = (
        "Thout", "Paopi", "Hathor", "Koiak", "Tobi", "Meshir", "Paremhat",
        "Parmouti", "Pashons", "Paoni", "Epip", "Mesori", "Nasi",
    )


class EthiopicCalendar(NileCalendar):
    id = "ethiopic"
    family = "ethiopic"
    calendar_type = "ethiopic"
    epoch_offset = 716367       # year 1 = ISO 0008-08-27
    intercalary_name = "Pagumen"
    eras = (Era("ethiopic", "BEFORE_INCARNATION", 0), Era("ethiopic", "INCARNATION", 1))
    month_names = (
        "Meskerem", "Tikimt", "Hidar", "Tahsas", "Tir", "Yekatit", "Megabit",
        "Miazia", "Genbot", "Sene", "Hamle", "Nehasse", "Pagumen",
    )
