"""
altcal.engines.julian
---------------------
Proleptic Julian calendar: ISO month lengths with a leap year every fourth
year and no century exception. Julian 0001-01-03 is ISO 0001-01-01.
"""

from __future__ import annotations

import calendar
from typing import Tuple

from ..core.errors import RangeError
from ..core.time import iso_day_of_year_at_start_of_month, iso_month_days
from ..core.types import Era, ValueRange
from .base import YMD, CalendarSystem

# days from Julian 0001-01-01 (as day 0) to 1970-01-01
DAYS_0001_TO_1970 = 719164
DAYS_PER_CYCLE = 1461


class JulianCalendar(CalendarSystem):
    id = "julian"
    family = "julian"
    calendar_type = "julian"
    eras = (Era("julian", "BC", 0), Era("julian", "AD", 1))
    month_names = tuple(calendar.month_name[1:])

    year_range = ValueRange.of(-999_998, 999_999)
    month_range = ValueRange.of(1, 12)
    day_of_month_range = ValueRange.of(1, 28, 31)
    day_of_year_range = ValueRange.of(1, 365, 366)
    aligned_week_of_month_range = ValueRange.of(1, 4, 5)
    aligned_week_of_year_range = ValueRange.of(1, 53)

    def is_leap_year(self, year: int) -> bool:
        return year % 4 == 0

    def leap_years_before(self, year: int) -> int:
        return (year - 1) // 4

    def month_length(self, year: int, month: int) -> int:
        return iso_month_days(month, self.is_leap_year(year))

    def year_length(self, year: int) -> int:
        return 366 if self.is_leap_year(year) else 365

    def _day_of_year(self, year: int, month: int, day: int) -> int:
        return iso_day_of_year_at_start_of_month(month, self.is_leap_year(year)) + day - 1

    def _month_day(self, year: int, day_of_year: int) -> Tuple[int, int]:
        leap = self.is_leap_year(year)
        month = (day_of_year - 1) // 31 + 1
        month_end = iso_day_of_year_at_start_of_month(month, leap) + iso_month_days(month, leap) - 1
        if day_of_year > month_end:
            month += 1
        return month, day_of_year - iso_day_of_year_at_start_of_month(month, leap) + 1

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        return (
            (year - 1) * 365
            + self.leap_years_before(year)
            + self._day_of_year(year, month, day) - 1
            - DAYS_0001_TO_1970
        )

    def _from_epoch_day(self, epoch_day: int) -> YMD:
        julian_day = epoch_day + DAYS_0001_TO_1970
        cycle, day_in_cycle = divmod(julian_day, DAYS_PER_CYCLE)
        if day_in_cycle == DAYS_PER_CYCLE - 1:
            year = cycle * 4 + 4
            day_of_year = 366
        else:
            year = cycle * 4 + day_in_cycle // 365 + 1
            day_of_year = day_in_cycle % 365 + 1
        return (year, *self._month_day(year, day_of_year))

    def _check_date(self, year: int, month: int, day: int) -> None:
        self.month_range.check(month, "month_of_year")
        self.day_of_month_range.check(day, "day_of_month")
        if day > self.month_length(year, month):
            if day == 29:
                raise RangeError(
                    f"Invalid date 'February 29' as '{year}' is not a leap year",
                    field="day_of_month", value=day,
                )
            raise RangeError(
                f"Invalid date '{calendar.month_name[month].upper()} {day}'",
                field="day_of_month", value=day,
            )
