"""
altcal.engines.discordian
-------------------------
Discordian calendar: five seasons of 73 days and a five-day week, with
years counted from 1166 BC (YOLD 1166 = ISO year 0). Leap years are the
Gregorian ones; they insert St. Tib's Day between Chaos 59 and Chaos 60.

St. Tib's Day belongs to no season and no week. It is encoded as
(month=0, day=0), has day-of-year 60, and reports 0 for day-of-week and the
aligned fields. For month and week arithmetic it counts as part of the first
season and the twelfth week.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..core.errors import RangeError
from ..core.time import iso_leaps_through, trunc_div, trunc_mod
from ..core.types import CalendarDate, Era, Period, ValueRange
from .base import YMD, CalendarSystem

OFFSET_FROM_ISO_0000 = 1166
DAYS_IN_MONTH = 73
DAYS_IN_WEEK = 5
MONTHS_IN_YEAR = 5
WEEKS_IN_YEAR = 73
ST_TIBS_OFFSET = 60
ST_TIBS_WEEK = ST_TIBS_OFFSET // DAYS_IN_WEEK

# days from YOLD 1167-01-01 (as day 0) to 1970-01-01
DISCORDIAN_1167_TO_ISO_1970 = 719162
DAYS_PER_SHORT_CYCLE = 365 * 4 + 1
DAYS_PER_CYCLE = DAYS_PER_SHORT_CYCLE * 25 - 1
DAYS_PER_LONG_CYCLE = DAYS_PER_CYCLE * 4 + 1

_WEEK_FIELDS = (
    "day_of_week",
    "aligned_day_of_week_in_month",
    "aligned_day_of_week_in_year",
    "aligned_week_of_month",
    "aligned_week_of_year",
    "day_of_month",
    "month_of_year",
)


def is_st_tibs_day(d: CalendarDate) -> bool:
    return d.month == 0


class DiscordianCalendar(CalendarSystem):
    id = "discordian"
    family = "discordian"
    eras = (Era("discordian", "YOLD", 1),)
    week_length = DAYS_IN_WEEK
    months_per_year = MONTHS_IN_YEAR
    month_names = ("Chaos", "Discord", "Confusion", "Bureaucracy", "The Aftermath")

    year_range = ValueRange.of(1, 999_999)
    month_range = ValueRange.of(0, 1, MONTHS_IN_YEAR, MONTHS_IN_YEAR)
    day_of_month_range = ValueRange.of(0, 1, 0, DAYS_IN_MONTH)
    day_of_year_range = ValueRange.of(1, 365, 366)
    aligned_week_of_month_range = ValueRange.of(0, 1, 0, 15)
    aligned_week_of_year_range = ValueRange.of(0, 1, WEEKS_IN_YEAR, WEEKS_IN_YEAR)

    # ---------------------------------------------------------
    # Tables
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        iso_year = year - OFFSET_FROM_ISO_0000
        return iso_year % 4 == 0 and (iso_year % 100 != 0 or iso_year % 400 == 0)

    def leap_years_before(self, year: int) -> int:
        return iso_leaps_through(year - OFFSET_FROM_ISO_0000 - 1)

    def month_length(self, year: int, month: int) -> int:
        return 1 if month == 0 else DAYS_IN_MONTH

    def year_length(self, year: int) -> int:
        return 366 if self.is_leap_year(year) else 365

    def month_name(self, month: int) -> str:
        return "St. Tib's Day" if month == 0 else super().month_name(month)

    def _day_of_year(self, year: int, month: int, day: int) -> int:
        if month == 0:
            return ST_TIBS_OFFSET
        day_of_year = (month - 1) * DAYS_IN_MONTH + day
        if day_of_year >= ST_TIBS_OFFSET and self.is_leap_year(year):
            day_of_year += 1
        return day_of_year

    def _month_day(self, year: int, day_of_year: int) -> Tuple[int, int]:
        if self.is_leap_year(year):
            if day_of_year == ST_TIBS_OFFSET:
                return 0, 0
            if day_of_year > ST_TIBS_OFFSET:
                day_of_year -= 1
        return (day_of_year - 1) // DAYS_IN_MONTH + 1, (day_of_year - 1) % DAYS_IN_MONTH + 1

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        return (
            (year - OFFSET_FROM_ISO_0000 - 1) * 365
            + self.leap_years_before(year)
            + self._day_of_year(year, month, day) - 1
            - DISCORDIAN_1167_TO_ISO_1970
        )

    def _from_epoch_day(self, epoch_day: int) -> YMD:
        long_cycle, day_in_long = divmod(epoch_day + DISCORDIAN_1167_TO_ISO_1970, DAYS_PER_LONG_CYCLE)
        if day_in_long == DAYS_PER_LONG_CYCLE - 1:
            year = long_cycle * 400 + 400 + OFFSET_FROM_ISO_0000
            return (year, *self._month_day(year, 366))
        cycle, day_in_cycle = divmod(day_in_long, DAYS_PER_CYCLE)
        short_cycle, day_in_short = divmod(day_in_cycle, DAYS_PER_SHORT_CYCLE)
        year = long_cycle * 400 + cycle * 100 + short_cycle * 4 + OFFSET_FROM_ISO_0000
        if day_in_short == DAYS_PER_SHORT_CYCLE - 1:
            year += 4
            return (year, *self._month_day(year, 366))
        year += day_in_short // 365 + 1
        return (year, *self._month_day(year, day_in_short % 365 + 1))

    def _check_date(self, year: int, month: int, day: int) -> None:
        self.month_range.check(month, "month_of_year")
        self.day_of_month_range.check(day, "day_of_month")
        if month == 0 or day == 0:
            if month != 0 or day != 0:
                raise RangeError(
                    f"Invalid date '{month} {day}' as St. Tib's Day is the only special day "
                    f"inserted in a non-existent month.",
                    field="day_of_month", value=day,
                )
            if not self.is_leap_year(year):
                raise RangeError(
                    f"Invalid date 'St. Tibs Day' as '{year}' is not a leap year",
                    field="day_of_month", value=day,
                )

    def _resolve_previous(self, year: int, month: int, day: int) -> YMD:
        if month == 0:
            if self.is_leap_year(year):
                return year, 0, 0
            month, day = 1, 0
        if day == 0:
            day = ST_TIBS_OFFSET
        return year, month, day

    # ---------------------------------------------------------
    # Fields
    # ---------------------------------------------------------

    def _day_of_week(self, d: CalendarDate) -> int:
        if d.month == 0:
            return 0
        return (self._day_of_year_without_st_tibs(d) - 1) % DAYS_IN_WEEK + 1

    def _day_of_year_without_st_tibs(self, d: CalendarDate) -> int:
        day_of_year = self._day_of_year(d.year, d.month, d.day)
        if day_of_year >= ST_TIBS_OFFSET and self.is_leap_year(d.year):
            day_of_year -= 1
        return day_of_year

    def _proleptic_month(self, year: int, month: int) -> int:
        return year * MONTHS_IN_YEAR + (1 if month == 0 else month) - 1

    def proleptic_week(self, d: CalendarDate) -> int:
        week = ST_TIBS_WEEK if d.month == 0 else self.get(d, "aligned_week_of_year")
        return d.year * WEEKS_IN_YEAR + week - 1

    def label(self, d: CalendarDate) -> str:
        if d.month == 0:
            return f"{self.id} YOLD {d.year} St. Tib's Day"
        return f"{self.id} YOLD {d.year}-{d.month}-{d.day:02d}"

    def get(self, d: CalendarDate, field: str) -> int:
        self._own(d)
        if field in ("aligned_day_of_week_in_month", "aligned_week_of_month"):
            return 0 if d.month == 0 else super().get(d, field)
        if field == "aligned_day_of_week_in_year":
            return self._day_of_week(d)
        if field == "aligned_week_of_year":
            if d.month == 0:
                return 0
            return (self._day_of_year_without_st_tibs(d) - 1) // DAYS_IN_WEEK + 1
        return super().get(d, field)

    def chrono_range(self, field: str) -> ValueRange:
        if field in ("day_of_week", "aligned_day_of_week_in_month"):
            return ValueRange.of(0, 1, 0, DAYS_IN_WEEK)
        if field == "aligned_day_of_week_in_year":
            return ValueRange.of(0, 1, DAYS_IN_WEEK, DAYS_IN_WEEK)
        return super().chrono_range(field)

    def range(self, field: str, d: Optional[CalendarDate] = None) -> ValueRange:
        if d is None:
            return self.chrono_range(field)
        self._own(d)
        st_tibs = d.month == 0
        leap = self.is_leap_year(d.year)
        if field in ("aligned_day_of_week_in_month", "day_of_week"):
            return ValueRange.of(0, 0) if st_tibs else ValueRange.of(1, DAYS_IN_WEEK)
        if field == "aligned_day_of_week_in_year":
            return ValueRange.of(0 if leap else 1, DAYS_IN_WEEK)
        if field == "aligned_week_of_year":
            return ValueRange.of(0 if leap else 1, WEEKS_IN_YEAR)
        if field == "day_of_month":
            return ValueRange.of(0, 0) if st_tibs else ValueRange.of(1, DAYS_IN_MONTH)
        if field == "month_of_year":
            return ValueRange.of(0 if leap else 1, MONTHS_IN_YEAR)
        return super().range(field, d)

    def _range_aligned_week_of_month(self, d: CalendarDate) -> ValueRange:
        return ValueRange.of(0, 0) if d.month == 0 else ValueRange.of(1, 15)

    def with_field(self, d: CalendarDate, field: str, value: int) -> CalendarDate:
        self._own(d)
        self.chrono_range(field).check(value, field)
        leap = self.is_leap_year(d.year)

        # a zero week/day/month value selects St. Tib's Day
        if value == 0 and leap and field in _WEEK_FIELDS:
            return d if d.month == 0 else self.date(d.year, 0, 0)

        if d.month == 0:
            if field in ("year", "year_of_era") and self.is_leap_year(value):
                return self.date(value, 0, 0)
            return self.with_field(self.date(d.year, 1, ST_TIBS_OFFSET), field, value)

        self.range(field, d).check(value, field)
        if field in ("day_of_week", "aligned_day_of_week_in_month", "aligned_day_of_week_in_year"):
            # St. Tib's Day falls between the fourth and fifth day of its week
            if d.month == 1 and ST_TIBS_OFFSET - DAYS_IN_WEEK < d.day <= ST_TIBS_OFFSET and leap:
                current = self._day_of_week(d)
                if current < DAYS_IN_WEEK and value == DAYS_IN_WEEK:
                    return self.plus_days(d, value - current + 1)
                if current == DAYS_IN_WEEK and value < DAYS_IN_WEEK:
                    return self.plus_days(d, value - current - 1)
        elif field in ("aligned_week_of_month", "aligned_week_of_year"):
            if (d.month == 1 or field == "aligned_week_of_year") and leap:
                week = self.get(d, field)
                current = self._day_of_week(d)
                was_after = week > ST_TIBS_WEEK or (week == ST_TIBS_WEEK and current == DAYS_IN_WEEK)
                goes_before = value < ST_TIBS_WEEK or (value == ST_TIBS_WEEK and current < DAYS_IN_WEEK)
                goes_after = value > ST_TIBS_WEEK or (value == ST_TIBS_WEEK and current == DAYS_IN_WEEK)
                was_before = week < ST_TIBS_WEEK or (week == ST_TIBS_WEEK and current < DAYS_IN_WEEK)
                if was_after and goes_before:
                    return self.plus_days(d, (value - week) * DAYS_IN_WEEK - 1)
                if goes_after and was_before:
                    return self.plus_days(d, (value - week) * DAYS_IN_WEEK + 1)
        return super().with_field(d, field, value)

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def plus_months(self, d: CalendarDate, months: int) -> CalendarDate:
        if months == 0:
            return d
        calc = self.proleptic_month(d) + months
        new_year = calc // MONTHS_IN_YEAR
        new_month = calc % MONTHS_IN_YEAR + 1
        # St. Tib's Day stays St. Tib's Day when landing in the first season
        if d.month == 0 and new_month == 1:
            new_month = 0
        return self.resolve_previous(new_year, new_month, d.day)

    def plus_weeks(self, d: CalendarDate, weeks: int) -> CalendarDate:
        if weeks == 0:
            return d
        calc = self.proleptic_week(self._own(d)) + weeks
        new_year = calc // WEEKS_IN_YEAR
        # St. Tib's Day takes the day-of-week of the day after it
        new_day_of_year = (calc % WEEKS_IN_YEAR) * DAYS_IN_WEEK + (
            DAYS_IN_WEEK if d.month == 0 else self._day_of_week(d)
        )
        if self.is_leap_year(new_year) and (
            new_day_of_year > ST_TIBS_OFFSET or (new_day_of_year == ST_TIBS_OFFSET and d.month != 0)
        ):
            new_day_of_year += 1
        return self.date_year_day(new_year, new_day_of_year)

    def weeks_until(self, start: CalendarDate, end: CalendarDate) -> int:
        week_start = self.proleptic_week(start) * 8
        week_end = self.proleptic_week(end) * 8
        packed1 = week_start + self._st_tibs_offset(
            start, end, week_end > week_start, DAYS_IN_WEEK, self._day_of_week(start)
        )
        packed2 = week_end + self._st_tibs_offset(
            end, start, week_start > week_end, DAYS_IN_WEEK, self._day_of_week(end)
        )
        return trunc_div(packed2 - packed1, 8)

    def months_until(self, start: CalendarDate, end: CalendarDate) -> int:
        month_start = self.proleptic_month(start) * 128
        month_end = self.proleptic_month(end) * 128
        packed1 = month_start + self._st_tibs_offset(start, end, month_end > month_start, ST_TIBS_OFFSET, start.day)
        packed2 = month_end + self._st_tibs_offset(end, start, month_start > month_end, ST_TIBS_OFFSET, end.day)
        return trunc_div(packed2 - packed1, 128)

    @staticmethod
    def _st_tibs_offset(d: CalendarDate, other: CalendarDate, forward: bool, slot: int, default: int) -> int:
        """Place St. Tib's Day just after or just before `slot` depending on the direction travelled."""
        if d.month == 0 and other.month != 0:
            return slot if forward else slot - 1
        return default

    def period_until(self, start: CalendarDate, end: CalendarDate) -> Period:
        self._own(start)
        self._own(end)
        months = self.months_until(start, end)
        days = self.days_until(self.plus_months(start, months), end)
        return Period(self.id, trunc_div(months, MONTHS_IN_YEAR), trunc_mod(months, MONTHS_IN_YEAR), days)
