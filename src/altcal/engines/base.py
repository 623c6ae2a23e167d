"""
altcal.engines.base
-------------------
Generic field resolution and date arithmetic shared by every calendar system.

A concrete system supplies the leap rule, the month table and the epoch
converter (see interfaces.py); everything here is written in terms of those
hooks plus a handful of overridable arithmetic methods (plus_months,
plus_years, months_until, ...) for calendars whose months or weeks are not
regular.

Dates are plain CalendarDate values; a system only accepts dates whose
`calendar` equals its own id.
"""

from __future__ import annotations

from functools import cached_property
from typing import Any, Dict, Optional, Tuple

from ..core.errors import CalendarMismatchError, EraMismatchError, RangeError, UnsupportedFieldError
from ..core.time import trunc_div, trunc_mod
from ..core.types import FIELDS, UNITS, CalendarDate, Era, Period, ValueRange

YMD = Tuple[int, int, int]


class CalendarSystem:
    """Base class of all calendar systems (the AbstractDate arithmetic)."""

    id: str = ""
    family: str = ""                       # era family
    calendar_type: Optional[str] = None    # CLDR calendar type, where one exists
    eras: Tuple[Era, ...] = ()
    week_length: int = 7
    months_per_year: int = 12
    month_names: Tuple[str, ...] = ()

    year_range: ValueRange
    month_range: ValueRange
    day_of_month_range: ValueRange
    day_of_year_range: ValueRange
    aligned_week_of_month_range: ValueRange
    aligned_week_of_year_range: ValueRange

    # ---------------------------------------------------------
    # Leap rule
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        raise NotImplementedError

    def leap_years_before(self, year: int) -> int:
        raise NotImplementedError

    # ---------------------------------------------------------
    # Month table
    # ---------------------------------------------------------

    def months_in_year(self, year: int) -> int:
        return self.months_per_year

    def month_length(self, year: int, month: int) -> int:
        raise NotImplementedError

    def year_length(self, year: int) -> int:
        return sum(self.month_length(year, m) for m in range(1, self.months_in_year(year) + 1))

    def day_of_year_at_start_of_month(self, year: int, month: int) -> int:
        self.month_range.check(month, "month_of_year")
        return self._day_of_year(year, month, 1)

    def month_containing_day_of_year(self, year: int, day_of_year: int) -> int:
        return self.date_year_day(year, day_of_year).month

    def _day_of_year(self, year: int, month: int, day: int) -> int:
        raise NotImplementedError

    def _month_day(self, year: int, day_of_year: int) -> Tuple[int, int]:
        """(month, day) of a day-of-year already known to exist in `year`."""
        raise NotImplementedError

    # ---------------------------------------------------------
    # Epoch converter
    # ---------------------------------------------------------

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        raise NotImplementedError

    def _from_epoch_day(self, epoch_day: int) -> YMD:
        raise NotImplementedError

    @cached_property
    def epoch_day_range(self) -> ValueRange:
        lo = self.year_range.minimum
        hi = self.year_range.maximum
        first = self._to_epoch_day(lo, *self._month_day(lo, 1))
        last = self._to_epoch_day(hi, *self._month_day(hi, self.year_length(hi)))
        return ValueRange.of(first, last)

    @cached_property
    def proleptic_month_range(self) -> ValueRange:
        lo = self.year_range.minimum
        hi = self.year_range.maximum
        return ValueRange.of(
            self._proleptic_month(lo, 1),
            self._proleptic_month(hi, self.months_in_year(hi)),
        )

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------

    def _make(self, year: int, month: int, day: int) -> CalendarDate:
        return CalendarDate(self.id, year, month, day)

    def _own(self, d: CalendarDate) -> CalendarDate:
        if d.calendar != self.id:
            raise CalendarMismatchError(f"{d} is not a {self.id} date")
        return d

    def _check_date(self, year: int, month: int, day: int) -> None:
        """Validate month, then day, against the (already valid) year."""
        ValueRange.of(1, self.months_in_year(year)).check(month, "month_of_year")
        ValueRange.of(1, self.month_length(year, month)).check(day, "day_of_month")

    def _not_leap_message(self, year: int, day_of_year: int) -> str:
        return f"Invalid date 'DayOfYear {day_of_year}' as '{year}' is not a leap year"

    def date(self, year: int, month: int, day: int) -> CalendarDate:
        self.year_range.check(year, "year")
        self._check_date(year, month, day)
        return self._make(year, month, day)

    def date_year_day(self, year: int, day_of_year: int) -> CalendarDate:
        self.year_range.check(year, "year")
        self.day_of_year_range.check(day_of_year, "day_of_year")
        if day_of_year > self.year_length(year):
            raise RangeError(self._not_leap_message(year, day_of_year), field="day_of_year", value=day_of_year)
        month, day = self._month_day(year, day_of_year)
        return self._make(year, month, day)

    def date_epoch_day(self, epoch_day: int) -> CalendarDate:
        self.epoch_day_range.check(epoch_day, "epoch_day")
        return self._make(*self._from_epoch_day(epoch_day))

    def date_era(self, era: Era, year_of_era: int, month: int, day: int) -> CalendarDate:
        return self.date(self.proleptic_year(era, year_of_era), month, day)

    def date_year_day_era(self, era: Era, year_of_era: int, day_of_year: int) -> CalendarDate:
        return self.date_year_day(self.proleptic_year(era, year_of_era), day_of_year)

    def resolve_previous(self, year: int, month: int, day: int) -> CalendarDate:
        """Clamp an out-of-range month/day down to the nearest valid date of `year`."""
        self.year_range.check(year, "year")
        return self.date(*self._resolve_previous(year, month, day))

    def _resolve_previous(self, year: int, month: int, day: int) -> YMD:
        month = min(month, self.months_in_year(year))
        day = min(day, self.month_length(year, month))
        return year, month, day

    # ---------------------------------------------------------
    # Eras
    # ---------------------------------------------------------

    def era_of(self, value: int) -> Era:
        for era in self.eras:
            if era.value == value:
                return era
        raise RangeError(f"Invalid era for {self.id}: {value}", field="era", value=value)

    def _check_era(self, era: Era) -> None:
        if not isinstance(era, Era) or era.calendar != self.family or era not in self.eras:
            raise EraMismatchError(f"Era must be a {self.family} era, got {era!r}")

    def proleptic_year(self, era: Era, year_of_era: int) -> int:
        self._check_era(era)
        if len(self.eras) == 1:
            return year_of_era
        return year_of_era if era.value == 1 else 1 - year_of_era

    def _era_of_year(self, year: int) -> Era:
        if len(self.eras) == 1:
            return self.eras[0]
        return self.era_of(1 if year >= 1 else 0)

    def era(self, d: CalendarDate) -> Era:
        return self._era_of_year(self._own(d).year)

    def year_of_era(self, d: CalendarDate) -> int:
        y = self._own(d).year
        return y if (y >= 1 or len(self.eras) == 1) else 1 - y

    # ---------------------------------------------------------
    # Date queries
    # ---------------------------------------------------------

    def to_epoch_day(self, d: CalendarDate) -> int:
        self._own(d)
        return self._to_epoch_day(d.year, d.month, d.day)

    def is_leap(self, d: CalendarDate) -> bool:
        return self.is_leap_year(self._own(d).year)

    def length_of_month(self, d: CalendarDate) -> int:
        self._own(d)
        return self.month_length(d.year, d.month)

    def length_of_year(self, d: CalendarDate) -> int:
        return self.year_length(self._own(d).year)

    def length_of_year_in_months(self, d: CalendarDate) -> int:
        return self.months_in_year(self._own(d).year)

    def day_of_year(self, d: CalendarDate) -> int:
        self._own(d)
        return self._day_of_year(d.year, d.month, d.day)

    def day_of_week(self, d: CalendarDate) -> int:
        return self._day_of_week(self._own(d))

    def _day_of_week(self, d: CalendarDate) -> int:
        return (self._to_epoch_day(d.year, d.month, d.day) + 3) % 7 + 1

    def proleptic_month(self, d: CalendarDate) -> int:
        self._own(d)
        return self._proleptic_month(d.year, d.month)

    def _proleptic_month(self, year: int, month: int) -> int:
        return year * self.months_per_year + month - 1

    def month_name(self, month: int) -> str:
        if 1 <= month <= len(self.month_names):
            return self.month_names[month - 1]
        return str(month)

    def label(self, d: CalendarDate) -> str:
        """Human readable form, e.g. 'Coptic AM 1740-05-06'."""
        return f"{self.id} {self.era(d)} {self.year_of_era(d)}-{d.month:02d}-{d.day:02d}"

    # ---------------------------------------------------------
    # Fields
    # ---------------------------------------------------------

    def get(self, d: CalendarDate, field: str) -> int:
        self._own(d)
        wl = self.week_length
        if field == "day_of_week":
            return self._day_of_week(d)
        if field == "aligned_day_of_week_in_month":
            return (d.day - 1) % wl + 1
        if field == "aligned_day_of_week_in_year":
            return (self._day_of_year(d.year, d.month, d.day) - 1) % wl + 1
        if field == "day_of_month":
            return d.day
        if field == "day_of_year":
            return self._day_of_year(d.year, d.month, d.day)
        if field == "epoch_day":
            return self._to_epoch_day(d.year, d.month, d.day)
        if field == "aligned_week_of_month":
            return (d.day - 1) // wl + 1
        if field == "aligned_week_of_year":
            return (self._day_of_year(d.year, d.month, d.day) - 1) // wl + 1
        if field == "month_of_year":
            return d.month
        if field == "proleptic_month":
            return self._proleptic_month(d.year, d.month)
        if field == "year_of_era":
            return self.year_of_era(d)
        if field == "year":
            return d.year
        if field == "era":
            return self._era_of_year(d.year).value
        raise UnsupportedFieldError(f"Unsupported field: {field!r}, expected one of {FIELDS}")

    def chrono_range(self, field: str) -> ValueRange:
        """Calendar-wide range of a field, valid for any date."""
        if field in ("day_of_week", "aligned_day_of_week_in_month", "aligned_day_of_week_in_year"):
            return ValueRange.of(1, self.week_length)
        if field == "day_of_month":
            return self.day_of_month_range
        if field == "day_of_year":
            return self.day_of_year_range
        if field == "epoch_day":
            return self.epoch_day_range
        if field == "aligned_week_of_month":
            return self.aligned_week_of_month_range
        if field == "aligned_week_of_year":
            return self.aligned_week_of_year_range
        if field == "month_of_year":
            return self.month_range
        if field == "proleptic_month":
            return self.proleptic_month_range
        if field == "year_of_era":
            return ValueRange.of(1, max(self.year_range.maximum, 1 - self.year_range.minimum))
        if field == "year":
            return self.year_range
        if field == "era":
            values = [e.value for e in self.eras]
            return ValueRange.of(min(values), max(values))
        raise UnsupportedFieldError(f"Unsupported field: {field!r}, expected one of {FIELDS}")

    def range(self, field: str, d: Optional[CalendarDate] = None) -> ValueRange:
        """Range of a field, refined by the date when one is given."""
        if d is None:
            return self.chrono_range(field)
        self._own(d)
        if field == "day_of_month":
            return ValueRange.of(1, self.month_length(d.year, d.month))
        if field == "day_of_year":
            return ValueRange.of(1, self.year_length(d.year))
        if field == "aligned_week_of_month":
            return self._range_aligned_week_of_month(d)
        return self.chrono_range(field)

    def _range_aligned_week_of_month(self, d: CalendarDate) -> ValueRange:
        weeks = (self.month_length(d.year, d.month) - 1) // self.week_length + 1
        return ValueRange.of(1, weeks)

    def with_field(self, d: CalendarDate, field: str, value: int) -> CalendarDate:
        """Return a copy of `d` with one field changed, resolving to the previous valid date."""
        self._own(d)
        self.chrono_range(field).check(value, field)
        if field == "day_of_week":
            return self.plus_days(d, value - self._day_of_week(d))
        if field in ("aligned_day_of_week_in_month", "aligned_day_of_week_in_year"):
            return self.plus_days(d, value - self.get(d, field))
        if field == "day_of_month":
            return self.resolve_previous(d.year, d.month, value)
        if field == "day_of_year":
            return self._with_day_of_year(d, value)
        if field == "epoch_day":
            return self.date_epoch_day(value)
        if field in ("aligned_week_of_month", "aligned_week_of_year"):
            return self.plus_days(d, (value - self.get(d, field)) * self.week_length)
        if field == "month_of_year":
            return self.resolve_previous(d.year, value, d.day)
        if field == "proleptic_month":
            return self.plus_months(d, value - self._proleptic_month(d.year, d.month))
        if field == "year_of_era":
            return self.resolve_previous(value if d.year >= 1 else 1 - value, d.month, d.day)
        if field == "year":
            return self.resolve_previous(value, d.month, d.day)
        if field == "era":
            if value == self._era_of_year(d.year).value:
                return d
            return self.resolve_previous(1 - d.year, d.month, d.day)
        raise UnsupportedFieldError(f"Unsupported field: {field!r}, expected one of {FIELDS}")

    def _with_day_of_year(self, d: CalendarDate, value: int) -> CalendarDate:
        return self.plus_days(d, value - self._day_of_year(d.year, d.month, d.day))

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def plus(self, d: CalendarDate, amount: int, unit: str) -> CalendarDate:
        self._own(d)
        if unit == "days":
            return self.plus_days(d, amount)
        if unit == "weeks":
            return self.plus_weeks(d, amount)
        if unit == "months":
            return self.plus_months(d, amount)
        if unit == "years":
            return self.plus_years(d, amount)
        if unit == "decades":
            return self.plus_years(d, amount * 10)
        if unit == "centuries":
            return self.plus_years(d, amount * 100)
        if unit == "millennia":
            return self.plus_years(d, amount * 1000)
        if unit == "eras":
            return self.with_field(d, "era", self.get(d, "era") + amount)
        raise UnsupportedFieldError(f"Unsupported unit: {unit!r}, expected one of {UNITS}")

    def minus(self, d: CalendarDate, amount: int, unit: str) -> CalendarDate:
        return self.plus(d, -amount, unit)

    def plus_days(self, d: CalendarDate, days: int) -> CalendarDate:
        if days == 0:
            return d
        return self.date_epoch_day(self.to_epoch_day(d) + days)

    def plus_weeks(self, d: CalendarDate, weeks: int) -> CalendarDate:
        return self.plus_days(d, weeks * self.week_length)

    def plus_months(self, d: CalendarDate, months: int) -> CalendarDate:
        if months == 0:
            return d
        calc = self.proleptic_month(d) + months
        new_year = calc // self.months_per_year
        new_month = calc % self.months_per_year + 1
        return self.resolve_previous(new_year, new_month, d.day)

    def plus_years(self, d: CalendarDate, years: int) -> CalendarDate:
        if years == 0:
            return d
        return self.resolve_previous(self._own(d).year + years, d.month, d.day)

    def until(self, start: CalendarDate, end: CalendarDate, unit: str) -> int:
        """Whole units from start to end (negative when end is earlier)."""
        self._own(start)
        self._own(end)
        if unit == "days":
            return self.days_until(start, end)
        if unit == "weeks":
            return self.weeks_until(start, end)
        if unit == "months":
            return self.months_until(start, end)
        if unit == "years":
            return self.years_until(start, end)
        if unit == "decades":
            return trunc_div(self.years_until(start, end), 10)
        if unit == "centuries":
            return trunc_div(self.years_until(start, end), 100)
        if unit == "millennia":
            return trunc_div(self.years_until(start, end), 1000)
        if unit == "eras":
            return self.get(end, "era") - self.get(start, "era")
        raise UnsupportedFieldError(f"Unsupported unit: {unit!r}, expected one of {UNITS}")

    def days_until(self, start: CalendarDate, end: CalendarDate) -> int:
        return self.to_epoch_day(end) - self.to_epoch_day(start)

    def weeks_until(self, start: CalendarDate, end: CalendarDate) -> int:
        return trunc_div(self.days_until(start, end), self.week_length)

    def months_until(self, start: CalendarDate, end: CalendarDate) -> int:
        packed1 = self.proleptic_month(start) * 256 + start.day
        packed2 = self.proleptic_month(end) * 256 + end.day
        return trunc_div(packed2 - packed1, 256)

    def years_until(self, start: CalendarDate, end: CalendarDate) -> int:
        return trunc_div(self.months_until(start, end), self.months_per_year)

    def period_until(self, start: CalendarDate, end: CalendarDate) -> Period:
        self._own(start)
        self._own(end)
        total_months = self.proleptic_month(end) - self.proleptic_month(start)
        days = end.day - start.day
        if total_months > 0 and days < 0:
            total_months -= 1
            days = self.days_until(self.plus_months(start, total_months), end)
        elif total_months < 0 and days > 0:
            total_months += 1
            days -= self.length_of_month(end)
        miy = self.length_of_year_in_months(start)
        return Period(self.id, trunc_div(total_months, miy), trunc_mod(total_months, miy), days)

    def _period_years_first(self, start: CalendarDate, end: CalendarDate) -> Period:
        """Whole years, then whole months from the same point of the year, then days."""
        years = self.years_until(start, end)
        same_year = self.plus_years(start, years)
        months = self.months_until(same_year, end)
        days = self.days_until(self.plus_months(same_year, months), end)
        return Period(self.id, years, months, days)

    # ---------------------------------------------------------
    # Introspection
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": type(self).__name__,
            "calendar_type": self.calendar_type,
            "eras": [e.name for e in self.eras],
            "week_length": self.week_length,
            "months_per_year": self.months_per_year,
            "year_range": str(self.year_range),
            "epoch_day_range": str(self.epoch_day_range),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"
