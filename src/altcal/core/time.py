from __future__ import annotations
from datetime import date
from typing import Tuple

from .errors import RangeError

# JDN of 1970-01-01, the zero of the epoch-day timeline.
JDN_UNIX_EPOCH = 2440588
# date.toordinal() of 1970-01-01.
ORDINAL_UNIX_EPOCH = 719163

_ISO_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def trunc_mod(a: int, b: int) -> int:
    """Remainder matching trunc_div (sign follows the dividend)."""
    return a - b * trunc_div(a, b)


def to_jdn(y: int, m: int, day: int) -> int:
    """Convert a proleptic Gregorian (ISO) date to its Julian Day Number."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of to_jdn. Floor division keeps it valid for any year."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def iso_to_epoch_day(y: int, m: int, d: int) -> int:
    if not 1 <= m <= 12:
        raise RangeError(f"Invalid value for month_of_year (valid values 1 - 12): {m}", field="month_of_year", value=m)
    if not 1 <= d <= iso_length_of_month(y, m):
        raise RangeError(f"Invalid ISO date {y}-{m:02d}-{d:02d}", field="day_of_month", value=d)
    return to_jdn(y, m, d) - JDN_UNIX_EPOCH


def epoch_day_to_iso(epoch_day: int) -> Tuple[int, int, int]:
    return from_jdn(epoch_day + JDN_UNIX_EPOCH)


def date_to_epoch_day(d: date) -> int:
    return d.toordinal() - ORDINAL_UNIX_EPOCH


def epoch_day_to_date(epoch_day: int) -> date:
    """datetime.date for an epoch day; only ISO years 1..9999 are representable."""
    ordinal = epoch_day + ORDINAL_UNIX_EPOCH
    if not date.min.toordinal() <= ordinal <= date.max.toordinal():
        raise RangeError(f"Epoch day {epoch_day} is outside datetime.date's range", field="epoch_day", value=epoch_day)
    return date.fromordinal(ordinal)


def is_iso_leap(y: int) -> bool:
    return y % 4 == 0 and (y % 100 != 0 or y % 400 == 0)


def iso_leaps_through(n: int) -> int:
    """Signed count of Gregorian leap years up to and including n, relative to year 0."""
    return n // 4 - n // 100 + n // 400


def iso_month_days(m: int, leap: bool) -> int:
    """Length of ISO month m in a year with (leap=True) or without a February 29th."""
    if m == 2 and leap:
        return 29
    return _ISO_MONTH_DAYS[m - 1]


def iso_length_of_month(y: int, m: int) -> int:
    return iso_month_days(m, is_iso_leap(y))


def iso_day_of_year_at_start_of_month(m: int, leap: bool) -> int:
    """Day-of-year (1-based) of the first day of ISO month m."""
    doy = 1 + sum(_ISO_MONTH_DAYS[: m - 1])
    if leap and m > 2:
        doy += 1
    return doy


def iso_day_of_week(epoch_day: int) -> int:
    """ISO day-of-week, Monday=1 .. Sunday=7."""
    return (epoch_day + 3) % 7 + 1


def previous_or_same(epoch_day: int, day_of_week: int) -> int:
    """Latest epoch day <= epoch_day falling on the given ISO day-of-week."""
    return epoch_day - (iso_day_of_week(epoch_day) - day_of_week) % 7
