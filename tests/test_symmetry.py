# tests/test_symmetry.py

import random

import pytest

import altcal
from altcal import RangeError
from altcal.core.time import iso_day_of_week

SYM010_SAMPLES = [
    ((1, 1, 1), (1, 1, 1)),
    ((272, 2, 28), (272, 2, 27)),
    ((742, 3, 27), (742, 4, 2)),
    ((1066, 10, 14), (1066, 10, 14)),
    ((1304, 7, 21), (1304, 7, 20)),
    ((1433, 11, 12), (1433, 11, 10)),
    ((1452, 4, 11), (1452, 4, 15)),
    ((1564, 2, 18), (1564, 2, 15)),
    ((1643, 1, 7), (1643, 1, 4)),
    ((1789, 7, 16), (1789, 7, 14)),
    ((1879, 3, 14), (1879, 3, 14)),
    ((1970, 1, 4), (1970, 1, 1)),
    ((1970, 1, 1), (1969, 12, 29)),
    ((1999, 12, 29), (2000, 1, 1)),
    ((2000, 1, 1), (2000, 1, 3)),
]

SYM454_SAMPLES = [
    ((1970, 1, 1), (1969, 12, 29)),
    ((1970, 1, 4), (1970, 1, 1)),
    ((1970, 2, 1), (1970, 1, 26)),
    ((2000, 1, 1), (2000, 1, 3)),
]


@pytest.mark.parametrize("ymd, iso", SYM010_SAMPLES)
def test_symmetry010_samples(ymd, iso):
    d = altcal.date("symmetry010", *ymd)
    assert altcal.to_iso(d) == iso
    assert altcal.from_iso(*iso, "symmetry010") == d


@pytest.mark.parametrize("ymd, iso", SYM454_SAMPLES)
def test_symmetry454_samples(ymd, iso):
    d = altcal.date("symmetry454", *ymd)
    assert altcal.to_iso(d) == iso
    assert altcal.from_iso(*iso, "symmetry454") == d


def test_leap_week_rule():
    cal = altcal.get_calendar("symmetry010")
    assert cal.is_leap_year(2015)
    assert not cal.is_leap_year(2016)
    # 52 leap years in every 293-year cycle
    assert sum(cal.is_leap_year(y) for y in range(1, 294)) == 52
    assert cal.leap_years_before(294) - cal.leap_years_before(1) == 52


def test_symmetry010_months():
    cal = altcal.get_calendar("symmetry010")
    assert [cal.month_length(2016, m) for m in range(1, 13)] == [30, 31, 30] * 4
    assert cal.month_length(2015, 12) == 37
    assert cal.is_leap_week(cal.date(2015, 12, 31))
    assert not cal.is_leap_week(cal.date(2015, 12, 30))
    with pytest.raises(RangeError, match="not a leap year"):
        cal.date(2016, 12, 31)
    with pytest.raises(RangeError):
        cal.date(2016, 1, 31)


def test_symmetry454_months():
    cal = altcal.get_calendar("symmetry454")
    assert [cal.month_length(2016, m) for m in range(1, 13)] == [28, 35, 28] * 4
    assert cal.month_length(2015, 12) == 35
    assert cal.date(2016, 2, 35).day == 35
    with pytest.raises(RangeError):
        cal.date(2016, 1, 29)


def test_every_year_starts_on_monday():
    for name in ("symmetry010", "symmetry454"):
        cal = altcal.get_calendar(name)
        for year in (1, 1970, 2015, 2016):
            assert cal.day_of_week(cal.date(year, 1, 1)) == 1
    cal = altcal.get_calendar("symmetry010")
    assert cal.day_of_week(cal.date(2016, 2, 1)) == 3
    assert cal.day_of_week(cal.date(2016, 3, 1)) == 6


def test_symmetry454_weekday_moves_stay_in_month():
    cal = altcal.get_calendar("symmetry454")
    d = cal.date(2016, 2, 10)
    assert cal.with_field(d, "day_of_week", 1) == cal.date(2016, 2, 8)
    assert cal.with_field(d, "aligned_week_of_month", 5) == cal.date(2016, 2, 31)


def test_until_uses_packed_fields():
    cal = altcal.get_calendar("symmetry010")
    assert cal.until(cal.date(2015, 12, 31), cal.date(2016, 12, 30), "years") == 0
    assert cal.until(cal.date(2016, 1, 30), cal.date(2016, 2, 30), "months") == 1
    assert cal.until(cal.date(2016, 1, 1), cal.date(2016, 1, 8), "weeks") == 1
    p = cal.period_until(cal.date(2015, 1, 1), cal.date(2016, 2, 3))
    assert (p.years, p.months, p.days) == (1, 1, 2)


def test_weekday_matches_iso():
    random.seed(42)
    for name in ("symmetry010", "symmetry454"):
        cal = altcal.get_calendar(name)
        for _ in range(500):
            ed = random.randint(-800_000, 800_000)
            assert cal.day_of_week(cal.date_epoch_day(ed)) == iso_day_of_week(ed)
