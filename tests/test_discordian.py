# tests/test_discordian.py

import pytest

import altcal
from altcal import RangeError

SAMPLES = [
    ((2, 1, 1), (-1164, 1, 1)),
    ((166, 1, 1), (-1000, 1, 1)),
    ((1166, 1, 1), (0, 1, 1)),
    ((1167, 1, 1), (1, 1, 1)),
    ((1167, 1, 59), (1, 2, 28)),
    ((1167, 1, 60), (1, 3, 1)),
    ((1170, 1, 59), (4, 2, 28)),
    ((1170, 0, 0), (4, 2, 29)),
    ((1170, 1, 60), (4, 3, 1)),
    ((1266, 1, 60), (100, 3, 1)),
    ((1166, 5, 73), (0, 12, 31)),
    ((2748, 4, 68), (1582, 10, 14)),
    ((3111, 5, 24), (1945, 11, 12)),
    ((3178, 3, 40), (2012, 7, 5)),
]


@pytest.fixture
def cal():
    return altcal.get_calendar("discordian")


@pytest.mark.parametrize("ymd, iso", SAMPLES)
def test_samples(ymd, iso):
    d = altcal.date("discordian", *ymd)
    assert altcal.to_iso(d) == iso
    assert altcal.from_iso(*iso, "discordian") == d


def test_st_tibs_day(cal):
    tibs = cal.date(1170, 0, 0)
    assert cal.day_of_year(tibs) == 60
    assert cal.day_of_week(tibs) == 0
    assert cal.get(tibs, "aligned_week_of_year") == 0
    assert cal.get(tibs, "aligned_week_of_month") == 0
    assert cal.label(tibs) == "discordian YOLD 1170 St. Tib's Day"
    assert cal.month_name(0) == "St. Tib's Day"
    assert cal.date_year_day(1170, 60) == tibs
    assert cal.date_year_day(1170, 61) == cal.date(1170, 1, 60)


@pytest.mark.parametrize("month, day", [(0, 0), (1, 0), (0, 1), (6, 1), (1, 74)])
def test_bad_dates(cal, month, day):
    with pytest.raises(RangeError):
        cal.date(1167, month, day)


def test_st_tibs_only_in_leap_years(cal):
    with pytest.raises(RangeError, match="not a leap year"):
        cal.date(1266, 0, 0)
    with pytest.raises(RangeError):
        cal.date_year_day(1167, 366)


def test_week_skips_st_tibs(cal):
    assert cal.day_of_week(cal.date(1170, 1, 59)) == 4
    assert cal.day_of_week(cal.date(1170, 1, 60)) == 5
    assert cal.plus(cal.date(1170, 1, 57), 1, "weeks") == cal.date(1170, 1, 62)
    assert cal.plus(cal.date(1170, 1, 57), 5, "days") == cal.date(1170, 1, 61)


def test_st_tibs_arithmetic(cal):
    tibs = cal.date(1170, 0, 0)
    assert cal.plus(tibs, 1, "years") == cal.date(1171, 1, 60)
    assert cal.plus(tibs, 4, "years") == cal.date(1174, 0, 0)
    assert cal.plus(tibs, 1, "days") == cal.date(1170, 1, 60)
    assert cal.minus(tibs, 1, "days") == cal.date(1170, 1, 59)


def test_with_zero_selects_st_tibs(cal):
    d = cal.date(1170, 3, 10)
    assert cal.with_field(d, "month_of_year", 0) == cal.date(1170, 0, 0)
    with pytest.raises(RangeError):
        cal.with_field(cal.date(1171, 3, 10), "month_of_year", 0)


def test_ranges(cal):
    assert cal.range("month_of_year", cal.date(1170, 1, 1)).minimum == 0
    assert cal.range("month_of_year", cal.date(1171, 1, 1)).minimum == 1
    assert cal.range("day_of_month", cal.date(1170, 0, 0)).maximum == 0
    assert cal.chrono_range("aligned_week_of_year").maximum == 73
    assert cal.year_range.minimum == 1
