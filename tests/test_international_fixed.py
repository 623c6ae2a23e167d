# tests/test_international_fixed.py

import random

import pytest

import altcal
from altcal import RangeError

SAMPLES = [
    ((1, 1, 1), (1, 1, 1)),
    ((1, 1, 28), (1, 1, 28)),
    ((1, 2, 1), (1, 1, 29)),
    ((6, 12, 28), (6, 12, 2)),
    ((6, 13, 1), (6, 12, 3)),
    ((6, 13, 28), (6, 12, 30)),
    ((6, 0, 0), (6, 12, 31)),
    ((7, 1, 1), (7, 1, 1)),
    ((399, 13, 1), (399, 12, 3)),
    ((400, 13, 28), (400, 12, 30)),
    ((400, 0, 0), (400, 12, 31)),
    ((401, 1, 1), (401, 1, 1)),
    ((1582, 9, 28), (1582, 9, 9)),
    ((1582, 10, 1), (1582, 9, 10)),
    ((1945, 10, 27), (1945, 10, 6)),
    ((2012, 6, 28), (2012, 6, 16)),
    ((2012, -1, -1), (2012, 6, 17)),
    ((2012, 7, 1), (2012, 6, 18)),
]


@pytest.fixture
def cal():
    return altcal.get_calendar("international_fixed")


@pytest.mark.parametrize("ymd, iso", SAMPLES)
def test_samples(ymd, iso):
    d = altcal.date("international_fixed", *ymd)
    assert altcal.to_iso(d) == iso
    assert altcal.from_iso(*iso, "international_fixed") == d


def test_special_days(cal):
    assert cal.year_day(2011) == cal.date(2011, 0, 0)
    assert cal.leap_day(2012) == cal.date(2012, -1, -1)
    assert cal.day_of_year(cal.year_day(2011)) == 365
    assert cal.day_of_year(cal.year_day(2012)) == 366
    assert cal.day_of_year(cal.leap_day(2012)) == 169
    assert cal.label(cal.year_day(2011)) == "international_fixed CE 2011 Year Day"
    assert cal.label(cal.leap_day(2012)) == "international_fixed CE 2012 Leap Day"
    assert cal.month_name(-1) == "Leap Day"
    assert cal.month_name(7) == "Sol"


@pytest.mark.parametrize("year, month, day", [(0, 1, 1), (2011, -1, -1), (2011, 0, 1), (2011, 1, 0), (2011, 14, 1), (2011, 1, 29)])
def test_bad_dates(cal, year, month, day):
    with pytest.raises(RangeError):
        cal.date(year, month, day)


def test_no_leap_day_in_common_years(cal):
    with pytest.raises(RangeError):
        cal.leap_day(2011)
    assert cal.is_leap_year(2000)
    assert not cal.is_leap_year(1900)


def test_weekdays(cal):
    # every month starts on a Sunday
    assert cal.day_of_week(cal.date(1, 1, 1)) == 7
    assert cal.day_of_week(cal.date(1, 1, 2)) == 1
    assert cal.day_of_week(cal.date(2012, 7, 1)) == 7
    assert cal.day_of_week(cal.year_day(2012)) == 0
    assert cal.day_of_week(cal.leap_day(2012)) == 0
    assert cal.get(cal.leap_day(2012), "aligned_week_of_year") == 0
    assert cal.get(cal.date(2012, 7, 1), "aligned_week_of_year") == 25
    assert cal.range("day_of_week", cal.year_day(2012)).maximum == 0


def test_month_and_week_arithmetic(cal):
    assert cal.plus(cal.date(2012, 6, 28), 1, "months") == cal.date(2012, 7, 28)
    assert cal.plus(cal.year_day(2011), 1, "months") == cal.date(2012, 1, 28)
    # stepping over Leap Day keeps the weekday
    assert cal.plus(cal.date(2012, 6, 22), 1, "weeks") == cal.date(2012, 7, 1)
    assert cal.until(cal.date(2012, 6, 28), cal.date(2012, 7, 1), "days") == 2
    p = cal.period_until(cal.date(2012, 1, 1), cal.date(2013, 1, 1))
    assert (p.years, p.months, p.days) == (1, 0, 0)


def test_with_special_values(cal):
    d = cal.date(2012, 3, 10)
    assert cal.with_field(d, "month_of_year", 0) == cal.year_day(2012)
    assert cal.with_field(d, "day_of_month", -1) == cal.leap_day(2012)
    with pytest.raises(RangeError):
        cal.with_field(cal.date(2011, 3, 10), "month_of_year", -1)


def test_weeks_across_several_special_days(cal):
    d = cal.date(2246, 10, 16)
    moved = cal.plus(d, 103, "weeks")
    assert moved == cal.date(2248, 10, 9)
    assert cal.day_of_week(moved) == cal.day_of_week(d) == 1
    assert cal.until(d, moved, "weeks") == 103
    assert cal.minus(moved, 103, "weeks") == d
    # 2012 is leap: Year Day 2011, Leap Day 2012 and Year Day 2012 lie between
    assert cal.plus(cal.date(2011, 3, 5), 156, "weeks") == cal.date(2014, 3, 5)
    assert cal.plus(cal.date(2011, 3, 5), 150, "weeks") == cal.date(2014, 1, 19)


def test_plus_weeks_keeps_weekday_and_agrees_with_until(cal):
    random.seed(42)
    for _ in range(2000):
        d = cal.date_epoch_day(random.randint(-700_000, 370_000))
        if cal.day_of_week(d) == 0:
            continue
        n = random.randint(-400, 400)
        moved = cal.plus(d, n, "weeks")
        assert cal.day_of_week(moved) == cal.day_of_week(d)
        assert cal.until(d, moved, "weeks") == n
