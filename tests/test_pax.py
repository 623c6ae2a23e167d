# tests/test_pax.py

import random

import pytest

import altcal
from altcal import RangeError

SAMPLES = [
    ((1, 1, 1), (0, 12, 31)),
    ((6, 13, 7), (6, 12, 2)),
    ((6, 14, 1), (6, 12, 3)),
    ((7, 1, 1), (6, 12, 31)),
    ((399, 14, 1), (399, 12, 5)),
    ((400, 13, 28), (400, 12, 30)),
    ((1582, 10, 5), (1582, 9, 9)),
    ((2012, 6, 24), (2012, 6, 5)),
    ((-6, 1, 1), (-6, 1, 2)),
    ((-6, 14, 1), (-6, 12, 11)),
    ((-6, 14, 28), (-5, 1, 7)),
    ((-5, 1, 1), (-5, 1, 8)),
    ((-99, 14, 1), (-99, 12, 15)),
    ((-100, 1, 1), (-101, 12, 31)),
    ((-100, 14, 2), (-100, 12, 10)),
]


@pytest.mark.parametrize("ymd, iso", SAMPLES)
def test_samples(ymd, iso):
    d = altcal.date("pax", *ymd)
    assert altcal.to_iso(d) == iso
    assert altcal.from_iso(*iso, "pax") == d


@pytest.mark.parametrize("year, leap", [(2012, True), (1900, True), (1999, True), (2000, False), (2001, False), (-6, True)])
def test_leap_years(year, leap):
    assert altcal.is_leap_year(year, "pax") is leap


def test_columbus_week():
    cal = altcal.get_calendar("pax")
    assert cal.months_in_year(2012) == 14
    assert cal.month_length(2012, 13) == 7
    assert cal.month_length(2012, 14) == 28
    assert cal.year_length(2012) == 371
    with pytest.raises(RangeError):
        cal.date(2012, 13, 8)
    with pytest.raises(RangeError):
        cal.date(2011, 14, 1)
    assert cal.range("month_of_year", cal.date(2011, 1, 1)).maximum == 13
    assert cal.range("aligned_week_of_year", cal.date(2012, 1, 1)).maximum == 53


def test_years_keep_pax_month():
    cal = altcal.get_calendar("pax")
    assert cal.plus(cal.date(2011, 13, 5), 1, "years") == cal.date(2012, 14, 5)
    assert cal.plus(cal.date(2012, 14, 5), 1, "years") == cal.date(2013, 13, 5)
    assert cal.with_field(cal.date(2011, 13, 5), "year", 2012) == cal.date(2012, 14, 5)


def test_months_step_over_columbus():
    cal = altcal.get_calendar("pax")
    assert cal.plus(cal.date(2012, 12, 10), 1, "months") == cal.date(2012, 13, 7)
    assert cal.plus(cal.date(2012, 12, 10), 2, "months") == cal.date(2012, 14, 10)
    assert cal.plus(cal.date(2012, 14, 10), 1, "months") == cal.date(2013, 1, 10)
    assert cal.until(cal.date(2012, 1, 1), cal.date(2013, 1, 1), "months") == 14


@pytest.mark.parametrize(
    "ymd, months, expected",
    [
        ((2012, 12, 10), 2, (2012, 14, 10)),
        ((1297, 3, 2), -3, (1296, 14, 2)),
        ((1541, 4, 8), 23, (1542, 14, 8)),
        ((2013, 1, 20), -1, (2012, 14, 20)),
        ((2013, 1, 20), -2, (2012, 13, 7)),
    ],
)
def test_months_across_leap_years(ymd, months, expected):
    cal = altcal.get_calendar("pax")
    assert cal.plus(cal.date(*ymd), months, "months") == cal.date(*expected)


def _step_months(cal, year, month, n):
    step = 1 if n > 0 else -1
    for _ in range(abs(n)):
        month += step
        if month > cal.months_in_year(year):
            year, month = year + 1, 1
        elif month < 1:
            year -= 1
            month = cal.months_in_year(year)
    return year, month


def test_plus_months_matches_month_by_month_walk():
    cal = altcal.get_calendar("pax")
    random.seed(42)
    for _ in range(3000):
        d = cal.date_epoch_day(random.randint(-700_000, 370_000))
        n = random.randint(-40, 40)
        moved = cal.plus(d, n, "months")
        assert (moved.year, moved.month) == _step_months(cal, d.year, d.month, n)
        assert moved.day == min(d.day, cal.month_length(moved.year, moved.month))
