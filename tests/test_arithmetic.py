# tests/test_arithmetic.py
#
# Properties every registered calendar must satisfy.

import random
from datetime import date

import pytest

import altcal
from altcal.engines.interfaces import EpochConverterProtocol, LeapRuleProtocol, MonthTableProtocol
from altcal.engines.specs import ALL_SPECS

NAMES = sorted(ALL_SPECS)

# ISO 0001-01-01 .. 3000-12-31, inside every calendar's range
LO = -719162
HI = 376564


@pytest.mark.parametrize("name", NAMES)
def test_layers(name):
    cal = altcal.get_calendar(name)
    assert isinstance(cal, LeapRuleProtocol)
    assert isinstance(cal, MonthTableProtocol)
    assert isinstance(cal, EpochConverterProtocol)


@pytest.mark.parametrize("name", NAMES)
def test_epoch_day_round_trip(name):
    cal = altcal.get_calendar(name)
    random.seed(42)
    for _ in range(3000):
        ed = random.randint(LO, HI)
        d = altcal.from_epoch_day(ed, name)
        assert altcal.to_epoch_day(d) == ed
        assert cal.date(d.year, d.month, d.day) == d


@pytest.mark.parametrize("name", NAMES)
def test_consecutive_days_are_ordered(name):
    cal = altcal.get_calendar(name)
    random.seed(42)
    for _ in range(50):
        start = random.randint(LO, HI - 400)
        prev = cal.date_epoch_day(start)
        for ed in range(start + 1, start + 400):
            d = cal.date_epoch_day(ed)
            key_prev = (prev.year, cal.day_of_year(prev))
            key = (d.year, cal.day_of_year(d))
            assert key > key_prev
            if d.year == prev.year:
                assert cal.day_of_year(d) == cal.day_of_year(prev) + 1
            else:
                assert cal.day_of_year(d) == 1
                assert cal.day_of_year(prev) == cal.year_length(prev.year)
            prev = d


@pytest.mark.parametrize("name", NAMES)
def test_month_table_is_consistent(name):
    cal = altcal.get_calendar(name)
    for year in (1, 4, 99, 100, 400, 1999, 2000, 2012, 2015):
        if not cal.year_range.is_valid(year):
            continue
        months = cal.months_in_year(year)
        starts = [cal.day_of_year_at_start_of_month(year, m) for m in range(1, months + 1)]
        assert starts[0] == 1
        for m, start in enumerate(starts, 1):
            assert cal.month_containing_day_of_year(year, start) == m
            end = starts[m] if m < months else cal.year_length(year) + 1
            # special days outside any month may follow a month
            assert end - start >= cal.month_length(year, m)
        assert sum(cal.month_length(year, m) for m in range(1, months + 1)) <= cal.year_length(year)


@pytest.mark.parametrize("name", NAMES)
def test_plus_days_and_until_agree(name):
    cal = altcal.get_calendar(name)
    random.seed(42)
    for _ in range(300):
        d = cal.date_epoch_day(random.randint(LO + 1000, HI - 1000))
        n = random.randint(-900, 900)
        moved = altcal.plus(d, n, "days")
        assert altcal.until(d, moved, "days") == n
        assert altcal.minus(moved, n, "days") == d


@pytest.mark.parametrize("name", NAMES)
def test_plus_months_lands_on_valid_dates(name):
    cal = altcal.get_calendar(name)
    random.seed(42)
    for _ in range(300):
        d = cal.date_epoch_day(random.randint(LO + 1000, HI - 1000))
        n = random.randint(-30, 30)
        moved = cal.plus(d, n, "months")
        assert cal.date(moved.year, moved.month, moved.day) == moved
        assert cal.plus(d, 0, "months") == d


@pytest.mark.parametrize("name", NAMES)
def test_year_ranges_bound_epoch_days(name):
    cal = altcal.get_calendar(name)
    r = cal.epoch_day_range
    first = cal.date_epoch_day(r.minimum)
    last = cal.date_epoch_day(r.maximum)
    assert first.year == cal.year_range.minimum
    assert last.year == cal.year_range.maximum
    with pytest.raises(altcal.RangeError):
        cal.date_epoch_day(r.minimum - 1)
    with pytest.raises(altcal.RangeError):
        cal.date_epoch_day(r.maximum + 1)


def test_convert_between_calendars():
    d = altcal.date("coptic", 1728, 10, 28)
    assert altcal.convert(d, "julian") == altcal.date("julian", 2012, 6, 22)
    assert altcal.convert(d, "discordian") == altcal.date("discordian", 3178, 3, 40)
    assert altcal.to_date(d) == date(2012, 7, 5)
    assert altcal.from_date(date(2012, 7, 5), "ethiopic") == altcal.date("ethiopic", 2004, 10, 28)


def test_unknown_field_and_unit():
    d = altcal.date("julian", 2012, 1, 1)
    cal = altcal.get_calendar("julian")
    with pytest.raises(altcal.UnsupportedFieldError):
        cal.get(d, "hour_of_day")
    with pytest.raises(altcal.UnsupportedFieldError):
        altcal.plus(d, 1, "hours")
