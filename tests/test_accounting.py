# tests/test_accounting.py

import pytest

import altcal
from altcal import AccountingCalendarBuilder, AccountingYearDivision, ConfigurationError, RangeError
from altcal.engines.accounting import WEEKS_IN_YEAR

ALL_DIVISIONS = list(AccountingYearDivision)

# Year ends on the Sunday nearest the end of August, 13 periods of 4 weeks,
# leap week added to period 13.
REFERENCE_SAMPLES = [
    ((0, 13, 35), (0, 9, 3)),
    ((1, 1, 1), (0, 9, 4)),
    ((1583, 2, 18), (1582, 10, 14)),
    ((1946, 3, 15), (1945, 11, 12)),
    ((2011, 13, 28), (2011, 8, 28)),
    ((2012, 1, 1), (2011, 8, 29)),
    ((2012, 12, 4), (2012, 7, 5)),
    ((2012, 13, 35), (2012, 9, 2)),
    ((2013, 1, 1), (2012, 9, 3)),
]


@pytest.fixture(scope="module")
def reference():
    return (
        AccountingCalendarBuilder()
        .ends_on("SUNDAY")
        .nearest_end_of("AUGUST")
        .with_division(AccountingYearDivision.THIRTEEN_EVEN_MONTHS_OF_4_WEEKS)
        .leap_week_in_month(13)
        .to_calendar()
    )


# ============================================================
# Week tables
# ============================================================

def test_division_tables():
    d = AccountingYearDivision.QUARTERS_OF_PATTERN_4_4_5_WEEKS
    assert d.elapsed_weeks == (0, 4, 8, 13, 17, 21, 26, 30, 34, 39, 43, 47)
    assert d.length_of_year_in_months() == 12
    assert d.get_weeks_in_month(3) == 5
    assert d.get_weeks_in_month(3, 3) == 6
    assert d.get_weeks_at_start_of_month(4) == 13
    assert d.get_weeks_at_start_of_month(4, 3) == 14
    assert d.get_weeks_at_start_of_month(3, 3) == 8
    assert AccountingYearDivision.THIRTEEN_EVEN_MONTHS_OF_4_WEEKS.get_weeks_at_start_of_month(13, 13) == 48


@pytest.mark.parametrize("division", ALL_DIVISIONS)
def test_every_division_holds_52_weeks(division):
    months = division.length_of_year_in_months()
    assert sum(division.get_weeks_in_month(m) for m in range(1, months + 1)) == WEEKS_IN_YEAR
    for m in range(1, months):
        assert division.get_weeks_at_start_of_month(m + 1) == (
            division.get_weeks_at_start_of_month(m) + division.get_weeks_in_month(m)
        )


@pytest.mark.parametrize("division", ALL_DIVISIONS)
def test_leap_week_shifts_only_later_months(division):
    months = division.length_of_year_in_months()
    for leap_month in range(1, months + 1):
        total = sum(division.get_weeks_in_month(m, leap_month) for m in range(1, months + 1))
        assert total == WEEKS_IN_YEAR + 1
        for m in range(1, months + 1):
            base = division.get_weeks_at_start_of_month(m)
            shifted = division.get_weeks_at_start_of_month(m, leap_month)
            assert shifted == base + (1 if m > leap_month else 0)
            assert division.get_weeks_in_month(m, leap_month) == division.get_weeks_in_month(m) + (
                1 if m == leap_month else 0
            )


@pytest.mark.parametrize("division", ALL_DIVISIONS)
def test_month_from_elapsed_weeks_is_exhaustive(division):
    months = division.length_of_year_in_months()
    for leap_month in range(0, months + 1):
        limit = WEEKS_IN_YEAR + (1 if leap_month else 0)
        for week in range(limit):
            month = division.get_month_from_elapsed_weeks(week, leap_month)
            start = division.get_weeks_at_start_of_month(month, leap_month)
            assert start <= week < start + division.get_weeks_in_month(month, leap_month)
        with pytest.raises(RangeError):
            division.get_month_from_elapsed_weeks(limit, leap_month)
        with pytest.raises(RangeError):
            division.get_month_from_elapsed_weeks(-1, leap_month)


def test_month_out_of_range():
    d = AccountingYearDivision.QUARTERS_OF_PATTERN_5_4_4_WEEKS
    with pytest.raises(RangeError):
        d.get_weeks_in_month(13)
    with pytest.raises(RangeError):
        d.get_weeks_at_start_of_month(0)


# ============================================================
# Builder
# ============================================================

def _builder(division=AccountingYearDivision.QUARTERS_OF_PATTERN_4_4_5_WEEKS, leap=12):
    return (
        AccountingCalendarBuilder()
        .ends_on(7)
        .in_last_week_of(12)
        .with_division(division)
        .leap_week_in_month(leap)
    )


@pytest.mark.parametrize(
    "division, leap",
    [
        (AccountingYearDivision.THIRTEEN_EVEN_MONTHS_OF_4_WEEKS, 0),
        (AccountingYearDivision.THIRTEEN_EVEN_MONTHS_OF_4_WEEKS, -1),
        (AccountingYearDivision.THIRTEEN_EVEN_MONTHS_OF_4_WEEKS, 14),
        (AccountingYearDivision.QUARTERS_OF_PATTERN_4_4_5_WEEKS, 13),
        (AccountingYearDivision.QUARTERS_OF_PATTERN_4_5_4_WEEKS, 13),
        (AccountingYearDivision.QUARTERS_OF_PATTERN_5_4_4_WEEKS, 13),
    ],
)
def test_bad_leap_week_month(division, leap):
    with pytest.raises(ConfigurationError):
        _builder(division, leap).to_calendar()


def test_missing_settings():
    with pytest.raises(ConfigurationError, match="ends_on"):
        AccountingCalendarBuilder().nearest_end_of(8).with_division("THIRTEEN_EVEN_MONTHS_OF_4_WEEKS").to_calendar()
    with pytest.raises(ConfigurationError, match="nearest_end_of"):
        AccountingCalendarBuilder().ends_on(7).with_division("THIRTEEN_EVEN_MONTHS_OF_4_WEEKS").to_calendar()
    with pytest.raises(ConfigurationError, match="with_division"):
        AccountingCalendarBuilder().ends_on(7).nearest_end_of(8).leap_week_in_month(12).to_calendar()
    # leap_week_in_month defaults to unset
    with pytest.raises(ConfigurationError):
        AccountingCalendarBuilder().ends_on(7).nearest_end_of(8).with_division("THIRTEEN_EVEN_MONTHS_OF_4_WEEKS").to_calendar()


def test_unknown_names():
    with pytest.raises(ConfigurationError):
        AccountingCalendarBuilder().ends_on("FUNDAY")
    with pytest.raises(ConfigurationError):
        AccountingCalendarBuilder().nearest_end_of("SMARCH")
    with pytest.raises(ConfigurationError):
        AccountingCalendarBuilder().with_division("QUARTERS_OF_PATTERN_4_4_4_WEEKS")


def test_end_rule_last_write_wins():
    b = _builder()
    assert b.to_spec().in_last_week
    b.nearest_end_of("JANUARY")
    spec = b.to_spec()
    assert not spec.in_last_week
    assert spec.end == 1
    b.in_last_week_of("dec")
    assert b.to_spec().in_last_week
    assert b.to_spec().end == 12


def test_equal_configurations_give_equal_calendars():
    a = _builder().to_calendar()
    b = _builder().to_chronology()
    assert a == b
    assert hash(a) == hash(b)
    assert a != _builder(leap=3).to_calendar()


# ============================================================
# Reference calendar
# ============================================================

@pytest.mark.parametrize("ymd, iso", REFERENCE_SAMPLES)
def test_reference_samples(reference, ymd, iso):
    d = reference.date(*ymd)
    assert altcal.to_iso(d, calendar=reference) == iso
    assert altcal.from_iso(*iso, reference) == d


def test_reference_id_and_ranges(reference):
    assert reference.id == (
        "accounting[SUNDAY,nearest:AUGUST,THIRTEEN_EVEN_MONTHS_OF_4_WEEKS,leap:13,ends]"
    )
    assert reference.month_range == altcal.ValueRange.of(1, 13)
    assert reference.day_of_month_range == altcal.ValueRange.of(1, 28, 35)
    assert reference.aligned_week_of_month_range == altcal.ValueRange.of(1, 4, 5)
    assert reference.range("day_of_year") == altcal.ValueRange.of(1, 364, 371)
    assert reference.range("proleptic_month") == altcal.ValueRange.of(-999_999 * 13, 999_999 * 13 + 12)


def test_reference_leap_years(reference):
    assert reference.is_leap_year(2012)
    assert not reference.is_leap_year(2011)
    assert reference.year_length(2012) == 371
    assert reference.month_length(2012, 13) == 35
    assert reference.month_length(2011, 13) == 28
    assert reference.range("aligned_week_of_year", reference.date(2012, 1, 1)).maximum == 53
    assert reference.leap_years_before(2013) - reference.leap_years_before(2012) == 1
    assert reference.previous_leap_years(2012) == reference.leap_years_before(2012)
    with pytest.raises(RangeError):
        reference.date(2011, 13, 29)


def test_year_ends_on_configured_weekday(reference):
    for year in range(1900, 2100):
        end = reference.to_epoch_day(reference.date_year_day(year, reference.year_length(year)))
        assert end == reference.year_end(year)
        assert altcal.from_epoch_day(end, reference).year == year
        # Sunday
        assert (end + 3) % 7 + 1 == 7


def test_unregistered_calendar_needs_explicit_owner(reference):
    d = reference.date(2012, 12, 4)
    with pytest.raises(KeyError):
        altcal.to_iso(d)
    altcal.register_calendar("fiscal_test", reference, overwrite=True)
    assert altcal.to_iso(d) == (2012, 7, 5)


# ============================================================
# Retail 4-5-4 (registered as "retail454")
# ============================================================

def test_retail_454():
    cal = altcal.get_calendar("retail454")
    assert altcal.to_iso(altcal.date("retail454", 2023, 1, 1)) == (2023, 1, 29)
    assert altcal.to_iso(altcal.date("retail454", 2023, 12, 35)) == (2024, 2, 3)
    assert cal.is_leap_year(2023)
    assert not cal.is_leap_year(2022)
    assert altcal.from_iso(2023, 1, 28, "retail454") == altcal.date("retail454", 2022, 12, 28)
