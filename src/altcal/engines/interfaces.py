"""
altcal.engines.interfaces
-------------------------
The three layers every calendar system is assembled from: the leap rule,
the month table and the epoch converter. The generic arithmetic in
altcal.engines.base is written only against these.

Reference frame: an epoch day is a signed day count with day 0 = ISO 1970-01-01.
"""

from __future__ import annotations

from typing import Protocol, Tuple, runtime_checkable


@runtime_checkable
class LeapRuleProtocol(Protocol):
    def is_leap_year(self, year: int) -> bool:
        """Pure and total over the supported year range."""
        ...

    def leap_years_before(self, year: int) -> int:
        """
        Closed-form count of leap years strictly before `year`, relative to the
        calendar's own origin. Only differences between two years are meaningful.
        """
        ...


@runtime_checkable
class MonthTableProtocol(Protocol):
    def months_in_year(self, year: int) -> int:
        ...

    def month_length(self, year: int, month: int) -> int:
        """Days in the month; special out-of-band months report 1."""
        ...

    def year_length(self, year: int) -> int:
        ...

    def day_of_year_at_start_of_month(self, year: int, month: int) -> int:
        """1-based day-of-year of the first day of `month`."""
        ...

    def month_containing_day_of_year(self, year: int, day_of_year: int) -> int:
        ...


@runtime_checkable
class EpochConverterProtocol(Protocol):
    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        """
        Closed form: (year - 1) * ordinary_year + leap_years_before(year) * leap_unit
        + (day_of_year - 1) - epoch_offset. The triple is already validated.
        """
        ...

    def _from_epoch_day(self, epoch_day: int) -> Tuple[int, int, int]:
        """
        Cycle decomposition: shift by the epoch offset, split into the calendar's
        long cycle with floor division, estimate the year, correct it by at most
        one step, then map the day-of-year through the month table.
        """
        ...
