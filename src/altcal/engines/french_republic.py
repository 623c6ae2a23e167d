"""
altcal.engines.french_republic
------------------------------
French Republican calendar: the Nile month table (twelve 30-day months plus
5 or 6 complementary days) with ten-day weeks (decades), counted from
1792-09-22. Leap years follow the Nile `year mod 4 == 3` rule, so year 3
is the first leap year.
"""

from __future__ import annotations

from ..core.types import CalendarDate, Era, ValueRange
from .nile import NileCalendar


class FrenchRepublicCalendar(NileCalendar):
    id = "french_republic"
    family = "french_republic"
    week_length = 10
    epoch_offset = 64748        # year 1 = ISO 1792-09-22
    intercalary_name = "Complementary day"
    eras = (
        Era("french_republic", "BEFORE_REPUBLICAN", 0),
        Era("french_republic", "REPUBLICAN", 1),
    )
    month_names = (
        "Vendemiaire", "Brumaire", "Frimaire", "Nivose", "Pluviose", "Ventose",
        "Germinal", "Floreal", "Prairial", "Messidor", "Thermidor", "Fructidor",
        "Sansculottides",
    )

    aligned_week_of_month_range = ValueRange.of(1, 1, 3)
    aligned_week_of_year_range = ValueRange.of(1, 37)

    def _day_of_week(self, d: CalendarDate) -> int:
        # position in the decade: primidi = 1 .. decadi = 10
        return (d.day - 1) % 10 + 1
