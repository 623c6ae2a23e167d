"""
altcal.engines.specs
--------------------
Pure data definitions of every built-in calendar. factory.make_calendar()
turns a spec into a live CalendarSystem.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal

from ..core.errors import ConfigurationError
from .accounting import MONTH_NAMES, WEEKDAY_NAMES, AccountingYearDivision


@dataclass(frozen=True)
class NileSpec:
    variant: Literal["coptic", "ethiopic", "french_republic"]
    description: str = ""

    def __post_init__(self) -> None:
        if self.variant not in ("coptic", "ethiopic", "french_republic"):
            raise ConfigurationError(f"Unknown Nile calendar variant {self.variant!r}")


@dataclass(frozen=True)
class JulianSpec:
    description: str = ""


@dataclass(frozen=True)
class PaxSpec:
    description: str = ""


@dataclass(frozen=True)
class DiscordianSpec:
    description: str = ""


@dataclass(frozen=True)
class SymmetrySpec:
    variant: Literal["010", "454"]
    description: str = ""

    def __post_init__(self) -> None:
        if self.variant not in ("010", "454"):
            raise ConfigurationError(f"Unknown Symmetry variant {self.variant!r}")


@dataclass(frozen=True)
class InternationalFixedSpec:
    description: str = ""


@dataclass(frozen=True)
class AccountingSpec:
    """
    Frozen fiscal configuration.

    ends_on:            ISO weekday the year ends on (1 = Monday .. 7 = Sunday)
    end:                ISO month anchoring the year end (1..12)
    in_last_week:       True: last `ends_on` of the month; False: nearest its end
    division:           week pattern of the months
    leap_week_in_month: month that receives the 53rd week
    year_offset:        0 when the fiscal year is named after the ISO year it
                        ends in, 1 when named after the one it starts in
    """

    ends_on: int
    end: int
    in_last_week: bool
    division: AccountingYearDivision
    leap_week_in_month: int
    year_offset: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.ends_on, int) or not 1 <= self.ends_on <= 7:
            raise ConfigurationError(f"ends_on must be an ISO weekday 1..7, got {self.ends_on!r}")
        if not isinstance(self.end, int) or not 1 <= self.end <= 12:
            raise ConfigurationError(f"end must be an ISO month 1..12, got {self.end!r}")
        if not isinstance(self.division, AccountingYearDivision):
            raise ConfigurationError(f"division must be an AccountingYearDivision, got {self.division!r}")
        months = self.division.length_of_year_in_months()
        if self.leap_week_in_month == 0:
            raise ConfigurationError("leap_week_in_month must be set to the month receiving the leap week")
        if not 1 <= self.leap_week_in_month <= months:
            raise ConfigurationError(
                f"leap_week_in_month must be in 1..{months} for {self.division.name}, "
                f"got {self.leap_week_in_month}"
            )
        if self.year_offset not in (0, 1):
            raise ConfigurationError(f"year_offset must be 0 or 1, got {self.year_offset!r}")

    @property
    def calendar_id(self) -> str:
        mode = "last" if self.in_last_week else "nearest"
        naming = "starts" if self.year_offset else "ends"
        return (
            f"accounting[{WEEKDAY_NAMES[self.ends_on - 1]},{mode}:{MONTH_NAMES[self.end - 1]},"
            f"{self.division.name},leap:{self.leap_week_in_month},{naming}]"
        )

    def describe(self) -> Dict[str, Any]:
        return {
            "ends_on": WEEKDAY_NAMES[self.ends_on - 1],
            "end": MONTH_NAMES[self.end - 1],
            "in_last_week": self.in_last_week,
            "division": self.division.name,
            "leap_week_in_month": self.leap_week_in_month,
            "year_offset": self.year_offset,
        }


COPTIC = NileSpec("coptic", "Coptic (Alexandrian) calendar, year 1 = 284 CE")
ETHIOPIC = NileSpec("ethiopic", "Ethiopic Amete Mihret calendar, year 1 = 8 CE")
FRENCH_REPUBLIC = NileSpec("french_republic", "French Republican calendar with ten-day decades")
JULIAN = JulianSpec("Proleptic Julian calendar")
PAX = PaxSpec("Pax calendar with the Columbus leap week")
DISCORDIAN = DiscordianSpec("Discordian calendar with St. Tib's Day")
SYMMETRY010 = SymmetrySpec("010", "Symmetry010 perennial calendar, 30-31-30 quarters")
SYMMETRY454 = SymmetrySpec("454", "Symmetry454 perennial calendar, 4-5-4 week quarters")
INTERNATIONAL_FIXED = InternationalFixedSpec("International Fixed calendar, 13 months of 28 days")

# Retail "4-5-4" calendar (NRF style): ends on the Saturday nearest the end of
# January, fiscal year named after the ISO year it starts in.
RETAIL_454 = AccountingSpec(
    ends_on=6,
    end=1,
    in_last_week=False,
    division=AccountingYearDivision.QUARTERS_OF_PATTERN_4_5_4_WEEKS,
    leap_week_in_month=12,
    year_offset=1,
)

BUILTIN_SPECS = {
    "coptic": COPTIC,
    "ethiopic": ETHIOPIC,
    "french_republic": FRENCH_REPUBLIC,
    "julian": JULIAN,
    "pax": PAX,
    "discordian": DISCORDIAN,
    "symmetry010": SYMMETRY010,
    "symmetry454": SYMMETRY454,
    "international_fixed": INTERNATIONAL_FIXED,
}

ACCOUNTING_SPECS = {
    "retail454": RETAIL_454,
}

ALL_SPECS = {**BUILTIN_SPECS, **ACCOUNTING_SPECS}
