from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Tuple, get_args

from .errors import RangeError

Field = Literal[
    "day_of_week",
    "aligned_day_of_week_in_month",
    "aligned_day_of_week_in_year",
    "day_of_month",
    "day_of_year",
    "epoch_day",
    "aligned_week_of_month",
    "aligned_week_of_year",
    "month_of_year",
    "proleptic_month",
    "year_of_era",
    "year",
    "era",
]

Unit = Literal["days", "weeks", "months", "years", "decades", "centuries", "millennia", "eras"]

FIELDS: Tuple[str, ...] = get_args(Field)
UNITS: Tuple[str, ...] = get_args(Unit)


@dataclass(frozen=True)
class CalendarDate:
    """A (year, month, day) label in one calendar system.

    `calendar` is the id of the owning system. Special days use
    out-of-band values: Discordian St. Tib's Day is (0, 0), International
    Fixed Year Day is (0, 0) and Leap Day is (-1, -1).
    """
    calendar: str
    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.calendar} {self.year}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class Era:
    calendar: str   # era family, e.g. "coptic" or "iso"
    name: str
    value: int

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Period:
    """Years, months and days between two dates of one calendar."""
    calendar: str
    years: int = 0
    months: int = 0
    days: int = 0

    def is_zero(self) -> bool:
        return self.years == 0 and self.months == 0 and self.days == 0

    def negated(self) -> "Period":
        return Period(self.calendar, -self.years, -self.months, -self.days)


@dataclass(frozen=True)
class ValueRange:
    """Valid values of a field: [minimum, maximum], where the bounds may vary
    between largest_minimum/smallest_maximum depending on the date."""
    minimum: int
    largest_minimum: int
    smallest_maximum: int
    maximum: int

    def __post_init__(self) -> None:
        if self.minimum > self.largest_minimum:
            raise ValueError("minimum must not exceed largest_minimum")
        if self.smallest_maximum > self.maximum:
            raise ValueError("smallest_maximum must not exceed maximum")
        if self.largest_minimum > self.maximum:
            raise ValueError("largest_minimum must not exceed maximum")

    @classmethod
    def of(cls, *bounds: int) -> "ValueRange":
        """of(min, max), of(min, smallest_max, max) or of(min, largest_min, smallest_max, max)."""
        if len(bounds) == 2:
            lo, hi = bounds
            return cls(lo, lo, hi, hi)
        if len(bounds) == 3:
            lo, small_hi, hi = bounds
            return cls(lo, lo, small_hi, hi)
        if len(bounds) == 4:
            return cls(*bounds)
        raise TypeError(f"ValueRange.of() takes 2 to 4 bounds, got {len(bounds)}")

    def is_fixed(self) -> bool:
        return self.minimum == self.largest_minimum and self.smallest_maximum == self.maximum

    def is_valid(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def check(self, value: int, field: str) -> int:
        if not self.is_valid(value):
            raise RangeError(
                f"Invalid value for {field} (valid values {self}): {value}", field=field, value=value
            )
        return value

    def __str__(self) -> str:
        lo = str(self.minimum)
        if self.minimum != self.largest_minimum:
            lo += f"/{self.largest_minimum}"
        hi = str(self.smallest_maximum)
        if self.smallest_maximum != self.maximum:
            hi += f"/{self.maximum}"
        return f"{lo} - {hi}"
