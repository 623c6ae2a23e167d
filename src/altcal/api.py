from __future__ import annotations

from datetime import date as _date
from typing import Any, Dict, List, Optional, Tuple, Union

from .core.engine import CalendarRegistry
from .core.time import date_to_epoch_day, epoch_day_to_date, epoch_day_to_iso, iso_to_epoch_day
from .core.types import CalendarDate, Period
from .engines.accounting import AccountingCalendarBuilder
from .engines.base import CalendarSystem
from .engines.factory import make_calendar as _make_calendar

CalendarRef = Union[str, CalendarSystem]

_registry: Optional[CalendarRegistry] = None


def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg


def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry


def _cal(calendar: CalendarRef) -> CalendarSystem:
    if isinstance(calendar, CalendarSystem):
        return calendar
    return _reg().get(calendar)


def _owner(d: CalendarDate, calendar: Optional[CalendarRef]) -> CalendarSystem:
    """The system a date belongs to: explicit, or found by the date's calendar id."""
    if calendar is not None:
        return _cal(calendar)
    return _reg().find(d.calendar)


# ============================================================
# Registry
# ============================================================

def list_calendars() -> List[str]:
    return _reg().list()


def calendar_info(calendar: CalendarRef) -> Dict[str, Any]:
    return _cal(calendar).info()


def get_calendar(name: str) -> CalendarSystem:
    return _reg().get(name)


def make_calendar(spec: Any) -> CalendarSystem:
    return _make_calendar(spec)


def register_calendar(name: str, calendar: CalendarSystem, *, overwrite: bool = False) -> None:
    _reg().register(name, calendar, overwrite=overwrite)


def accounting_builder() -> AccountingCalendarBuilder:
    """Fresh builder; register the result with register_calendar() to use it by name."""
    return AccountingCalendarBuilder()


# ============================================================
# Construction and conversion
# ============================================================

def date(calendar: CalendarRef, year: int, month: int, day: int) -> CalendarDate:
    return _cal(calendar).date(year, month, day)


def date_year_day(calendar: CalendarRef, year: int, day_of_year: int) -> CalendarDate:
    return _cal(calendar).date_year_day(year, day_of_year)


def from_epoch_day(epoch_day: int, calendar: CalendarRef) -> CalendarDate:
    return _cal(calendar).date_epoch_day(epoch_day)


def to_epoch_day(d: CalendarDate, *, calendar: Optional[CalendarRef] = None) -> int:
    return _owner(d, calendar).to_epoch_day(d)


def from_iso(year: int, month: int, day: int, calendar: CalendarRef) -> CalendarDate:
    """Calendar date of a proleptic ISO (Gregorian) date."""
    return _cal(calendar).date_epoch_day(iso_to_epoch_day(year, month, day))


def to_iso(d: CalendarDate, *, calendar: Optional[CalendarRef] = None) -> Tuple[int, int, int]:
    """Proleptic ISO (year, month, day); works outside datetime.date's range."""
    return epoch_day_to_iso(to_epoch_day(d, calendar=calendar))


def from_date(d: _date, calendar: CalendarRef) -> CalendarDate:
    return _cal(calendar).date_epoch_day(date_to_epoch_day(d))


def to_date(d: CalendarDate, *, calendar: Optional[CalendarRef] = None) -> _date:
    return epoch_day_to_date(to_epoch_day(d, calendar=calendar))


def convert(d: CalendarDate, to: CalendarRef, *, calendar: Optional[CalendarRef] = None) -> CalendarDate:
    """Same day, expressed in another calendar."""
    return _cal(to).date_epoch_day(to_epoch_day(d, calendar=calendar))


def is_leap_year(year: int, calendar: CalendarRef) -> bool:
    return _cal(calendar).is_leap_year(year)


# ============================================================
# Arithmetic
# ============================================================

def plus(d: CalendarDate, amount: int, unit: str, *, calendar: Optional[CalendarRef] = None) -> CalendarDate:
    return _owner(d, calendar).plus(d, amount, unit)


def minus(d: CalendarDate, amount: int, unit: str, *, calendar: Optional[CalendarRef] = None) -> CalendarDate:
    return _owner(d, calendar).minus(d, amount, unit)


def until(
    start: CalendarDate,
    end: CalendarDate,
    unit: str = "days",
    *,
    calendar: Optional[CalendarRef] = None,
) -> int:
    return _owner(start, calendar).until(start, end, unit)


def period_until(start: CalendarDate, end: CalendarDate, *, calendar: Optional[CalendarRef] = None) -> Period:
    return _owner(start, calendar).period_until(start, end)
