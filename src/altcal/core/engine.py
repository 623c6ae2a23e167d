from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol

from .types import CalendarDate

log = logging.getLogger(__name__)


class CalendarEngine(Protocol):
    id: str

    def info(self) -> Dict[str, Any]: ...
    def date(self, year: int, month: int, day: int) -> CalendarDate: ...
    def date_epoch_day(self, epoch_day: int) -> CalendarDate: ...
    def to_epoch_day(self, d: CalendarDate) -> int: ...
    def is_leap_year(self, year: int) -> bool: ...


@dataclass
class CalendarRegistry:
    _calendars: Dict[str, CalendarEngine]

    def get(self, name: str) -> CalendarEngine:
        if name not in self._calendars:
            raise KeyError(f"Unknown calendar '{name}'. Available: {sorted(self._calendars)}")
        return self._calendars[name]

    def find(self, calendar_id: str) -> CalendarEngine:
        """Look up by registry name first, then by the system's own id."""
        if calendar_id in self._calendars:
            return self._calendars[calendar_id]
        for cal in self._calendars.values():
            if cal.id == calendar_id:
                return cal
        raise KeyError(f"No registered calendar with id '{calendar_id}'. Available: {sorted(self._calendars)}")

    def list(self) -> List[str]:
        return sorted(self._calendars.keys())

    def register(self, name: str, calendar: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._calendars):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        log.debug("registering calendar %r (id=%s)", name, calendar.id)
        self._calendars[name] = calendar
