from __future__ import annotations
import logging

from altcal.core.engine import CalendarRegistry
from altcal.engines.factory import make_calendar
from altcal.engines.specs import ALL_SPECS

log = logging.getLogger(__name__)


def build_registry() -> CalendarRegistry:
    calendars = {}
    for name, spec in ALL_SPECS.items():
        calendars[name] = make_calendar(spec)
    log.debug("registry built with %d calendars", len(calendars))
    return CalendarRegistry(calendars)
