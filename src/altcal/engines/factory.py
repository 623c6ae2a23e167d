"""
altcal.engines.factory
----------------------
Transforms pure data specifications into live CalendarSystem objects.
"""

from __future__ import annotations

import logging
from typing import Any

from .accounting import AccountingCalendar
from .base import CalendarSystem
from .discordian import DiscordianCalendar
from .french_republic import FrenchRepublicCalendar
from .interfaces import EpochConverterProtocol, LeapRuleProtocol, MonthTableProtocol
from .international_fixed import InternationalFixedCalendar
from .julian import JulianCalendar
from .nile import CopticCalendar, EthiopicCalendar
from .pax import PaxCalendar
from .specs import (
    AccountingSpec,
    DiscordianSpec,
    InternationalFixedSpec,
    JulianSpec,
    NileSpec,
    PaxSpec,
    SymmetrySpec,
)
from .symmetry import Symmetry010Calendar, Symmetry454Calendar

log = logging.getLogger(__name__)

_NILE = {
    "coptic": CopticCalendar,
    "ethiopic": EthiopicCalendar,
    "french_republic": FrenchRepublicCalendar,
}
_SYMMETRY = {"010": Symmetry010Calendar, "454": Symmetry454Calendar}
_LAYERS = (LeapRuleProtocol, MonthTableProtocol, EpochConverterProtocol)


def make_calendar(spec: Any) -> CalendarSystem:
    """The universal entry point: spec in, calendar system out."""
    if isinstance(spec, NileSpec):
        cal = _NILE[spec.variant]()
    elif isinstance(spec, JulianSpec):
        cal = JulianCalendar()
    elif isinstance(spec, PaxSpec):
        cal = PaxCalendar()
    elif isinstance(spec, DiscordianSpec):
        cal = DiscordianCalendar()
    elif isinstance(spec, SymmetrySpec):
        cal = _SYMMETRY[spec.variant]()
    elif isinstance(spec, InternationalFixedSpec):
        cal = InternationalFixedCalendar()
    elif isinstance(spec, AccountingSpec):
        cal = AccountingCalendar(spec)
    else:
        raise TypeError(f"Unknown calendar spec type: {type(spec)}")
    for layer in _LAYERS:
        if not isinstance(cal, layer):
            raise TypeError(f"{type(cal).__name__} does not implement {layer.__name__}")
    log.debug("built %r from %s", cal, type(spec).__name__)
    return cal
