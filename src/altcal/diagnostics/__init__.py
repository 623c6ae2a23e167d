"""Diagnostics package.

- pretty_month: always available, plain-text month grids
- round_trip, leap_years: need the optional extras (pip install "altcal[diagnostics]")
"""

__all__ = ["pretty_month", "round_trip", "leap_years"]
