#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import altcal
from altcal.core.time import iso_to_epoch_day
from altcal.engines.base import CalendarSystem

log = logging.getLogger(__name__)


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "altcal[diagnostics]"') from e


def parse_calendars(s: str) -> List[str]:
    # "coptic,pax" -> ["coptic", "pax"]; empty means every registered calendar
    out = [x.strip() for x in s.split(",") if x.strip()]
    return out or altcal.list_calendars()


def sample_epoch_days(np, cal: CalendarSystem, lo: int, hi: int, n: int, seed: int):
    """Sorted unique epoch days in [lo, hi] clipped to the calendar's range."""
    lo = max(lo, cal.epoch_day_range.minimum)
    hi = min(hi, cal.epoch_day_range.maximum)
    if hi < lo:
        return np.array([], dtype=np.int64)
    rng = np.random.default_rng(seed)
    return np.unique(rng.integers(lo, hi + 1, size=n, dtype=np.int64))


def check_calendar(np, name: str, epoch_days, *, max_failures: int) -> int:
    cal = altcal.get_calendar(name)
    n = len(epoch_days)
    back = np.empty(n, dtype=np.int64)
    keys = np.empty(n, dtype=np.int64)
    for i, ed in enumerate(epoch_days.tolist()):
        d = cal.date_epoch_day(ed)
        back[i] = cal.to_epoch_day(d)
        # (year, day-of-year) in calendar order; day-of-year never exceeds 1000
        keys[i] = d.year * 1000 + cal.day_of_year(d)

    failures = 0
    bad = np.nonzero(back != epoch_days)[0]
    for i in bad[:max_failures]:
        ed = int(epoch_days[i])
        print(f"FAIL round trip  {name}: {ed} -> {cal.date_epoch_day(ed)} -> {int(back[i])}")
    failures += len(bad)

    steps = np.diff(keys)
    non_monotone = np.nonzero(steps <= 0)[0]
    for i in non_monotone[:max_failures]:
        a, b = int(epoch_days[i]), int(epoch_days[i + 1])
        print(f"FAIL order       {name}: {a} -> {cal.date_epoch_day(a)}, {b} -> {cal.date_epoch_day(b)}")
    failures += len(non_monotone)

    log.debug("%s: %d samples, %d failures", name, n, failures)
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    from altcal.logging_setup import setup_logging

    p = argparse.ArgumentParser(
        description="Random epoch-day round trips and ordering checks for every calendar."
    )
    p.add_argument("--calendars", type=str, default="", help="Comma-separated calendar names (default: all).")
    p.add_argument("--N", type=int, default=2000, help="Samples per calendar.")
    p.add_argument("--start-year", type=int, default=1, help="First ISO year of the sampled span.")
    p.add_argument("--end-year", type=int, default=4000, help="Last ISO year of the sampled span.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Print at most this many failures per check.")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)
    np = _need_numpy()

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")
    lo = iso_to_epoch_day(args.start_year, 1, 1)
    hi = iso_to_epoch_day(args.end_year, 12, 31)

    total_fail = 0
    for name in parse_calendars(args.calendars):
        cal = altcal.get_calendar(name)
        days = sample_epoch_days(np, cal, lo, hi, args.N, args.seed)
        fails = check_calendar(np, name, days, max_failures=args.max_failures)
        status = "ok" if fails == 0 else f"{fails} FAIL"
        print(f"{name:20s} samples={len(days):6d}  {status}")
        total_fail += fails

    return 1 if total_fail else 0


if __name__ == "__main__":
    raise SystemExit(main())
