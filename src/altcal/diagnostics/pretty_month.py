from __future__ import annotations

import argparse
from datetime import date

import altcal
from altcal.core.time import epoch_day_to_iso
from altcal.engines.base import CalendarSystem

ISO_DAYS = ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su")


def dow_header(week_length: int) -> str:
    labels = ISO_DAYS if week_length == 7 else [str(i) for i in range(1, week_length + 1)]
    return " ".join(x.ljust(6) for x in labels).rstrip()


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, header: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def month_cells(cal: CalendarSystem, year: int, month: int):
    """(weeks, outside) for one month: the grid, plus days that belong to no week."""
    wl = cal.week_length
    first = cal.to_epoch_day(cal.date(year, month, 1))
    last = cal.to_epoch_day(cal.date(year, month, cal.month_length(year, month)))
    # intercalary days encoded with month <= 0 follow the month they trail
    while cal.epoch_day_range.is_valid(last + 1) and cal.date_epoch_day(last + 1).month <= 0:
        last += 1

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    outside = []
    for ed in range(first, last + 1):
        d = cal.date_epoch_day(ed)
        _, im, iday = epoch_day_to_iso(ed)
        dow = cal.day_of_week(d)
        if dow == 0:
            outside.append((d, f"{im:02d}-{iday:02d}"))
            continue
        if not wk:
            wk.extend(cell("", "") for _ in range(dow - 1))
        wk.append(cell(f"{d.day:2d}", f"{im:02d}-{iday:02d}"))
        if dow == wl:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < wl:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks, outside


def month_calendar(name: str, year: int, month: int) -> None:
    cal = altcal.get_calendar(name)
    weeks, outside = month_cells(cal, year, month)
    first = altcal.to_iso(cal.date(year, month, 1))
    title = (
        f"{name}  {cal.month_name(month)}  Y={year} M={month}   "
        f"(starts ISO {first[0]}-{first[1]:02d}-{first[2]:02d})"
    )
    print_grid(title, dow_header(cal.week_length), weeks)
    for d, iso in outside:
        print(f"  outside the week: {cal.label(d)}  (ISO {iso})")
    if outside:
        print()


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print one month of any calendar with the paired ISO dates.")
    p.add_argument("name", nargs="?", default="coptic", help="calendar name (default: coptic)")
    p.add_argument("year", type=int, nargs="?", help="calendar year (default: the one containing today)")
    p.add_argument("month", type=int, nargs="?", help="calendar month (default: the one containing today)")
    args = p.parse_args(argv)

    if args.year is None or args.month is None:
        today = altcal.from_date(date.today(), args.name)
        year = args.year if args.year is not None else today.year
        month = args.month if args.month is not None else max(today.month, 1)
    else:
        year, month = args.year, args.month

    month_calendar(args.name, year, month)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
