from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

from .core.errors import AltcalError, RangeError

_DATE_RE = re.compile(r"^-?\d{1,7}-\d{1,2}-\d{1,2}$")


def _parse_ymd(s: str) -> tuple[int, int, int]:
    """Proleptic ISO 'YYYY-MM-DD'; a leading '-' marks years before year 0."""
    if not _DATE_RE.match(s):
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}")
    sign = -1 if s.startswith("-") else 1
    y, m, d = map(int, s.lstrip("-").split("-"))
    return sign * y, m, d


def _fmt_iso(y: int, m: int, d: int) -> str:
    sign = "-" if y < 0 else ""
    return f"{sign}{abs(y):04d}-{m:02d}-{d:02d}"


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_list(argv: list[str]) -> int:
    import altcal

    p = argparse.ArgumentParser(prog="altcal list", description="List registered calendars")
    p.add_argument("--long", action="store_true", help="also print each calendar's kind and range")
    args = p.parse_args(argv)

    for name in altcal.list_calendars():
        if args.long:
            info = altcal.calendar_info(name)
            print(f"{name:20s} {info['kind']:28s} years {info['year_range']}")
        else:
            print(name)
    return 0


def cmd_info(argv: list[str]) -> int:
    import altcal

    p = argparse.ArgumentParser(prog="altcal info", description="Describe one calendar")
    p.add_argument("name")
    args = p.parse_args(argv)

    for k, v in altcal.calendar_info(args.name).items():
        print(f"{k:20s} {v}")
    return 0


def cmd_convert(argv: list[str]) -> int:
    import altcal

    p = argparse.ArgumentParser(prog="altcal convert", description="ISO date -> alternative calendars")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD (proleptic ISO; put -- before a negative year)")
    p.add_argument("--to", action="append", default=[], help="calendar name (repeatable; default: all)")
    args = p.parse_args(argv)

    names = args.to or altcal.list_calendars()
    for name in names:
        cal = altcal.get_calendar(name)
        try:
            d = altcal.from_iso(*args.date, name)
        except RangeError:
            print(f"{name:20s} (out of range)")
            continue
        print(f"{name:20s} {cal.label(d)}  [{d.year}-{d.month:02d}-{d.day:02d}]")
    return 0


def cmd_to_iso(argv: list[str]) -> int:
    import altcal

    p = argparse.ArgumentParser(prog="altcal to-iso", description="Calendar date -> ISO date")
    p.add_argument("name")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("day", type=int)
    args = p.parse_args(argv)

    d = altcal.date(args.name, args.year, args.month, args.day)
    print(_fmt_iso(*altcal.to_iso(d)))
    return 0


def cmd_accounting(argv: list[str]) -> int:
    import altcal

    p = argparse.ArgumentParser(prog="altcal accounting", description="ISO date -> configured fiscal calendar")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD (proleptic ISO; put -- before a negative year)")
    p.add_argument("--ends-on", required=True, help="weekday the fiscal year ends on, e.g. SUNDAY")
    end = p.add_mutually_exclusive_group(required=True)
    end.add_argument("--nearest-end-of", metavar="MONTH", help="year ends on the weekday nearest this month's end")
    end.add_argument("--in-last-week-of", metavar="MONTH", help="year ends in the last week of this month")
    p.add_argument(
        "--division",
        default="QUARTERS_OF_PATTERN_4_4_5_WEEKS",
        help="AccountingYearDivision name (default: QUARTERS_OF_PATTERN_4_4_5_WEEKS)",
    )
    p.add_argument("--leap-week-in-month", type=int, default=12)
    p.add_argument(
        "--starts-in-iso-year",
        action="store_true",
        help="name the fiscal year after the ISO year it starts in",
    )
    args = p.parse_args(argv)

    b = altcal.accounting_builder().ends_on(args.ends_on)
    if args.nearest_end_of:
        b.nearest_end_of(args.nearest_end_of)
    else:
        b.in_last_week_of(args.in_last_week_of)
    b.with_division(args.division).leap_week_in_month(args.leap_week_in_month)
    if args.starts_in_iso_year:
        b.accounting_year_starts_in_iso_year()
    cal = b.to_calendar()

    d = altcal.from_iso(*args.date, cal)
    print(cal.id)
    print(f"{cal.label(d)}  week {cal.get(d, 'aligned_week_of_year')} of {cal.range('aligned_week_of_year', d).maximum}")
    return 0


def main(argv: list[str] | None = None) -> int:
    from .logging_setup import setup_logging

    if argv is None:
        argv = sys.argv[1:]

    # shorthand: `altcal YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["convert", *argv]

    p = argparse.ArgumentParser(prog="altcal", description="Alternative calendar systems CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="List registered calendars")
    sub.add_parser("info", help="Describe one calendar")
    sub.add_parser("convert", help="ISO date -> alternative calendars")
    sub.add_parser("to-iso", help="Calendar date -> ISO date")
    sub.add_parser("month", help="Print a month grid of any calendar")
    sub.add_parser("accounting", help="ISO date -> configured fiscal calendar")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "leap-years", "pretty-month"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    commands = {
        "list": cmd_list,
        "info": cmd_info,
        "convert": cmd_convert,
        "to-iso": cmd_to_iso,
        "accounting": cmd_accounting,
    }
    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)

        if args.cmd == "month":
            return _run_module_main("altcal.diagnostics.pretty_month", rest)

        if args.cmd == "diag":
            tool_map = {
                "round-trip": "altcal.diagnostics.round_trip",
                "leap-years": "altcal.diagnostics.leap_years",
                "pretty-month": "altcal.diagnostics.pretty_month",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except (AltcalError, KeyError) as e:
        p.error(str(e))

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
