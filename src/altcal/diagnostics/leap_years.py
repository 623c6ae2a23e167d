#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

import altcal


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "altcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "altcal[diagnostics]"') from e


def parse_calendars(s: str) -> List[str]:
    out = [x.strip() for x in s.split(",") if x.strip()]
    if not out:
        raise SystemExit("--calendars must name at least one calendar")
    return out


def leap_matrix(np, names: List[str], start_year: int, end_year: int):
    """Row per calendar, column per calendar year: 1 for leap, 0 otherwise."""
    years = np.arange(start_year, end_year + 1)
    Z = np.zeros((len(names), len(years)), dtype=float)
    for row, name in enumerate(names):
        cal = altcal.get_calendar(name)
        for col, y in enumerate(years.tolist()):
            if cal.year_range.is_valid(y) and cal.is_leap_year(y):
                Z[row, col] = 1.0
    return years, Z


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Leap-year barcode diagram across calendars.")
    p.add_argument("--start-year", type=int, default=1960)
    p.add_argument("--end-year", type=int, default=2060)
    p.add_argument("--out", default="leap_years.png")
    p.add_argument("--title", default="Leap years (calendar year numbers)")
    p.add_argument(
        "--calendars",
        default="coptic,julian,pax,symmetry010,international_fixed,retail454",
        help="Comma list of calendars to plot.",
    )
    p.add_argument("--cell-edge", default="0.88", help="Cell border color (matplotlib gray string).")
    p.add_argument("--cell-lw", type=float, default=0.6, help="Cell border line width.")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    start_year, end_year = args.start_year, args.end_year
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")

    names = parse_calendars(args.calendars)
    years, Z = leap_matrix(np, names, start_year, end_year)

    fig, ax = plt.subplots(figsize=(16, 0.6 * len(names) + 1.5))
    x_edges = np.arange(start_year - 0.5, end_year + 1.5, 1.0)
    y_edges = np.arange(-0.5, len(names) + 0.5, 1.0)
    ax.pcolormesh(
        x_edges,
        y_edges,
        Z,
        shading="flat",
        cmap="Greys",
        vmin=0, vmax=1.25,
        edgecolors=args.cell_edge,
        linewidth=float(args.cell_lw),
    )

    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.set_ylim(len(names) - 0.5, -0.5)
    ax.tick_params(axis="both", which="both", length=0)
    ax.set_yticks(range(len(names)))
    ax.set_yticklabels(names)
    step = max(1, (end_year - start_year) // 20)
    xt = list(range(start_year, end_year + 1, step))
    ax.set_xticks(xt)
    ax.set_xticklabels([str(y) for y in xt])
    ax.set_xlabel("calendar year")

    counts = Z.sum(axis=1).astype(int)
    for row, c in enumerate(counts.tolist()):
        ax.text(end_year + 1, row, f"{c}", va="center", fontsize=8)

    ax.set_title(args.title)
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
