#!/usr/bin/env python3
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import calzh
from calzh.core.errors import InconsistencyError
from calzh.engines.date_mapper import first_month_index


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "calzh[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "calzh[diagnostics]"') from e


@dataclass(frozen=True)
class Style:
    label: str
    engine: str
    marker: str
    size: float
    hollow: bool
    color: str = "0.15"
    lw: float = 1.2
    alpha: float = 0.95


DEFAULT_STYLES: Dict[str, Style] = {
    "china": Style("China (UTC+8)", "china", marker="o", size=22, hollow=False),
    "china-first": Style("China, first-candidate rule", "china-first", marker="o", size=22, hollow=False),
    "korea": Style("Korea (UTC+9)", "korea", marker="o", size=95, hollow=True),
    "vietnam": Style("Vietnam (UTC+7)", "vietnam", marker="^", size=90, hollow=True),
}


def parse_engines(s: str) -> List[str]:
    out = [x.strip() for x in s.split(",") if x.strip()]
    if not (1 <= len(out) <= 3):
        raise SystemExit("--engines must contain 1 to 3 comma-separated engines")
    return out


def leap_months(engine: str, start_year: int, end_year: int) -> Tuple[List[Tuple[int, int]], List[int]]:
    """
    (civil_year, leap month number) pairs for every context in the range,
    plus the context years whose leap month could not be decided.
    """
    found: List[Tuple[int, int]] = []
    undecided: List[int] = []
    for Y in range(start_year, end_year + 1):
        try:
            ctx = calzh.lunar_year(Y, engine=engine)
        except InconsistencyError:
            undecided.append(Y)
            continue
        split = first_month_index(ctx)
        for i, m in enumerate(ctx.months):
            if m.is_leap:
                found.append((Y + 1 if i >= split else Y, m.ordinal))
    return found, undecided


def build_points(np, engine: str, start_year: int, end_year: int):
    pairs, undecided = leap_months(engine, start_year - 1, end_year)
    pairs = [(y, m) for y, m in pairs if start_year <= y <= end_year]
    for Y in undecided:
        print(f"{engine}: leap month of context {Y} is ambiguous; skipped")
    return np.array([y for y, _ in pairs], dtype=int), np.array([m for _, m in pairs], dtype=int)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Leap-month barcode diagram across civil offsets (square cell grid only)."
    )
    p.add_argument("--start-year", type=int, default=1960)
    p.add_argument("--end-year", type=int, default=2030)
    p.add_argument("--out", default="leapmonth_barcode.png")
    p.add_argument("--title", default="Leap month pattern across calendars")
    p.add_argument(
        "--engines",
        default="china,korea,vietnam",
        help="Comma list of 1-3 engines to plot (default: china,korea,vietnam).",
    )
    p.add_argument(
        "--labels",
        choices=("none", "years", "months", "both"),
        default="both",
        help="Which axis labels to show (tick marks are always suppressed).",
    )
    p.add_argument("--year-step", type=int, default=5, help="If year labels are shown, label every k years.")
    p.add_argument("--cell-edge", default="0.88", help="Cell border color (matplotlib gray string).")
    p.add_argument("--cell-lw", type=float, default=0.6, help="Cell border line width.")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()
    from matplotlib.colors import ListedColormap

    start_year, end_year = args.start_year, args.end_year
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")

    styles: List[Style] = []
    for e in parse_engines(args.engines):
        if e not in DEFAULT_STYLES:
            raise SystemExit(f"Unknown engine '{e}'. Known: {sorted(DEFAULT_STYLES.keys())}")
        styles.append(DEFAULT_STYLES[e])

    fig, ax = plt.subplots(figsize=(16, 3.6))

    x_edges = np.arange(start_year - 0.5, end_year + 1.5, 1.0)
    y_edges = np.arange(0.5, 13.5, 1.0)
    Z = np.zeros((12, end_year - start_year + 1), dtype=float)
    ax.pcolormesh(
        x_edges,
        y_edges,
        Z,
        shading="flat",
        cmap=ListedColormap(["white"]),
        vmin=0, vmax=1,
        edgecolors=args.cell_edge,
        linewidth=float(args.cell_lw),
        antialiased=True,
        zorder=0,
    )

    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.set_ylim(0.5, 12.5)
    ax.grid(False)
    ax.tick_params(axis="both", which="both", length=0)

    if args.labels in ("years", "both"):
        xt = list(range(start_year, end_year + 1, max(1, int(args.year_step))))
        ax.set_xticks(xt)
        ax.set_xticklabels([str(y) for y in xt])
        ax.set_xlabel("Civil lunar year")
    else:
        ax.set_xticks([])
    if args.labels in ("months", "both"):
        ax.set_yticks(list(range(1, 13)))
        ax.set_yticklabels([str(m) for m in range(1, 13)])
        ax.set_ylabel("Leap month number")
    else:
        ax.set_yticks([])

    for st in styles:
        x, m = build_points(np, st.engine, start_year, end_year)
        if st.hollow:
            ax.scatter(x, m, s=st.size, marker=st.marker, facecolors="none", edgecolors=st.color,
                       linewidths=st.lw, alpha=st.alpha, label=st.label, zorder=5)
        else:
            ax.scatter(x, m, s=st.size, marker=st.marker, c=st.color,
                       linewidths=0.0, alpha=st.alpha, label=st.label, zorder=5)

    ax.set_title(args.title)
    ax.legend(loc="center left", bbox_to_anchor=(1.01, 0.5), frameon=False)
    fig.tight_layout()
    fig.savefig(args.out, dpi=250)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
