#!/usr/bin/env python3
"""
Offset of the true new moons found by the engine from Meeus' mean new moon,
with a quadratic fit over the requested years.

The offset is dominated by the periodic equation-of-centre terms (about
+-14 h); the fit exposes any secular drift of the truncated theory and of
the ΔT model relative to the mean lunation.
"""
from __future__ import annotations

import argparse
import math
from typing import List, Optional

from calzh.core.types import Instant, TimeScale
from calzh.engines.new_moon import true_new_moon
from calzh.reference.time_scales import to_ut


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('This script needs numpy. Install: pip install "calzh[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('This script needs matplotlib. Install: pip install "calzh[diagnostics]"') from e


def mean_new_moon_tt(k: int) -> float:
    """JDE of the mean new moon of lunation k (k=0 near 2000-01-06), Meeus ch. 49."""
    T = k / 1236.85
    return (
        2451550.09766
        + 29.530588861 * k
        + 0.00015437 * T * T
        - 0.000000150 * T ** 3
        + 0.00000000073 * T ** 4
    )


def offsets_hours(year_start: int, year_end: int):
    """(year coordinate, true - mean hours) for every lunation in the range."""
    k0 = math.floor((year_start - 2000) * 12.3685)
    k1 = math.ceil((year_end + 1 - 2000) * 12.3685)
    xs: List[float] = []
    ys: List[float] = []
    for k in range(k0, k1):
        mean_ut = to_ut(Instant(mean_new_moon_tt(k), TimeScale.TT))
        true_ut = true_new_moon(mean_ut)
        xs.append(2000.0 + (mean_ut.jd - 2451544.5) / 365.2425)
        ys.append(24.0 * true_ut.days_since(mean_ut))
    return xs, ys


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="True vs mean new moon offsets with a quadratic drift fit.")
    p.add_argument("--year-start", type=int, default=1900)
    p.add_argument("--year-end", type=int, default=2100)
    p.add_argument("--out-png", default="", help="Write a scatter plot here (needs matplotlib)")
    args = p.parse_args(argv)

    np = _need_numpy()

    if args.year_end < args.year_start:
        raise SystemExit("--year-end must be >= --year-start")

    xs, ys = offsets_hours(args.year_start, args.year_end)
    x = np.array(xs, dtype=float)
    y = np.array(ys, dtype=float)
    c2, c1, c0 = np.polyfit(x, y, 2)

    print(f"Lunations: {len(y)}  ({args.year_start}..{args.year_end})")
    print(f"Offset range: {y.min():+.2f} h .. {y.max():+.2f} h, rms {float(np.sqrt(np.mean(y * y))):.2f} h")
    print(f"Drift fit: offset_h = {c2:.6e}*Y^2 + {c1:.6e}*Y + {c0:.3f}")
    print(f"  linear drift: {c1 * 100.0:.3f} h/century")

    if args.out_png:
        plt = _need_matplotlib()
        plt.figure(figsize=(12, 6))
        plt.scatter(x, y, s=2.0, alpha=0.5, marker=".", linewidths=0, label="true - mean")
        grid = np.linspace(float(x.min()), float(x.max()), 400)
        plt.plot(grid, c2 * grid**2 + c1 * grid + c0, linewidth=2, label="quadratic fit")
        plt.xlabel("Year")
        plt.ylabel("Offset hours (true - mean new moon)")
        plt.grid(True, alpha=0.3)
        plt.legend()
        plt.tight_layout()
        plt.savefig(args.out_png, dpi=200)
        print(f"Saved {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
