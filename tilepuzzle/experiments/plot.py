#!/usr/bin/env python3
import argparse, os, sys
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd
import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from tilepuzzle.experiments.analyze import load_results

METRICS = ["total_expanded", "peak_open", "time_sec"]
COLORS = {1: "#0072B2", 0: "#E69F00"}
LABEL = {1: "solvable", 0: "unsolvable (twin solved)"}


def sem(x):
    x = np.asarray(x, float)
    n = np.sum(~np.isnan(x))
    return 0.0 if n <= 1 else np.nanstd(x, ddof=1) / np.sqrt(n)


def metric_series(df: pd.DataFrame, metric: str, solvable: int):
    """(depths, means, sems) for one solvability class."""
    part = df[df["solvable"] == solvable]
    xs, ys, es = [], [], []
    for depth, grp in part.groupby("depth"):
        vals = grp[metric].to_numpy(dtype=float)
        xs.append(depth)
        ys.append(float(np.nanmean(vals)))
        es.append(sem(vals))
    return xs, ys, es


def plot_metric(ax, df: pd.DataFrame, metric: str):
    for solvable in (1, 0):
        xs, ys, es = metric_series(df, metric, solvable)
        if not xs:
            continue
        ax.errorbar(xs, ys, yerr=es, marker="o", capsize=3,
                    color=COLORS[solvable], label=LABEL[solvable])
    ax.set_xlabel("Scramble depth")
    ax.set_ylabel(metric)
    ax.set_title(f"{metric} vs depth (mean ± SEM)")
    ax.grid(True)
    ax.legend()


def save_fig(fig, outdir: Path, name: str) -> Path:
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"Saved: {path}")
    return path


def make_plots(df: pd.DataFrame, outdir: Path, base: str) -> List[Path]:
    df = df.copy()
    df["total_expanded"] = df["expanded"] + df["twin_expanded"]
    saved = []

    fig, axes = plt.subplots(1, len(METRICS), figsize=(15, 5))
    for ax, metric in zip(axes, METRICS):
        plot_metric(ax, df, metric)
    plt.tight_layout()
    saved.append(save_fig(fig, outdir, f"{base}_combined"))
    plt.close(fig)

    for metric in METRICS:
        fig, ax = plt.subplots(figsize=(8, 6))
        plot_metric(ax, df, metric)
        plt.tight_layout()
        saved.append(save_fig(fig, outdir, f"{base}_{metric}"))
        plt.close(fig)
    return saved


def main(argv=None):
    ap = argparse.ArgumentParser(description="Plot runner CSVs and save PNGs.")
    ap.add_argument("csv", nargs="+", type=Path, help="One or more CSV result files")
    ap.add_argument("--save", default="results/plots", help="Directory to save plots")
    ap.add_argument("--show", action="store_true", help="Also open interactive windows (if GUI available)")
    args = ap.parse_args(argv)

    df = load_results(args.csv)
    if df.empty:
        print("No rows to plot. Are your CSVs empty?")
        sys.exit(0)

    base = "combo" if len(args.csv) > 1 else args.csv[0].stem
    make_plots(df, Path(args.save), base)

    if args.show:
        plt.show()


if __name__ == "__main__":
    main()
