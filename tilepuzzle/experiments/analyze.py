#!/usr/bin/env python3
import argparse
from pathlib import Path
from typing import Iterable

import pandas as pd

REQUIRED = ("n", "depth", "solvable", "outcome", "moves", "expanded", "twin_expanded", "peak_open", "time_sec")


def load_results(paths: Iterable[Path]) -> pd.DataFrame:
    """Concatenate runner CSVs; rows missing a required column are rejected up front."""
    frames = []
    for p in paths:
        df = pd.read_csv(p)
        missing = [c for c in REQUIRED if c not in df.columns]
        if missing:
            raise ValueError(f"{p}: missing columns {missing}")
        df["file"] = Path(p).name
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=list(REQUIRED) + ["file"])
    return pd.concat(frames, ignore_index=True)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per (n, solvable, depth): run count, mean/median/std of effort, inconclusive count."""
    df = df.copy()
    df["total_expanded"] = df["expanded"] + df["twin_expanded"]
    df["inconclusive"] = (df["outcome"] == "inconclusive").astype(int)
    summary = (
        df.groupby(["n", "solvable", "depth"])
          .agg(runs=("outcome", "size"),
               moves_mean=("moves", "mean"),
               expanded_mean=("total_expanded", "mean"),
               expanded_median=("total_expanded", "median"),
               expanded_std=("total_expanded", "std"),
               peak_open_max=("peak_open", "max"),
               time_mean=("time_sec", "mean"),
               time_std=("time_sec", "std"),
               inconclusive=("inconclusive", "sum"))
          .reset_index()
    )
    # std of a single run is undefined; report 0 like the single-sample case elsewhere
    return summary.fillna({"expanded_std": 0.0, "time_std": 0.0})


def print_summary(summary: pd.DataFrame) -> None:
    print("=" * 80)
    print("Twin A* effort by depth")
    print("=" * 80)
    for (n, solvable), part in summary.groupby(["n", "solvable"]):
        label = "solvable" if solvable else "unsolvable"
        print(f"\n{n}x{n} {label}:")
        print("-" * 60)
        print(f"{'Depth':<8} {'Runs':<6} {'Moves':<8} {'Expanded':<12} {'Peak open':<12} {'Time (s)':<10}")
        for _, r in part.iterrows():
            print(f"{int(r['depth']):<8} {int(r['runs']):<6} {r['moves_mean']:<8.2f} "
                  f"{r['expanded_mean']:<12.1f} {int(r['peak_open_max']):<12} {r['time_mean']:<10.4f}")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Summarize runner CSVs by board size, solvability and depth.")
    ap.add_argument("csv", nargs="+", type=Path, help="One or more CSV result files")
    ap.add_argument("--out", type=Path, default=Path("results/summary.csv"))
    args = ap.parse_args(argv)

    df = load_results(args.csv)
    if df.empty:
        print("No rows to summarize. Are your CSVs empty?")
        return
    summary = summarize(df)
    print_summary(summary)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(args.out, index=False)
    print(f"\nSaved: {args.out}")


if __name__ == "__main__":
    main()
