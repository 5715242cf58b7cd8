#!/usr/bin/env python3
"""Runner -> summary -> plots for the 8- and 15-puzzle, all under one results directory."""
import argparse
from pathlib import Path
from typing import List, Sequence, Tuple

from tilepuzzle.experiments import analyze, plot, runner

# (csv stem, runner flags)
PLAN: List[Tuple[str, List[str]]] = [
    ("p8_twin", ["--n", "3", "--depths", "6", "10", "14", "18", "--per_depth", "10",
                 "--include_unsolvable", "--check_bfs"]),
    ("p15_twin", ["--n", "4", "--depths", "6", "10", "14", "--per_depth", "10",
                  "--include_unsolvable", "--timeout_sec", "30"]),
]


def run_pipeline(outdir: Path, plan: Sequence[Tuple[str, List[str]]] = PLAN) -> List[Path]:
    outdir.mkdir(parents=True, exist_ok=True)
    csvs = []
    for name, flags in plan:
        print(f"\n=== {name} ===")
        out = outdir / f"{name}.csv"
        runner.main(flags + ["--out", str(out)])
        csvs.append(out)

    summary = outdir / "summary.csv"
    analyze.main([str(c) for c in csvs] + ["--out", str(summary)])
    for c in csvs:
        plot.main([str(c), "--save", str(outdir / "plots")])
    return csvs + [summary]


def main(argv=None):
    ap = argparse.ArgumentParser(description="Run the default twin A* experiment plan.")
    ap.add_argument("--outdir", type=Path, default=Path("results"))
    args = ap.parse_args(argv)
    run_pipeline(args.outdir)


if __name__ == "__main__":
    main()
