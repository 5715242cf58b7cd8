#!/usr/bin/env python3
import argparse, os
from pathlib import Path
from typing import List
import matplotlib
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from tilepuzzle.domains.board import Board, scramble
from tilepuzzle.domains.loader import read_board
from tilepuzzle.search.twin_astar import Solver


def draw_board(board: Board, out_path: Path, title: str = ""):
    n = board.dimension()
    plt.figure(figsize=(3,3))
    ax = plt.gca()
    ax.set_xlim(0, n); ax.set_ylim(0, n)
    ax.set_xticks([]); ax.set_yticks([]); ax.invert_yaxis()
    # grid
    for i in range(n+1):
        ax.plot([0,n],[i,i], linewidth=1)
        ax.plot([i,i],[0,n], linewidth=1)
    # tiles
    for r in range(n):
        for c in range(n):
            t = board.tile_at(r, c)
            if t == 0: continue
            ax.text(c+0.5, r+0.6, str(t), ha="center", va="center", fontsize=16)
    if title:
        ax.set_title(title, fontsize=9)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()


def save_path_frames(path: List[Board], outdir: Path) -> List[Path]:
    frames = []
    for i, b in enumerate(path):
        out = outdir / f"step_{i:03d}.png"
        draw_board(b, out, title=f"move {i}  h={b.manhattan()}")
        frames.append(out)
    return frames


def main(argv=None):
    p = argparse.ArgumentParser(description="Solve one instance and save board images along the path.")
    p.add_argument("--file", type=Path, default=None, help="Puzzle file (otherwise a scrambled board)")
    p.add_argument("--n", type=int, default=3)
    p.add_argument("--depth", type=int, default=10)
    p.add_argument("--seed", type=int, default=1)
    p.add_argument("--outdir", default="results/figs/example_path")
    args = p.parse_args(argv)

    start = read_board(args.file) if args.file else scramble(args.n, args.depth, args.seed)
    solver = Solver(start)
    path = solver.solution()

    if not path:
        print(f"No path ({solver.outcome.value}).")
        return

    outdir = Path(args.outdir)
    save_path_frames(path, outdir)
    print(f"Saved {len(path)} frames to {outdir}")


if __name__ == "__main__":
    main()
