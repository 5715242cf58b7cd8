#!/usr/bin/env python3
import argparse, logging, sys
from pathlib import Path

from tilepuzzle.domains.loader import BoardFormatError, read_board
from tilepuzzle.search.twin_astar import Outcome, Solver, TIE_BREAKS

DEFAULT_PUZZLE = Path(__file__).resolve().parents[2] / "puzzles" / "puzzle04.txt"


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Solve one sliding-tile puzzle file with twin A*.")
    p.add_argument("file", nargs="?", type=Path, default=DEFAULT_PUZZLE,
                   help=f"Puzzle file: n followed by n*n tiles (default: {DEFAULT_PUZZLE})")
    p.add_argument("--tie_break", choices=TIE_BREAKS, default="h")
    p.add_argument("--max_expansions", type=int, default=None, help="Node expansion budget (both frontiers)")
    p.add_argument("--timeout_sec", type=float, default=None, help="Wall time budget")
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        initial = read_board(args.file)
    except (OSError, BoardFormatError) as e:
        print(f"Cannot load {args.file}: {e}", file=sys.stderr)
        return 1

    solver = Solver(initial, tie_break=args.tie_break,
                    max_expansions=args.max_expansions, timeout_sec=args.timeout_sec)

    if solver.outcome is Outcome.INCONCLUSIVE:
        print("Search budget exhausted")
        return 2
    if not solver.is_solvable():
        print("No solution possible")
        return 0

    print(f"Minimum number of moves = {solver.moves()}")
    for board in solver.solution():
        print(board)
    return 0


if __name__ == "__main__":
    sys.exit(main())
