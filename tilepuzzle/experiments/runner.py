from __future__ import annotations
import argparse, csv, logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from tilepuzzle.domains.board import Board, is_solvable, scramble
from tilepuzzle.search.bfs import bfs
from tilepuzzle.search.twin_astar import Solver, TIE_BREAKS

logger = logging.getLogger(__name__)

HEADER = [
    "algorithm", "n", "depth", "seed", "solvable", "outcome", "moves",
    "expanded", "generated", "pruned", "peak_open",
    "twin_expanded", "twin_generated", "twin_peak_open",
    "time_sec", "tie_break", "bfs_moves",
]


@dataclass
class Instance:
    seed: int
    depth: int
    board: Board
    solvable: int


def generate_instances(n: int, depths: List[int], per_depth: int, start_seed: int = 0,
                       include_unsolvable: bool = False) -> List[Instance]:
    """Scrambled boards per depth; with include_unsolvable each is followed by its twin."""
    out: List[Instance] = []
    seed = start_seed
    for d in depths:
        for _ in range(per_depth):
            b = scramble(n, d, seed)
            if not is_solvable(b):
                raise RuntimeError(f"scramble(n={n}, depth={d}, seed={seed}) is unsolvable. Check parity logic.")
            out.append(Instance(seed=seed, depth=d, board=b, solvable=1))
            if include_unsolvable:
                out.append(Instance(seed=seed, depth=d, board=b.twin(), solvable=0))
            seed += 1
    return out


def run_instance(inst: Instance, tie_break: str = "h", max_expansions: Optional[int] = None,
                 timeout_sec: Optional[float] = None, check_bfs: bool = False) -> Dict[str, Any]:
    solver = Solver(inst.board, tie_break=tie_break,
                    max_expansions=max_expansions, timeout_sec=timeout_sec)
    rec = solver.as_record()
    row: Dict[str, Any] = {
        "algorithm": rec["algorithm"], "n": inst.board.dimension(), "depth": inst.depth,
        "seed": inst.seed, "solvable": inst.solvable, "outcome": rec["outcome"],
        "moves": rec["moves"], "expanded": rec["expanded"], "generated": rec["generated"],
        "pruned": rec["pruned"], "peak_open": rec["peak_open"],
        "twin_expanded": rec["twin_expanded"], "twin_generated": rec["twin_generated"],
        "twin_peak_open": rec["twin_peak_open"], "time_sec": f"{rec['time']:.6f}",
        "tie_break": rec["tie_break"], "bfs_moves": "",
    }
    # BFS on an unsolvable board would sweep the whole reachable half of the state space
    if check_bfs and inst.solvable:
        ref = bfs(inst.board, timeout_sec=timeout_sec)
        row["bfs_moves"] = ref["moves"]
        if ref["termination"] == "ok" and ref["moves"] != rec["moves"]:
            logger.error(f"seed={inst.seed} depth={inst.depth}: twin A* found {rec['moves']} moves, BFS {ref['moves']}")
    return row


def write_rows(rows: List[Dict[str, Any]], out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=HEADER)
        w.writeheader()
        w.writerows(rows)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Twin A* experiment runner over scrambled N-puzzles")
    ap.add_argument("--n", type=int, default=3, help="Board size (N×N)")
    ap.add_argument("--depths", type=int, nargs="+", default=[6, 10, 14, 18])
    ap.add_argument("--per_depth", type=int, default=10)
    ap.add_argument("--seed", type=int, default=0, help="First scramble seed")
    ap.add_argument("--include_unsolvable", action="store_true", help="Also run the twin of every instance")
    ap.add_argument("--tie_break", choices=TIE_BREAKS, default="h")
    ap.add_argument("--max_expansions", type=int, default=None, help="Per-instance expansion budget")
    ap.add_argument("--timeout_sec", type=float, default=None, help="Per-instance wall time")
    ap.add_argument("--check_bfs", action="store_true", help="Cross-check move counts with BFS (small boards)")
    ap.add_argument("--out", type=Path, default=Path("results/last_run.csv"))
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if args.n < 2:
        ap.error("--n must be at least 2")

    insts = generate_instances(args.n, args.depths, args.per_depth, args.seed, args.include_unsolvable)
    rows = []
    for k, inst in enumerate(insts, start=1):
        row = run_instance(inst, tie_break=args.tie_break, max_expansions=args.max_expansions,
                           timeout_sec=args.timeout_sec, check_bfs=args.check_bfs)
        logger.info(f"[{k}/{len(insts)}] depth={inst.depth} seed={inst.seed} solvable={inst.solvable} "
                    f"-> {row['outcome']} moves={row['moves']} expanded={row['expanded']}")
        rows.append(row)

    write_rows(rows, args.out)
    print(f"Wrote {args.out} ({len(insts)} instances)")


if __name__ == "__main__":
    main()
