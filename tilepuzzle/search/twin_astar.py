from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from time import perf_counter
import heapq
import itertools
import logging

from tilepuzzle.domains.board import Board

logger = logging.getLogger(__name__)

TIE_BREAKS = ("h", "g", "fifo", "lifo")


class Outcome(Enum):
    UNDECIDED = "undecided"
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    INCONCLUSIVE = "inconclusive"


@dataclass(eq=False)
class SearchNode:
    board: Board
    parent: Optional["SearchNode"] = None
    moves: int = 0
    priority: int = field(init=False)

    def __post_init__(self):
        self.priority = self.moves + self.board.manhattan()


def reconstruct_path(node: Optional[SearchNode]) -> List[Board]:
    path: List[Board] = []
    while node is not None:
        path.append(node.board)
        node = node.parent
    path.reverse()
    return path


@dataclass
class FrontierStats:
    expanded: int = 0
    generated: int = 0
    pruned: int = 0
    peak_open: int = 0


@dataclass
class SearchStats:
    primary: FrontierStats
    twin: FrontierStats
    time: float = 0.0

    @property
    def expanded(self) -> int:
        return self.primary.expanded + self.twin.expanded

    @property
    def generated(self) -> int:
        return self.primary.generated + self.twin.generated


class Frontier:
    """One A* instance: min-heap of search nodes rooted at a single board."""

    def __init__(self, root: Board, tie_break: str = "h"):
        self.tie_break = tie_break
        self.stats = FrontierStats()
        self.last: Optional[SearchNode] = None
        self._heap: List[Tuple[Tuple[int, int, int], int, SearchNode]] = []
        self._counter = itertools.count()
        self._push(SearchNode(root))

    def __len__(self) -> int:
        return len(self._heap)

    def _priority_tuple(self, node: SearchNode, ctr: int) -> Tuple[int, int, int]:
        f, g = node.priority, node.moves
        if self.tie_break == "g":    return (f, -g, ctr)
        if self.tie_break == "fifo": return (f, 0, ctr)
        if self.tie_break == "lifo": return (f, 0, -ctr)
        return (f, f - g, ctr)

    def _push(self, node: SearchNode) -> None:
        ctr = next(self._counter)
        heapq.heappush(self._heap, (self._priority_tuple(node, ctr), ctr, node))
        self.stats.peak_open = max(self.stats.peak_open, len(self._heap))

    def goal_on_top(self) -> bool:
        """True if the next node step() would pop is a goal."""
        return self._heap[0][2].board.is_goal()

    def step(self) -> bool:
        """Pop the best node. Returns True if it is a goal, otherwise expands it."""
        _, _, node = heapq.heappop(self._heap)
        self.last = node
        if node.board.is_goal():
            return True

        self.stats.expanded += 1
        prev = node.parent.board if node.parent is not None else None
        for nb in node.board.neighbors():
            # never undo the move that produced this node
            if prev is not None and nb == prev:
                self.stats.pruned += 1
                continue
            self._push(SearchNode(nb, node, node.moves + 1))
            self.stats.generated += 1
        return False


class Solver:
    """
    A* on a board and on its twin, stepped in lockstep.

    Exactly one of the two boards is solvable, so whichever frontier pops a
    goal first decides the outcome. Priorities use the Manhattan distance
    only. Successors equal to the parent's board are skipped; no closed set
    is kept, so every inserted node stays in memory for the whole run.

    max_expansions / timeout_sec bound the run; hitting either leaves the
    outcome INCONCLUSIVE.
    """

    def __init__(
        self,
        initial: Board,
        tie_break: str = "h",
        max_expansions: int | None = None,
        timeout_sec: float | None = None,
    ):
        if initial is None or not isinstance(initial, Board):
            raise ValueError(f"Solver needs an initial Board, got {initial!r}")
        if tie_break not in TIE_BREAKS:
            raise ValueError(f"unknown tie_break {tie_break!r}, expected one of {TIE_BREAKS}")

        self.initial = initial
        self.tie_break = tie_break
        self._outcome = Outcome.UNDECIDED
        self._solution_node: Optional[SearchNode] = None

        t0 = perf_counter()
        twin = initial.twin()
        primary = Frontier(initial, tie_break)
        secondary = Frontier(twin, tie_break)

        def exhausted() -> bool:
            # popping a goal is not an expansion, so only checked before expanding
            if max_expansions is not None and \
                    primary.stats.expanded + secondary.stats.expanded >= max_expansions:
                return True
            return timeout_sec is not None and (perf_counter() - t0) > timeout_sec

        while self._outcome is Outcome.UNDECIDED:
            if primary.goal_on_top():
                primary.step()
                self._solution_node = primary.last
                self._outcome = Outcome.SOLVED
            elif exhausted():
                self._outcome = Outcome.INCONCLUSIVE
            else:
                primary.step()
                if secondary.goal_on_top():
                    secondary.step()
                    # kept for inspection only; never exposed as a solution
                    self._solution_node = primary.last
                    self._outcome = Outcome.UNSOLVABLE
                elif exhausted():
                    self._outcome = Outcome.INCONCLUSIVE
                else:
                    secondary.step()

        self._stats = SearchStats(primary.stats, secondary.stats, perf_counter() - t0)

        if self._outcome is Outcome.INCONCLUSIVE:
            logger.warning(
                f"Search budget exhausted after {self._stats.expanded} expansions "
                f"({self._stats.time:.3f}s) on {initial.dimension()}x{initial.dimension()} board"
            )
        else:
            logger.debug(
                f"{self._outcome.value}: moves={self.moves()} expanded={self._stats.expanded} "
                f"generated={self._stats.generated} time={self._stats.time:.4f}s"
            )

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def stats(self) -> SearchStats:
        return self._stats

    def is_solvable(self) -> bool:
        return self._outcome is Outcome.SOLVED

    def moves(self) -> int:
        """Min number of moves to solve the initial board; -1 if not solved."""
        if self._outcome is not Outcome.SOLVED:
            return -1
        return self._solution_node.moves

    def solution(self) -> Optional[List[Board]]:
        """Boards of a shortest solution, initial board first; None if not solved."""
        if self._outcome is not Outcome.SOLVED:
            return None
        return reconstruct_path(self._solution_node)

    def as_record(self) -> Dict[str, Any]:
        """Flat result row, in the shape the experiment runner writes."""
        p, t = self._stats.primary, self._stats.twin
        return {
            "algorithm": "twin A*",
            "tie_break": self.tie_break,
            "outcome": self._outcome.value,
            "moves": self.moves(),
            "expanded": p.expanded,
            "generated": p.generated,
            "pruned": p.pruned,
            "peak_open": p.peak_open,
            "twin_expanded": t.expanded,
            "twin_generated": t.generated,
            "twin_peak_open": t.peak_open,
            "time": self._stats.time,
        }
