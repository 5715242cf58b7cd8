import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from tilepuzzle.domains.board import Board

PUZZLES = ROOT / "puzzles"


def random_board(n: int, rng: random.Random) -> Board:
    """Uniformly random permutation; about half of these are unsolvable."""
    vals = list(range(n * n))
    rng.shuffle(vals)
    return Board([vals[r * n:(r + 1) * n] for r in range(n)])


def changed_cells(a: Board, b: Board):
    n = a.dimension()
    return [(r, c) for r in range(n) for c in range(n) if a.tile_at(r, c) != b.tile_at(r, c)]


def is_single_slide(a: Board, b: Board) -> bool:
    """True if b is a with the blank swapped with one orthogonally adjacent tile."""
    cells = changed_cells(a, b)
    if len(cells) != 2:
        return False
    (r1, c1), (r2, c2) = cells
    if abs(r1 - r2) + abs(c1 - c2) != 1:
        return False
    return 0 in (a.tile_at(r1, c1), a.tile_at(r2, c2))


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def goal3():
    return Board.goal(3)


@pytest.fixture
def four_move_board():
    """3x3 board four moves from the goal."""
    return Board([[0, 1, 3], [4, 2, 5], [7, 8, 6]])


@pytest.fixture
def unsolvable3():
    """Goal with the last two tiles exchanged."""
    return Board([[1, 2, 3], [4, 5, 6], [8, 7, 0]])
