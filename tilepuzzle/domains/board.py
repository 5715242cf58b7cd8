from __future__ import annotations
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple
import random

from tilepuzzle.heuristics.hamming import hamming as _hamming, tile_mismatch
from tilepuzzle.heuristics.manhattan import manhattan as _manhattan, tile_distance

State = Tuple[int, ...]
Cell = Tuple[int, int]


class UnsupportedOperation(RuntimeError):
    """Raised when an operation is undefined for the board's dimension."""


@lru_cache(maxsize=None)
def _neighbor_table(n: int) -> Dict[int, Tuple[int, ...]]:
    """Flat indices the blank can move to from each cell, ordered left, right, up, down."""
    nei: Dict[int, Tuple[int, ...]] = {}
    for i in range(n * n):
        r, c = divmod(i, n)
        moves = []
        if c > 0:       moves.append(i - 1)
        if c < n - 1:   moves.append(i + 1)
        if r > 0:       moves.append(i - n)
        if r < n - 1:   moves.append(i + n)
        nei[i] = tuple(moves)
    return nei


class Board:
    """
    Immutable N×N sliding-tile board (0 is the blank).

    Tiles are kept row-major in a flat tuple. Hamming and Manhattan totals are
    memoized; boards derived through swap() receive them from the parent's
    totals plus the delta of the two swapped cells, so expanding a node never
    rescans the grid.
    """
    __slots__ = ("_n", "_s", "_hamming", "_manhattan", "_blank")

    def __init__(self, tiles: Sequence[Sequence[int]]):
        rows = [tuple(int(v) for v in row) for row in tiles]
        n = len(rows)
        if n < 1 or any(len(row) != n for row in rows):
            raise ValueError(f"board must be square, got row lengths {[len(r) for r in rows]}")
        s = tuple(v for row in rows for v in row)
        if sorted(s) != list(range(n * n)):
            raise ValueError(f"tiles must be a permutation of 0..{n * n - 1}")
        self._n = n
        self._s: State = s
        self._hamming: Optional[int] = None
        self._manhattan: Optional[int] = None
        self._blank: Optional[int] = None

    @classmethod
    def _derived(cls, n: int, s: State, hamming: Optional[int],
                 manhattan: Optional[int], blank: Optional[int]) -> Board:
        b = cls.__new__(cls)
        b._n = n
        b._s = s
        b._hamming = hamming
        b._manhattan = manhattan
        b._blank = blank
        return b

    @classmethod
    def goal(cls, n: int) -> Board:
        """The solved n×n board."""
        if n < 1:
            raise ValueError(f"dimension must be positive, got {n}")
        return cls._derived(n, tuple(range(1, n * n)) + (0,), 0, 0, n * n - 1)

    # ---------- accessors ----------
    def dimension(self) -> int:
        return self._n

    @property
    def tiles(self) -> Tuple[Tuple[int, ...], ...]:
        n = self._n
        return tuple(self._s[r * n:(r + 1) * n] for r in range(n))

    def tile_at(self, row: int, col: int) -> int:
        return self._s[self._index((row, col))]

    def blank_position(self) -> Cell:
        return divmod(self._blank_index(), self._n)

    def _blank_index(self) -> int:
        if self._blank is None:
            self._blank = self._s.index(0)
        return self._blank

    def _index(self, cell: Cell) -> int:
        r, c = cell
        if not (0 <= r < self._n and 0 <= c < self._n):
            raise IndexError(f"cell {cell} outside a {self._n}x{self._n} board")
        return r * self._n + c

    # ---------- heuristics ----------
    def hamming(self) -> int:
        """Number of non-blank tiles out of place."""
        if self._hamming is None:
            self._hamming = _hamming(self._s)
        return self._hamming

    def manhattan(self) -> int:
        """Sum of Manhattan distances between tiles and their goal cells."""
        if self._manhattan is None:
            self._manhattan = _manhattan(self._s, self._n)
        return self._manhattan

    def is_goal(self) -> bool:
        return self.hamming() == 0

    # ---------- transitions ----------
    def neighbors(self) -> List[Board]:
        """Boards one blank move away, in the order left, right, up, down."""
        z = self._blank_index()
        return [self._swap_index(z, j) for j in _neighbor_table(self._n)[z]]

    def twin(self) -> Board:
        """
        Board obtained by exchanging two fixed non-blank tiles.

        Uses the first two cells of the top row, or of the second row when
        the blank sits in one of them. Exactly one of a board and its twin
        is solvable.
        """
        if self._n < 2:
            raise UnsupportedOperation(f"twin() needs dimension >= 2, got {self._n}")
        row = 1 if self._blank_index() in (0, 1) else 0
        return self.swap((row, 0), (row, 1))

    def swap(self, a: Cell, b: Cell) -> Board:
        """New board with the tiles at cells `a` and `b` exchanged."""
        return self._swap_index(self._index(a), self._index(b))

    def _swap_index(self, i: int, j: int) -> Board:
        n, s = self._n, self._s
        ti, tj = s[i], s[j]
        lst = list(s)
        lst[i], lst[j] = tj, ti

        h = (self.hamming()
             - tile_mismatch(ti, i) - tile_mismatch(tj, j)
             + tile_mismatch(tj, i) + tile_mismatch(ti, j))
        m = (self.manhattan()
             - tile_distance(ti, i, n) - tile_distance(tj, j, n)
             + tile_distance(tj, i, n) + tile_distance(ti, j, n))

        if ti == 0:
            blank = j
        elif tj == 0:
            blank = i
        else:
            blank = self._blank
        return Board._derived(n, tuple(lst), h, m, blank)

    # ---------- value semantics ----------
    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Board):
            return NotImplemented
        return self._n == other._n and self._s == other._s

    def __hash__(self) -> int:
        return hash((self._n, self._s))

    def __repr__(self) -> str:
        return f"Board({self.tiles!r})"

    def __str__(self) -> str:
        width = len(str(self._n * self._n - 1))
        lines = [str(self._n)]
        for row in self.tiles:
            lines.append(" ".join(f"{t:>{width}}" for t in row))
        return "\n".join(lines) + "\n"


# ---------- instance generation ----------
def scramble(n: int, depth: int, seed: int) -> Board:
    """Depth-limited random walk from the goal with no immediate backtrack."""
    if n < 2:
        raise ValueError(f"scramble needs dimension >= 2, got {n}")
    rng = random.Random(seed)
    b = Board.goal(n)
    nei = _neighbor_table(n)
    last_blank = None
    for _ in range(depth):
        z = b._blank_index()
        cand = [j for j in nei[z] if j != last_blank]
        j = rng.choice(cand)
        b = b._swap_index(z, j)
        last_blank = z
    return b


def is_solvable(board: Board) -> bool:
    """Solvability rules:
       - N odd: inversions must be even
       - N even: (inversions + blank_row_from_bottom) must be ODD
         (row count is 1-based from the bottom)
    """
    arr = [x for x in board._s if x != 0]
    inv = 0
    for i in range(len(arr)):
        for j in range(i + 1, len(arr)):
            if arr[i] > arr[j]:
                inv += 1
    n = board.dimension()
    if n % 2 == 1:
        return (inv % 2) == 0
    blank_row_from_bottom = n - board.blank_position()[0]
    return ((inv + blank_row_from_bottom) % 2) == 1
