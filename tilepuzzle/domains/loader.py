"""
Text loader for puzzle files.

Format: an integer n followed by n*n integers in row-major order, separated
by any whitespace. 0 is the blank. Example::

    3
     0  1  3
     4  2  5
     7  8  6
"""
from __future__ import annotations
from pathlib import Path
from typing import List, Union

from tilepuzzle.domains.board import Board


class BoardFormatError(ValueError):
    """Malformed puzzle text."""


def parse_board(text: str) -> Board:
    tokens = text.split()
    if not tokens:
        raise BoardFormatError("empty puzzle definition")
    try:
        values = [int(t) for t in tokens]
    except ValueError as e:
        raise BoardFormatError(f"non-integer token: {e}") from e

    n, cells = values[0], values[1:]
    if n < 2:
        raise BoardFormatError(f"dimension must be at least 2, got {n}")
    if len(cells) != n * n:
        raise BoardFormatError(f"expected {n * n} tiles for a {n}x{n} board, got {len(cells)}")
    if sorted(cells) != list(range(n * n)):
        raise BoardFormatError(f"tiles must be a permutation of 0..{n * n - 1}")

    rows: List[List[int]] = [cells[r * n:(r + 1) * n] for r in range(n)]
    return Board(rows)


def read_board(path: Union[str, Path]) -> Board:
    return parse_board(Path(path).read_text(encoding="utf-8"))
