from typing import Tuple

State = Tuple[int, ...]


def tile_distance(tile: int, idx: int, n: int) -> int:
    """Row + column distance of `tile` sitting at flat index `idx` from its goal cell."""
    if tile == 0:
        return 0
    r, c = divmod(idx, n)
    gr, gc = divmod(tile - 1, n)
    return abs(r - gr) + abs(c - gc)


def manhattan(s: State, n: int) -> int:
    """Sum of Manhattan distances to goal positions (blank ignored)."""
    return sum(tile_distance(tile, idx, n) for idx, tile in enumerate(s))
