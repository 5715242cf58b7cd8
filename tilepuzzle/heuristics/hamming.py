from typing import Tuple

State = Tuple[int, ...]


def tile_mismatch(tile: int, idx: int) -> int:
    # goal cell of index idx holds idx + 1; the blank never counts
    if tile == 0 or tile == idx + 1:
        return 0
    return 1


def hamming(s: State) -> int:
    """Number of non-blank tiles out of place."""
    return sum(tile_mismatch(tile, idx) for idx, tile in enumerate(s))
