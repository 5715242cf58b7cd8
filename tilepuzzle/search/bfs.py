from collections import deque
from time import perf_counter
from typing import Dict, List, Optional, Set

from tilepuzzle.domains.board import Board


def bfs(start: Board, timeout_sec: float | None = None):
    """
    Uninformed breadth-first search with a full visited set.

    Reference baseline for small boards: returns the same shape of result
    dict as Solver.as_record(), with "path" holding the shortest path or None
    once the reachable component is exhausted.
    """
    t0 = perf_counter()
    q = deque([start])
    parent: Dict[Board, Optional[Board]] = {start: None}
    expanded = generated = 0
    seen: Set[Board] = {start}
    while q:
        if timeout_sec is not None and (perf_counter() - t0) > timeout_sec:
            return {"path": None, "moves": -1, "expanded": expanded, "generated": generated,
                    "time": perf_counter()-t0, "algorithm": "BFS", "termination": "timeout"}
        s = q.popleft()
        if s.is_goal():
            path: List[Board] = []
            while s is not None:
                path.append(s); s = parent[s]
            path.reverse()
            return {"path": path, "moves": len(path) - 1, "expanded": expanded, "generated": generated,
                    "time": perf_counter()-t0, "algorithm": "BFS", "termination": "ok"}
        expanded += 1
        for s2 in s.neighbors():
            generated += 1
            if s2 in seen: continue
            seen.add(s2); parent[s2] = s; q.append(s2)
    return {"path": None, "moves": -1, "expanded": expanded, "generated": generated,
            "time": perf_counter()-t0, "algorithm": "BFS", "termination": "exhausted"}
