from __future__ import annotations

import heapq
import itertools
from collections import deque
from typing import Dict, List, Optional, Set, Tuple

from grid import Grid
from models import Position


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_reachable(grid: Grid, start: Position, goal: Position) -> bool:
    """Breadth-first search through non-wall cells. Never mutates the grid."""
    if grid.is_wall(start) or grid.is_wall(goal):
        return False

    q = deque([start])
    visited: Set[Position] = {start}
    while q:
        cur = q.popleft()
        if cur == goal:
            return True
        for n in grid.neighbors4(cur):
            if n not in visited and not grid.is_wall(n):
                visited.add(n)
                q.append(n)
    return False


def bfs_distance(grid: Grid, start: Position, goal: Position) -> Optional[int]:
    """Edge count of the shortest start->goal route, or None if unreachable."""
    if grid.is_wall(start) or grid.is_wall(goal):
        return None

    q = deque([(start, 0)])
    visited: Set[Position] = {start}
    while q:
        cur, dist = q.popleft()
        if cur == goal:
            return dist
        for n in grid.neighbors4(cur):
            if n not in visited and not grid.is_wall(n):
                visited.add(n)
                q.append((n, dist + 1))
    return None


def find_path(grid: Grid, start: Position, goal: Position) -> List[Position]:
    """A* shortest path from start to goal inclusive, [] when none exists.

    Frontier ties on f-score are broken by insertion order, so the result is
    deterministic for a given grid.
    """
    if grid.is_wall(start) or grid.is_wall(goal):
        return []

    counter = itertools.count()
    frontier: List[Tuple[int, int, Position]] = [
        (manhattan(start, goal), next(counter), start)
    ]
    came_from: Dict[Position, Position] = {}
    g_score: Dict[Position, int] = {start: 0}
    closed: Set[Position] = set()

    while frontier:
        _, _, cur = heapq.heappop(frontier)
        if cur in closed:
            continue
        if cur == goal:
            return _reconstruct(came_from, cur)
        closed.add(cur)

        for n in grid.neighbors4(cur):
            if n in closed or grid.is_wall(n):
                continue
            tentative = g_score[cur] + 1
            if tentative < g_score.get(n, tentative + 1):
                came_from[n] = cur
                g_score[n] = tentative
                heapq.heappush(
                    frontier, (tentative + manhattan(n, goal), next(counter), n)
                )
    return []


def _reconstruct(came_from: Dict[Position, Position], cur: Position) -> List[Position]:
    path = [cur]
    while cur in came_from:
        cur = came_from[cur]
        path.append(cur)
    path.reverse()
    return path


def open_route(size: int, start: Position, goal: Position) -> List[Position]:
    """Shortest route on a hypothetical wall-free grid of the given size."""
    return find_path(Grid(size), start, goal)
