"""
construction.py

Randomized wall painters, one per difficulty tier.

Each painter receives a fresh all-open Grid and paints Wall cells in place.
None of them ever walls the start (0, 0) or the goal (N-1, N-1).

- open:     uniform scatter with a local-crowding limit
- balanced: diamond clusters on a stride-2 lattice, sparse singles, corridors
- complex:  L-shaped pieces on a stride-2 lattice, scatter, dead ends
"""

from __future__ import annotations

import random
from typing import Callable, Dict

from grid import Grid
from models import CellTag, DifficultyConfig, Position, Tier

Painter = Callable[[Grid, DifficultyConfig, random.Random], None]

PLACEMENT_ATTEMPTS = 50
OPEN_LOCAL_DENSITY_LIMIT = 0.40

CLUSTER_RADIUS_RANGE = (2, 3)
CLUSTER_FILL_CHANCE = 0.70
SPARSE_WALL_CHANCE = 0.30
CORRIDOR_CLEAR_CHANCE = 0.40

L_SHAPE_CHANCE = 0.60
SCATTER_LOCAL_DENSITY_LIMIT = 0.60
SCATTER_CHANCE = 0.15
DEAD_END_CHANCE = 0.10
DEAD_END_WALL_CHANCE = 0.50


def _try_wall(grid: Grid, pos: Position) -> bool:
    if not grid.in_bounds(pos) or grid.is_protected(pos):
        return False
    grid.set(pos, CellTag.WALL)
    return True


def _target_walls(grid: Grid, cfg: DifficultyConfig) -> int:
    return int(grid.size * grid.size * cfg.min_wall_density)


# ----------------------------
# Open tier
# ----------------------------


def paint_open(grid: Grid, cfg: DifficultyConfig, rng: random.Random) -> None:
    """Scatter single walls, rejecting spots that would crowd a 3x3 window."""
    n = grid.size
    for _ in range(_target_walls(grid, cfg)):
        for _ in range(PLACEMENT_ATTEMPTS):
            pos = Position(rng.randrange(n), rng.randrange(n))
            if grid.is_protected(pos) or grid.is_wall(pos):
                continue
            if grid.local_wall_density(pos, include_self=True) > OPEN_LOCAL_DENSITY_LIMIT:
                continue
            grid.set(pos, CellTag.WALL)
            break


# ----------------------------
# Balanced tier
# ----------------------------


def paint_balanced(grid: Grid, cfg: DifficultyConfig, rng: random.Random) -> None:
    _paint_clusters(grid, cfg, rng)
    _paint_sparse_walls(grid, rng)
    _open_corridors(grid, rng)


def _paint_clusters(grid: Grid, cfg: DifficultyConfig, rng: random.Random) -> None:
    """Diamond-shaped clusters centred on stride-2 lattice sites.

    Sites are visited in shuffled order, and painting is deliberately
    bounded: no new cluster starts once the wall count reaches
    int(N^2 * min_wall_density). Without that bound, radius 2-3 clusters on
    every site would wall off most of a small grid.
    """
    n = grid.size
    sites = [Position(x, y) for y in range(1, n, 2) for x in range(1, n, 2)]
    rng.shuffle(sites)
    target = _target_walls(grid, cfg)

    for center in sites:
        if grid.count(CellTag.WALL) >= target:
            break
        _paint_cluster(grid, center, rng.randint(*CLUSTER_RADIUS_RANGE), rng)


def _paint_cluster(grid: Grid, center: Position, radius: int, rng: random.Random) -> None:
    """Fill cells within Manhattan distance `radius` of `center`."""
    cx, cy = center
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            if abs(dx) + abs(dy) > radius:
                continue
            if rng.random() < CLUSTER_FILL_CHANCE:
                _try_wall(grid, Position(cx + dx, cy + dy))


def _paint_sparse_walls(grid: Grid, rng: random.Random) -> None:
    n = grid.size
    for _ in range(n):
        if rng.random() < SPARSE_WALL_CHANCE:
            _try_wall(grid, Position(rng.randrange(n), rng.randrange(n)))


def _open_corridors(grid: Grid, rng: random.Random) -> None:
    n = grid.size
    corridors = (
        [Position(x, 0) for x in range(n)],  # top row
        [Position(0, y) for y in range(n)],  # left column
        [Position(x, n - 1) for x in range(n)],  # bottom row
    )
    for corridor in corridors:
        if rng.random() < CORRIDOR_CLEAR_CHANCE:
            for pos in corridor:
                if grid.get(pos) == CellTag.WALL:
                    grid.set(pos, CellTag.OPEN)


# ----------------------------
# Complex tier
# ----------------------------


def paint_complex(grid: Grid, cfg: DifficultyConfig, rng: random.Random) -> None:
    _paint_l_shapes(grid, rng)
    _paint_scatter(grid, rng)
    _paint_dead_ends(grid, rng)


def _paint_l_shapes(grid: Grid, rng: random.Random) -> None:
    """Row-by-row pass over a stride-2 lattice, each site growing an L.

    The corner sits on the lattice site with one horizontal and one vertical
    arm cell, oriented at random.
    """
    n = grid.size
    for y in range(1, n, 2):
        for x in range(1, n, 2):
            if rng.random() >= L_SHAPE_CHANCE:
                continue
            dx = rng.choice((-1, 1))
            dy = rng.choice((-1, 1))
            _try_wall(grid, Position(x, y))
            _try_wall(grid, Position(x + dx, y))
            _try_wall(grid, Position(x, y + dy))


def _paint_scatter(grid: Grid, rng: random.Random) -> None:
    for pos in list(grid.positions()):
        if grid.get(pos) != CellTag.OPEN or grid.is_protected(pos):
            continue
        if grid.local_wall_density(pos) >= SCATTER_LOCAL_DENSITY_LIMIT:
            continue
        if rng.random() < SCATTER_CHANCE:
            grid.set(pos, CellTag.WALL)


def _paint_dead_ends(grid: Grid, rng: random.Random) -> None:
    n = grid.size
    for y in range(1, n - 1):
        for x in range(1, n - 1):
            pos = Position(x, y)
            if grid.get(pos) != CellTag.OPEN:
                continue
            if rng.random() >= DEAD_END_CHANCE:
                continue
            # interior cells always have all four neighbours in bounds
            neighbors = grid.neighbors4(pos)
            keep = rng.randrange(len(neighbors))
            for i, n_pos in enumerate(neighbors):
                if i == keep:
                    if grid.get(n_pos) == CellTag.WALL:
                        grid.set(n_pos, CellTag.OPEN)
                    continue
                if rng.random() < DEAD_END_WALL_CHANCE:
                    _try_wall(grid, n_pos)


STRATEGIES: Dict[Tier, Painter] = {
    Tier.OPEN: paint_open,
    Tier.BALANCED: paint_balanced,
    Tier.COMPLEX: paint_complex,
}


def construct(grid: Grid, cfg: DifficultyConfig, rng: random.Random) -> None:
    """Paint walls with the strategy selected by the config tier."""
    STRATEGIES[cfg.tier](grid, cfg, rng)
