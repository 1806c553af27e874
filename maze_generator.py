"""
maze_generator.py

Builds a maze for the robot pathfinding level.

Per generated maze:
- Paints walls with the tier's construction strategy
- Forces the start (0, 0) open and the goal (N-1, N-1) in place
- Repairs reachability along a theoretical shortest route
- Optionally shortens an overlong solution
- Nudges wall density into [min, max] without breaking reachability
- Re-asserts start, goal and reachability before handing the grid back

Density and path length are best effort (retry caps may leave them outside
the configured band). Reachability and goal placement always hold.
"""

from __future__ import annotations

import logging
import math
import random
from typing import List, Optional

from construction import construct
from grid import Grid
from models import CellTag, DifficultyConfig, Position
from pathfinding import find_path, is_reachable, open_route

logger = logging.getLogger(__name__)

WALL_ADD_ATTEMPTS = 100
ROUTE_ODD_CLEAR_CHANCE = 0.70
PATH_LENGTH_FACTOR = 1.5


def max_path_length(size: int) -> int:
    """Longest acceptable solution, counted in cells."""
    return math.ceil(PATH_LENGTH_FACTOR * size)


class MazeGenerator:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def generate(self, cfg: DifficultyConfig) -> Grid:
        grid = Grid(cfg.size)

        construct(grid, cfg, self.rng)
        logger.debug(
            "constructed %s tier %dx%d maze with %d walls",
            cfg.tier.value, cfg.size, cfg.size, grid.count(CellTag.WALL),
        )

        grid.set(grid.start, CellTag.OPEN)
        grid.set(grid.goal, CellTag.GOAL)
        self.verify_goal(grid)

        self.ensure_reachable(grid)
        if cfg.optimize_path:
            self.optimize_path_length(grid)
        self.validate_wall_density(grid, cfg)
        self.finalize(grid)

        logger.debug(
            "maze ready: density=%.2f (band %.2f-%.2f)",
            grid.wall_density(), cfg.min_wall_density, cfg.max_wall_density,
        )
        return grid

    # ----------------------------
    # Phases
    # ----------------------------

    def verify_goal(self, grid: Grid) -> bool:
        """Re-place the goal if it went missing. Returns True if it was restored."""
        if grid.goal in grid.goal_positions():
            return False
        logger.debug("goal missing at %s, restoring", tuple(grid.goal))
        grid.set(grid.goal, CellTag.GOAL)
        return True

    def ensure_reachable(self, grid: Grid) -> bool:
        """Open a route to the goal if it is cut off. Returns True if repaired."""
        if is_reachable(grid, grid.start, grid.goal):
            return False

        route = open_route(grid.size, grid.start, grid.goal)
        if route:
            cleared = 0
            for i, pos in enumerate(route):
                if i % 2 == 0 or self.rng.random() < ROUTE_ODD_CLEAR_CHANCE:
                    cleared += self._clear(grid, pos)
            logger.debug("reachability repair cleared %d cells on route", cleared)
        else:
            self._clear_l_corridor(grid)
            logger.debug("no route on open grid, cleared L corridor")

        if not is_reachable(grid, grid.start, grid.goal):
            # skipped odd cells can still block the route
            self._clear_route(grid, route)
        return True

    def optimize_path_length(self, grid: Grid) -> int:
        """Shortcut the solution when it exceeds ceil(1.5 * N) cells.

        The real shortest path only crosses open cells, so the shortcut is cut
        along the theoretical open-grid route instead, clearing every other
        cell between start and goal. Returns the number of walls removed.
        """
        path = find_path(grid, grid.start, grid.goal)
        limit = max_path_length(grid.size)
        if len(path) <= limit:
            return 0

        route = open_route(grid.size, grid.start, grid.goal)
        cleared = 0
        for pos in route[1:-1:2]:
            cleared += self._clear(grid, pos)
        logger.debug(
            "path length %d > %d, cleared %d cells along direct route",
            len(path), limit, cleared,
        )
        return cleared

    def validate_wall_density(self, grid: Grid, cfg: DifficultyConfig) -> None:
        added = 0
        while grid.wall_density() < cfg.min_wall_density:
            if not self._add_random_wall(grid):
                logger.debug(
                    "density %.2f below minimum, no safe wall spot left",
                    grid.wall_density(),
                )
                break
            added += 1

        removed = 0
        while grid.wall_density() > cfg.max_wall_density:
            walls = [p for p in grid.positions() if grid.get(p) == CellTag.WALL]
            if not walls:
                break
            grid.set(self.rng.choice(walls), CellTag.OPEN)
            removed += 1

        if added or removed:
            logger.debug("density correction: +%d / -%d walls", added, removed)

    def finalize(self, grid: Grid) -> None:
        """Last line of defence for the start/goal/reachability invariants."""
        if grid.get(grid.start) != CellTag.OPEN:
            grid.set(grid.start, CellTag.OPEN)
        if grid.get(grid.goal) != CellTag.GOAL:
            logger.debug("goal tag corrupted during repair, restoring")
            grid.set(grid.goal, CellTag.GOAL)
        if not is_reachable(grid, grid.start, grid.goal):
            self._clear_route(grid, open_route(grid.size, grid.start, grid.goal))

    # ----------------------------
    # Helpers
    # ----------------------------

    def _add_random_wall(self, grid: Grid) -> bool:
        n = grid.size
        for _ in range(WALL_ADD_ATTEMPTS):
            pos = Position(self.rng.randrange(n), self.rng.randrange(n))
            if grid.is_protected(pos) or grid.get(pos) != CellTag.OPEN:
                continue
            grid.set(pos, CellTag.WALL)
            if is_reachable(grid, grid.start, grid.goal):
                return True
            grid.set(pos, CellTag.OPEN)
        return False

    def _clear(self, grid: Grid, pos: Position) -> int:
        if grid.get(pos) == CellTag.WALL:
            grid.set(pos, CellTag.OPEN)
            return 1
        return 0

    def _clear_route(self, grid: Grid, route: List[Position]) -> None:
        if not route:
            self._clear_l_corridor(grid)
            return
        for pos in route:
            self._clear(grid, pos)

    def _clear_l_corridor(self, grid: Grid) -> None:
        """Open the whole top row, then the whole goal column."""
        n = grid.size
        for x in range(n):
            self._clear(grid, Position(x, 0))
        for y in range(n):
            self._clear(grid, Position(n - 1, y))


def generate_maze(cfg: DifficultyConfig, rng: Optional[random.Random] = None) -> Grid:
    """Generate a finished maze for one level attempt."""
    return MazeGenerator(rng).generate(cfg)
