import random
import unittest
from unittest import mock

from construction import STRATEGIES
from grid import Grid
from maze_generator import MazeGenerator, generate_maze, max_path_length
from models import CellTag, DifficultyConfig, Position, Tier
from pathfinding import find_path, is_reachable, open_route


def wall_everything(grid, cfg, rng):
    for pos in grid.positions():
        if not grid.is_protected(pos):
            grid.set(pos, CellTag.WALL)


class TestGeneratedMazeInvariants(unittest.TestCase):

    def assert_invariants(self, grid, size):
        self.assertEqual(grid.size, size)
        self.assertEqual(grid.get(Position(0, 0)), CellTag.OPEN)
        self.assertEqual(grid.goal_positions(), [Position(size - 1, size - 1)])
        self.assertTrue(is_reachable(grid, grid.start, grid.goal))

    def test_all_tiers_and_sizes(self):
        for tier in Tier:
            for size in range(2, 13):
                for seed in range(8):
                    cfg = DifficultyConfig.for_tier(tier, size=size)
                    grid = generate_maze(cfg, random.Random(seed))
                    self.assert_invariants(grid, size)

    def test_without_path_optimization(self):
        for tier in Tier:
            for seed in range(10):
                cfg = DifficultyConfig.for_tier(tier, size=8, optimize_path=False)
                self.assert_invariants(generate_maze(cfg, random.Random(seed)), 8)

    def test_extreme_density_band(self):
        cfg = DifficultyConfig(size=8, min_wall_density=0.95, max_wall_density=1.0, tier=Tier.COMPLEX)
        for seed in range(10):
            self.assert_invariants(generate_maze(cfg, random.Random(seed)), 8)

    def test_degenerate_two_by_two(self):
        for tier in Tier:
            for seed in range(20):
                grid = generate_maze(DifficultyConfig.for_tier(tier, size=2), random.Random(seed))
                self.assert_invariants(grid, 2)
                self.assertEqual(grid.get(Position(1, 1)), CellTag.GOAL)

    def test_complex_density_band(self):
        cfg = DifficultyConfig(
            size=8, min_wall_density=0.40, max_wall_density=0.75, tier=Tier.COMPLEX
        )
        in_band = 0
        for seed in range(40):
            grid = generate_maze(cfg, random.Random(seed))
            self.assert_invariants(grid, 8)
            density = grid.wall_density()
            # removal always succeeds, so the ceiling is never exceeded
            self.assertLessEqual(density, 0.75)
            if density >= 0.40:
                in_band += 1
        self.assertGreaterEqual(in_band, 36)

    def test_same_seed_same_maze(self):
        cfg = DifficultyConfig.for_tier(Tier.BALANCED, size=10)
        a = generate_maze(cfg, random.Random(99))
        b = generate_maze(cfg, random.Random(99))
        self.assertEqual(a, b)

    def test_default_rng(self):
        grid = generate_maze(DifficultyConfig())
        self.assert_invariants(grid, 8)

    def test_pathological_construction_is_repaired(self):
        cfg = DifficultyConfig(
            size=8, min_wall_density=0.0, max_wall_density=1.0,
            tier=Tier.OPEN, optimize_path=False,
        )
        with mock.patch.dict(STRATEGIES, {Tier.OPEN: wall_everything}):
            for seed in range(20):
                grid = generate_maze(cfg, random.Random(seed))
                self.assert_invariants(grid, 8)


class TestPipelinePhases(unittest.TestCase):

    def setUp(self):
        self.gen = MazeGenerator(random.Random(5))

    def test_verify_goal_restores_missing_goal(self):
        grid = Grid(4)
        self.assertTrue(self.gen.verify_goal(grid))
        self.assertEqual(grid.get(grid.goal), CellTag.GOAL)
        self.assertFalse(self.gen.verify_goal(grid))

    def test_ensure_reachable_noop_when_reachable(self):
        grid = Grid.from_rows(["..#", "#..", "#.G"])
        snapshot = grid.copy()
        self.assertFalse(self.gen.ensure_reachable(grid))
        self.assertEqual(grid, snapshot)

    def test_ensure_reachable_repairs_walled_grid(self):
        for seed in range(20):
            gen = MazeGenerator(random.Random(seed))
            grid = Grid(7)
            wall_everything(grid, None, None)
            grid.set(grid.goal, CellTag.GOAL)
            self.assertFalse(is_reachable(grid, grid.start, grid.goal))
            self.assertTrue(gen.ensure_reachable(grid))
            self.assertTrue(is_reachable(grid, grid.start, grid.goal))
            self.assertEqual(grid.get(grid.goal), CellTag.GOAL)

    def test_ensure_reachable_clears_even_route_cells(self):
        grid = Grid(5)
        wall_everything(grid, None, None)
        grid.set(grid.goal, CellTag.GOAL)
        self.gen.ensure_reachable(grid)
        route = open_route(5, grid.start, grid.goal)
        for pos in route[::2]:
            self.assertNotEqual(grid.get(pos), CellTag.WALL)

    def test_l_corridor_fallback(self):
        grid = Grid(4)
        wall_everything(grid, None, None)
        grid.set(grid.goal, CellTag.GOAL)
        with mock.patch("maze_generator.open_route", return_value=[]):
            self.assertTrue(self.gen.ensure_reachable(grid))
        self.assertEqual(grid.to_rows()[0], "....")
        for y in range(3):
            self.assertEqual(grid.get(Position(3, y)), CellTag.OPEN)
        self.assertEqual(grid.get(Position(3, 3)), CellTag.GOAL)
        self.assertTrue(is_reachable(grid, grid.start, grid.goal))

    def test_max_path_length(self):
        self.assertEqual(max_path_length(8), 12)
        self.assertEqual(max_path_length(2), 3)
        self.assertEqual(max_path_length(5), 8)

    def test_optimize_path_length_clears_direct_route(self):
        grid = Grid(4)
        grid.set(grid.goal, CellTag.GOAL)
        route = open_route(4, grid.start, grid.goal)
        grid.set(route[1], CellTag.WALL)
        self.assertGreater(len(find_path(grid, grid.start, grid.goal)), max_path_length(4))
        self.assertEqual(self.gen.optimize_path_length(grid), 1)
        for pos in route[1:-1:2]:
            self.assertEqual(grid.get(pos), CellTag.OPEN)

    def test_optimize_path_length_short_path_untouched(self):
        grid = Grid.from_rows([".#", ".G"])
        snapshot = grid.copy()
        self.assertEqual(self.gen.optimize_path_length(grid), 0)
        self.assertEqual(grid, snapshot)

    def test_density_raised_without_breaking_reachability(self):
        grid = Grid(6)
        grid.set(grid.goal, CellTag.GOAL)
        cfg = DifficultyConfig(size=6, min_wall_density=0.3, max_wall_density=0.5)
        self.gen.validate_wall_density(grid, cfg)
        self.assertGreaterEqual(grid.wall_density(), 0.3)
        self.assertTrue(is_reachable(grid, grid.start, grid.goal))

    def test_density_lowered_to_maximum(self):
        grid = Grid(6)
        wall_everything(grid, None, None)
        grid.set(grid.goal, CellTag.GOAL)
        cfg = DifficultyConfig(size=6, min_wall_density=0.1, max_wall_density=0.5)
        self.gen.validate_wall_density(grid, cfg)
        self.assertLessEqual(grid.wall_density(), 0.5)
        self.assertEqual(grid.get(grid.start), CellTag.OPEN)
        self.assertEqual(grid.get(grid.goal), CellTag.GOAL)

    def test_density_best_effort_on_tiny_grid(self):
        grid = Grid(2)
        grid.set(grid.goal, CellTag.GOAL)
        cfg = DifficultyConfig(size=2, min_wall_density=0.9, max_wall_density=1.0)
        self.gen.validate_wall_density(grid, cfg)
        # only one of the two free cells can be walled
        self.assertEqual(grid.count(CellTag.WALL), 1)
        self.assertTrue(is_reachable(grid, grid.start, grid.goal))

    def test_finalize_restores_goal_and_start(self):
        grid = Grid(4)
        grid.set(grid.start, CellTag.WALL)
        self.gen.finalize(grid)
        self.assertEqual(grid.get(grid.start), CellTag.OPEN)
        self.assertEqual(grid.get(grid.goal), CellTag.GOAL)

    def test_finalize_reopens_route(self):
        grid = Grid(5)
        wall_everything(grid, None, None)
        grid.set(grid.goal, CellTag.GOAL)
        self.gen.finalize(grid)
        self.assertTrue(is_reachable(grid, grid.start, grid.goal))


if __name__ == "__main__":
    unittest.main()
