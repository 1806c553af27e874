#!/usr/bin/env python3
"""
generate_levels.py

Generates mazes for the robot pathfinding level.

Per generated maze k:
- Creates:  levels/maze{k}/
- Writes:   levels/maze{k}/maze{k}.map
- Writes:   levels/maze{k}/maze{k}.json

Map format:
- 'S' marks the start at the top-left corner (an open cell)
- 'G' marks the goal at the bottom-right corner
- '#' walls, '.' open cells
- Goal is always reachable from start with 4-directional moves
"""

from __future__ import annotations

import argparse
import logging
import random
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from config_io import write_json
from grid import Grid
from maze_generator import MazeGenerator
from models import CellTag, DifficultyConfig, Tier
from pathfinding import find_path

LEVEL_DIR_RE = re.compile(r"^maze(\d+)$", re.IGNORECASE)


@dataclass(frozen=True)
class LevelPaths:
    folder: Path
    json_path: Path
    map_path: Path


@dataclass
class GeneratedMaze:
    index: int
    grid: Grid
    cfg: DifficultyConfig
    path_length: int


class LevelIndexScanner:
    def __init__(self, levels_root: Path) -> None:
        self.levels_root = levels_root

    def last_level_index(self) -> int:
        if not self.levels_root.exists():
            return 0
        indices: List[int] = []
        for child in self.levels_root.iterdir():
            if not child.is_dir():
                continue
            m = LEVEL_DIR_RE.match(child.name)
            if not m:
                continue
            indices.append(int(m.group(1)))
        return max(indices) if indices else 0


class LevelWriter:
    def __init__(self, levels_root: Path) -> None:
        self.levels_root = levels_root

    def paths_for(self, idx: int) -> LevelPaths:
        folder = self.levels_root / f"maze{idx}"
        return LevelPaths(
            folder=folder,
            json_path=folder / f"maze{idx}.json",
            map_path=folder / f"maze{idx}.map",
        )

    def write(self, maze: GeneratedMaze) -> LevelPaths:
        paths = self.paths_for(maze.index)
        paths.folder.mkdir(parents=True, exist_ok=False)

        payload = {
            "name": f"maze{maze.index}",
            "maze": maze.cfg.to_dict(),
            "stats": {
                "walls": maze.grid.count(CellTag.WALL),
                "wall_density": round(maze.grid.wall_density(), 4),
                "path_length": maze.path_length,
            },
        }
        write_json(paths.json_path, payload)
        rows = maze.grid.to_rows(mark_start=True)
        paths.map_path.write_text("\n".join(rows) + "\n", encoding="utf-8")
        return paths


class LevelGenerator:
    def __init__(self, levels_root: Path, rng: random.Random) -> None:
        self.levels_root = levels_root
        self.scanner = LevelIndexScanner(levels_root)
        self.maze_gen = MazeGenerator(rng)
        self.writer = LevelWriter(levels_root)

    def generate(self, count: int, cfg: DifficultyConfig) -> List[GeneratedMaze]:
        self.levels_root.mkdir(parents=True, exist_ok=True)
        last_idx = self.scanner.last_level_index()

        out: List[GeneratedMaze] = []
        for i in range(count):
            idx = last_idx + 1 + i
            grid = self.maze_gen.generate(cfg)
            path = find_path(grid, grid.start, grid.goal)
            maze = GeneratedMaze(index=idx, grid=grid, cfg=cfg, path_length=len(path))
            self.writer.write(maze)
            out.append(maze)

            print(
                f"Generated maze{idx}: {cfg.size}x{cfg.size} {cfg.tier.value} | "
                f"density={grid.wall_density():.2f} | path={len(path)} cells"
            )
        return out


# ----------------------------
# CLI
# ----------------------------


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Generate robot-maze levels with guaranteed reachable goals."
    )
    p.add_argument("count", type=int, help="How many new mazes to generate.")
    p.add_argument(
        "--levels-root",
        type=str,
        default="levels",
        help="Levels folder (default: levels)",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed for reproducible generation.",
    )
    p.add_argument("--size", type=int, default=8, help="Grid size N (default: 8)")
    p.add_argument(
        "--tier",
        choices=[t.value for t in Tier],
        default=Tier.BALANCED.value,
        help="Construction tier (default: balanced)",
    )
    p.add_argument("--min-density", type=float, default=None)
    p.add_argument("--max-density", type=float, default=None)
    p.add_argument(
        "--no-optimize",
        action="store_true",
        help="Skip shortening overlong solutions.",
    )
    p.add_argument("--verbose", action="store_true", help="Log generation phases.")
    return p.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> DifficultyConfig:
    raw = {
        "size": args.size,
        "tier": args.tier,
        "optimize_path": not args.no_optimize,
    }
    if args.min_density is not None:
        raw["min_wall_density"] = args.min_density
    if args.max_density is not None:
        raw["max_wall_density"] = args.max_density
    cfg = DifficultyConfig.from_dict(raw)
    if args.size != cfg.size:
        print(f"Grid size clamped to {cfg.size}")
    return cfg


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    if args.count <= 0:
        raise SystemExit("count must be > 0")
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    rng = random.Random(args.seed)
    LevelGenerator(Path(args.levels_root), rng).generate(args.count, config_from_args(args))


if __name__ == "__main__":
    main()
