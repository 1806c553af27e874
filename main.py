from __future__ import annotations

import argparse
from pathlib import Path


def main() -> None:
    """Entrypoint for running the maze viewer from the command line."""
    p = argparse.ArgumentParser(description="Program a robot through a generated maze.")
    p.add_argument("config", nargs="?", default="config.json", help="JSON config path")
    p.add_argument("--map", type=str, default=None, help="Play a saved .map instead")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for generated mazes")
    args = p.parse_args()

    from game import MazeGame  # local import keeps module load side effects minimal

    map_path = Path(args.map) if args.map else None
    MazeGame(Path(args.config), map_path=map_path, seed=args.seed).run()


if __name__ == "__main__":
    main()
