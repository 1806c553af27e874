from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from config_io import load_json_config
from grid import Grid


def normalize_grid_lines(lines: List[str]) -> List[str]:
    """Drop blank lines and trailing whitespace from raw map lines.

    Raises:
        ValueError: If no lines remain.
    """
    rows = [line.rstrip() for line in lines if line.strip() != ""]
    if not rows:
        raise ValueError("Maze map is empty.")
    return rows


def read_maze_map(path: Path) -> Grid:
    """Parse a .map file into a Grid.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the map is empty, not square, or has unknown characters.
    """
    if not path.exists():
        raise FileNotFoundError(f"Maze map not found: {path}")
    lines = path.read_text(encoding="utf-8").splitlines()
    return Grid.from_rows(normalize_grid_lines(lines))


def resolve_maze_paths(name: str, levels_dir: Path) -> Tuple[Path, Optional[Path]]:
    """Return (map_path, json_path) for a maze name, preferring its own folder."""
    candidates = [
        levels_dir / name / f"{name}.map",
        levels_dir / f"{name}.map",
    ]
    if levels_dir.exists():
        for entry in levels_dir.iterdir():
            if entry.is_dir() and entry.name.lower() == name.lower():
                candidates.append(entry / f"{entry.name}.map")

    for map_path in candidates:
        if map_path.exists():
            json_path = map_path.with_suffix(".json")
            return map_path, json_path if json_path.exists() else None

    raise FileNotFoundError(
        f"Maze '{name}' not found.\n"
        f"- Looked for {name}.map inside {levels_dir / name}\n"
        f"- Looked for file: {levels_dir / f'{name}.map'}"
    )


def load_maze(name: str, levels_dir: Path) -> Tuple[Grid, Dict[str, Any]]:
    """Load a generated maze and its metadata (empty dict if none) by name."""
    map_path, json_path = resolve_maze_paths(name, levels_dir)
    meta = load_json_config(json_path) if json_path is not None else {}
    return read_maze_map(map_path), meta
