from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from game_types import Color
from models import DifficultyConfig
from utils import as_color, clamp_int, deep_get


@dataclass(frozen=True)
class ViewerSettings:
    window_w: int
    window_h: int
    title: str
    bg: Color
    tile_size: int
    step_ms: int
    show_path: bool


def parse_maze_config(cfg: Dict[str, Any]) -> DifficultyConfig:
    """Parse the ``maze`` section of the config.

    Args:
        cfg: Full config dict.

    Returns:
        DifficultyConfig with tier presets and clamping applied.
    """
    raw = cfg.get("maze", {}) if isinstance(cfg, dict) else {}
    return DifficultyConfig.from_dict(raw if isinstance(raw, dict) else {})


def parse_viewer_settings(cfg: Dict[str, Any]) -> ViewerSettings:
    """Parse window and render settings for the pygame viewer."""
    if not isinstance(cfg, dict):
        cfg = {}

    def _int(path: str, default: int) -> int:
        try:
            return int(deep_get(cfg, path, default))
        except (TypeError, ValueError):
            return default

    title_raw = deep_get(cfg, "window.title", "Robot Maze")
    title = str(title_raw).strip() if isinstance(title_raw, str) else "Robot Maze"

    return ViewerSettings(
        window_w=clamp_int(_int("window.width", 640), 200, 4000),
        window_h=clamp_int(_int("window.height", 720), 200, 4000),
        title=title or "Robot Maze",
        bg=as_color(deep_get(cfg, "window.bg", [18, 20, 28]), (18, 20, 28)),
        tile_size=clamp_int(_int("render.tile_size", 64), 8, 256),
        step_ms=clamp_int(_int("render.step_ms", 500), 0, 10000),
        show_path=bool(deep_get(cfg, "render.show_path", False)),
    )
