from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, NamedTuple, Tuple

from utils import clamp_float, clamp_int


class CellTag(str, Enum):
    OPEN = "."
    WALL = "#"
    GOAL = "G"


class Tier(str, Enum):
    """Construction strategy selector, from sparse to maze-like."""

    OPEN = "open"
    BALANCED = "balanced"
    COMPLEX = "complex"

    @classmethod
    def parse(cls, raw: Any, default: "Tier") -> "Tier":
        if isinstance(raw, Tier):
            return raw
        if isinstance(raw, str):
            val = raw.strip().lower()
            for tier in cls:
                if tier.value == val:
                    return tier
        return default


class Position(NamedTuple):
    x: int
    y: int


# (min_wall_density, max_wall_density) used when a config omits them
TIER_DENSITY_PRESETS: Dict[Tier, Tuple[float, float]] = {
    Tier.OPEN: (0.15, 0.30),
    Tier.BALANCED: (0.25, 0.45),
    Tier.COMPLEX: (0.40, 0.75),
}

MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 64


@dataclass(frozen=True)
class DifficultyConfig:
    size: int = 8
    min_wall_density: float = 0.25
    max_wall_density: float = 0.45
    tier: Tier = Tier.BALANCED
    optimize_path: bool = True

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "DifficultyConfig":
        """Build a config from the ``maze`` section of a JSON config.

        Missing densities come from the tier preset. Out-of-range values are
        clamped and a reversed density band is swapped.
        """
        if not isinstance(raw, dict):
            raw = {}

        tier = Tier.parse(raw.get("tier"), Tier.BALANCED)
        preset_min, preset_max = TIER_DENSITY_PRESETS[tier]

        try:
            size = int(raw.get("size", 8))
        except (TypeError, ValueError):
            size = 8
        try:
            lo = float(raw.get("min_wall_density", preset_min))
        except (TypeError, ValueError):
            lo = preset_min
        try:
            hi = float(raw.get("max_wall_density", preset_max))
        except (TypeError, ValueError):
            hi = preset_max

        lo = clamp_float(lo, 0.0, 1.0)
        hi = clamp_float(hi, 0.0, 1.0)
        if lo > hi:
            lo, hi = hi, lo

        return DifficultyConfig(
            size=clamp_int(size, MIN_GRID_SIZE, MAX_GRID_SIZE),
            min_wall_density=lo,
            max_wall_density=hi,
            tier=tier,
            optimize_path=bool(raw.get("optimize_path", True)),
        )

    @staticmethod
    def for_tier(tier: Tier, size: int = 8, optimize_path: bool = True) -> "DifficultyConfig":
        lo, hi = TIER_DENSITY_PRESETS[tier]
        return DifficultyConfig(
            size=size,
            min_wall_density=lo,
            max_wall_density=hi,
            tier=tier,
            optimize_path=optimize_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "tier": self.tier.value,
            "min_wall_density": self.min_wall_density,
            "max_wall_density": self.max_wall_density,
            "optimize_path": self.optimize_path,
        }


class Direction(str, Enum):
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @property
    def delta(self) -> Tuple[int, int]:
        return _DIRECTION_DELTAS[self]

    def turned(self, clockwise: bool) -> "Direction":
        order = list(Direction)
        idx = order.index(self)
        return order[(idx + (1 if clockwise else 3)) % 4]


_DIRECTION_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


class Action(str, Enum):
    FORWARD = "forward"
    TURN_LEFT = "turnLeft"
    TURN_RIGHT = "turnRight"


@dataclass(frozen=True)
class RobotState:
    position: Position
    direction: Direction
