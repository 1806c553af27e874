from __future__ import annotations

from typing import Iterator, List, Sequence

from models import CellTag, Position


class OutOfBoundsError(IndexError):
    """Raised when a position falls outside the grid."""


# down, right, up, left; search tie-breaking depends on this order
NEIGHBOR_OFFSETS = ((0, 1), (1, 0), (0, -1), (-1, 0))

START_CHAR = "S"


class Grid:
    """Square matrix of cell tags. Start is (0, 0), goal is (N-1, N-1)."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"grid size must be positive, got {size}")
        self.size = size
        self.cells: List[List[CellTag]] = [
            [CellTag.OPEN for _ in range(size)] for _ in range(size)
        ]

    @property
    def start(self) -> Position:
        return Position(0, 0)

    @property
    def goal(self) -> Position:
        return Position(self.size - 1, self.size - 1)

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.size and 0 <= y < self.size

    def _check(self, pos: Position) -> None:
        if not self.in_bounds(pos):
            raise OutOfBoundsError(
                f"position {tuple(pos)} outside {self.size}x{self.size} grid"
            )

    def get(self, pos: Position) -> CellTag:
        self._check(pos)
        return self.cells[pos[1]][pos[0]]

    def set(self, pos: Position, tag: CellTag) -> None:
        self._check(pos)
        self.cells[pos[1]][pos[0]] = tag

    def is_wall(self, pos: Position) -> bool:
        return self.get(pos) == CellTag.WALL

    def is_protected(self, pos: Position) -> bool:
        """Start and goal cells must never become walls."""
        return pos == self.start or pos == self.goal

    def neighbors4(self, pos: Position) -> List[Position]:
        x, y = pos
        out: List[Position] = []
        for dx, dy in NEIGHBOR_OFFSETS:
            n = Position(x + dx, y + dy)
            if self.in_bounds(n):
                out.append(n)
        return out

    def positions(self) -> Iterator[Position]:
        for y in range(self.size):
            for x in range(self.size):
                yield Position(x, y)

    def count(self, tag: CellTag) -> int:
        return sum(row.count(tag) for row in self.cells)

    def wall_density(self) -> float:
        return self.count(CellTag.WALL) / float(self.size * self.size)

    def local_wall_density(self, pos: Position, include_self: bool = False) -> float:
        """Wall fraction of the in-bounds 3x3 window centred on pos.

        With include_self the centre cell is counted as a wall, which answers
        "what would the density be if a wall went here".
        """
        x, y = pos
        walls = 0
        total = 0
        for yy in range(y - 1, y + 2):
            for xx in range(x - 1, x + 2):
                n = Position(xx, yy)
                if not self.in_bounds(n):
                    continue
                total += 1
                if n == pos and include_self:
                    walls += 1
                elif self.cells[yy][xx] == CellTag.WALL:
                    walls += 1
        return walls / float(total)

    def goal_positions(self) -> List[Position]:
        return [p for p in self.positions() if self.get(p) == CellTag.GOAL]

    def copy(self) -> "Grid":
        clone = Grid(self.size)
        clone.cells = [list(row) for row in self.cells]
        return clone

    def to_rows(self, mark_start: bool = False) -> List[str]:
        rows = ["".join(tag.value for tag in row) for row in self.cells]
        if mark_start and self.get(self.start) == CellTag.OPEN:
            rows[0] = START_CHAR + rows[0][1:]
        return rows

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Grid":
        """Parse ASCII rows ('.', '#', 'G', with 'S' read as open)."""
        if not rows:
            raise ValueError("Maze map is empty.")
        size = len(rows)
        grid = cls(size)
        for y, row in enumerate(rows):
            if len(row) != size:
                raise ValueError(
                    f"Maze map must be square: row {y} has {len(row)} cells, expected {size}."
                )
            for x, ch in enumerate(row):
                if ch == START_CHAR:
                    ch = CellTag.OPEN.value
                try:
                    grid.cells[y][x] = CellTag(ch)
                except ValueError:
                    raise ValueError(
                        f"Unknown maze character {ch!r} at ({x}, {y})."
                    ) from None
        return grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and self.cells == other.cells

    def __repr__(self) -> str:
        return f"Grid({self.size}, walls={self.count(CellTag.WALL)})"
