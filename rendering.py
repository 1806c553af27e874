from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import pygame

from game_types import Color
from grid import Grid
from models import CellTag, Direction, Position, RobotState

CELL_COLORS: Dict[CellTag, Color] = {
    CellTag.OPEN: (38, 44, 60),
    CellTag.WALL: (225, 228, 236),
    CellTag.GOAL: (220, 70, 70),
}
START_COLOR: Color = (60, 120, 220)
ROBOT_COLOR: Color = (241, 196, 15)
PATH_COLOR: Color = (46, 204, 113)
GRID_LINE_COLOR: Color = (70, 76, 94)
HUD_TEXT_COLOR: Color = (255, 255, 255)


def cell_rect(pos: Position, tile_size: int, origin: Tuple[int, int] = (0, 0)) -> pygame.Rect:
    """Screen rect for a grid cell."""
    ox, oy = origin
    return pygame.Rect(ox + pos[0] * tile_size, oy + pos[1] * tile_size, tile_size, tile_size)


def draw_maze(
    surf: pygame.Surface,
    grid: Grid,
    tile_size: int,
    origin: Tuple[int, int] = (0, 0),
) -> None:
    """Draw every cell, the start marker and grid lines."""
    for pos in grid.positions():
        rect = cell_rect(pos, tile_size, origin)
        tag = grid.get(pos)
        color = START_COLOR if pos == grid.start and tag == CellTag.OPEN else CELL_COLORS[tag]
        pygame.draw.rect(surf, color, rect)
        pygame.draw.rect(surf, GRID_LINE_COLOR, rect, 1)


def draw_path(
    surf: pygame.Surface,
    path: Sequence[Position],
    tile_size: int,
    origin: Tuple[int, int] = (0, 0),
) -> None:
    """Draw a hint route as a polyline through cell centres."""
    if len(path) < 2:
        return
    points = [cell_rect(p, tile_size, origin).center for p in path]
    pygame.draw.lines(surf, PATH_COLOR, False, points, max(2, tile_size // 10))


def _robot_triangle(rect: pygame.Rect, direction: Direction) -> List[Tuple[int, int]]:
    inset = max(2, rect.width // 5)
    r = rect.inflate(-2 * inset, -2 * inset)
    if direction == Direction.UP:
        return [(r.centerx, r.top), (r.right, r.bottom), (r.left, r.bottom)]
    if direction == Direction.DOWN:
        return [(r.centerx, r.bottom), (r.left, r.top), (r.right, r.top)]
    if direction == Direction.LEFT:
        return [(r.left, r.centery), (r.right, r.top), (r.right, r.bottom)]
    return [(r.right, r.centery), (r.left, r.bottom), (r.left, r.top)]


def draw_robot(
    surf: pygame.Surface,
    state: RobotState,
    tile_size: int,
    origin: Tuple[int, int] = (0, 0),
) -> None:
    """Draw the robot as a triangle pointing where it faces."""
    rect = cell_rect(state.position, tile_size, origin)
    pygame.draw.polygon(surf, ROBOT_COLOR, _robot_triangle(rect, state.direction))


def draw_hud(
    surf: pygame.Surface,
    hud_font: pygame.font.Font,
    lines: Sequence[str],
    top: int,
) -> None:
    """Draw HUD text lines below the maze."""
    y = top + 8
    for line in lines:
        surf.blit(hud_font.render(line, True, HUD_TEXT_COLOR), (12, y))
        y += hud_font.get_height() + 4


class MazeRenderer:
    """Keeps fonts and layout for the maze viewer."""

    def __init__(self, window_w: int, window_h: int, font_size: int = 20) -> None:
        self.window_w = window_w
        self.window_h = window_h
        self.hud_font = pygame.font.SysFont("monospace", font_size)

    def tile_size_for(self, grid: Grid, preferred: int) -> int:
        """Shrink tiles so the maze fits the window width."""
        return max(4, min(preferred, self.window_w // grid.size))

    def render_frame(
        self,
        screen: pygame.Surface,
        bg: Color,
        grid: Grid,
        robot: RobotState,
        tile_size: int,
        hud_lines: Sequence[str],
        hint_path: Optional[Sequence[Position]] = None,
    ) -> None:
        """Render and present a full frame."""
        screen.fill(bg)
        draw_maze(screen, grid, tile_size)
        if hint_path:
            draw_path(screen, hint_path, tile_size)
        draw_robot(screen, robot, tile_size)
        draw_hud(screen, self.hud_font, hud_lines, grid.size * tile_size)
        pygame.display.flip()
