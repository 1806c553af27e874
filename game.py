from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import List, Optional

import pygame

from config_io import load_json_config
from config_parsing import parse_maze_config, parse_viewer_settings
from grid import Grid
from level_loader import read_maze_map
from maze_generator import MazeGenerator
from models import Action, Position
from pathfinding import find_path
from rendering import MazeRenderer
from robot import PATHFINDING_REWARD, ProgramPlayback, plan_program, start_state

logger = logging.getLogger(__name__)

KEY_ACTIONS = {
    pygame.K_UP: Action.FORWARD,
    pygame.K_LEFT: Action.TURN_LEFT,
    pygame.K_RIGHT: Action.TURN_RIGHT,
}


class MazeGame:
    """Pathfinding level: program the robot to reach the goal."""

    def __init__(
        self,
        cfg_path: Path,
        map_path: Optional[Path] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.cfg = load_json_config(cfg_path)
        self.maze_cfg = parse_maze_config(self.cfg)
        self.settings = parse_viewer_settings(self.cfg)
        self.generator = MazeGenerator(random.Random(seed))
        self.map_path = map_path

        self.program: List[Action] = []
        self.playback: Optional[ProgramPlayback] = None
        self.show_hint = self.settings.show_path
        self.score = 0
        self.status = ""

        self._init_pygame()
        self.renderer = MazeRenderer(self.settings.window_w, self.settings.window_h)
        self.grid = self._build_grid()
        self.robot = start_state(self.grid)
        self.hint_path: List[Position] = find_path(self.grid, self.grid.start, self.grid.goal)
        self.tile_size = self.renderer.tile_size_for(self.grid, self.settings.tile_size)

    # ----------------------------
    # Initialization
    # ----------------------------

    def _init_pygame(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((self.settings.window_w, self.settings.window_h))
        pygame.display.set_caption(self.settings.title)
        self.clock = pygame.time.Clock()

    def _build_grid(self) -> Grid:
        if self.map_path is not None:
            return read_maze_map(self.map_path)
        return self.generator.generate(self.maze_cfg)

    def new_maze(self) -> None:
        """Discard the current maze and program and generate a fresh one."""
        self.map_path = None
        self.grid = self._build_grid()
        self.hint_path = find_path(self.grid, self.grid.start, self.grid.goal)
        self.tile_size = self.renderer.tile_size_for(self.grid, self.settings.tile_size)
        self.clear_program()
        self.status = "New maze generated."

    # ----------------------------
    # Program editing / execution
    # ----------------------------

    def clear_program(self) -> None:
        self.program = []
        self.playback = None
        self.robot = start_state(self.grid)
        self.status = ""

    def run_program(self) -> None:
        if not self.program:
            self.status = "Add some actions first (arrow keys)."
            return
        self.playback = ProgramPlayback(self.grid, self.program, self.settings.step_ms)
        self.robot = self.playback.state

    def _finish_program(self) -> None:
        if self.playback is None:
            return
        goal = self.grid.goal
        if self.playback.succeeded():
            self.score += PATHFINDING_REWARD
            self.status = f"Robot reached the GOAL! +{PATHFINDING_REWARD} points"
        else:
            pos = self.robot.position
            self.status = (
                f"Robot stopped at ({pos.x + 1}, {pos.y + 1}). "
                f"Goal is at ({goal.x + 1}, {goal.y + 1})."
            )
        logger.info("program of %d actions finished: %s", len(self.program), self.status)
        self.playback = None

    def update(self, dt_ms: int) -> None:
        if self.playback is None:
            return
        self.robot = self.playback.advance(dt_ms)
        if self.playback.finished:
            self._finish_program()

    # ----------------------------
    # Events / loop
    # ----------------------------

    def _handle_keydown(self, key: int) -> bool:
        """Handle KEYDOWN events.

        Returns:
            False if the game should exit, True otherwise.
        """
        if key == pygame.K_ESCAPE:
            return False
        if self.playback is not None:
            return True
        if key in KEY_ACTIONS:
            self.program.append(KEY_ACTIONS[key])
        elif key == pygame.K_BACKSPACE and self.program:
            self.program.pop()
        elif key == pygame.K_RETURN:
            self.run_program()
        elif key == pygame.K_c:
            self.clear_program()
        elif key == pygame.K_h:
            self.show_hint = not self.show_hint
        elif key == pygame.K_n:
            self.new_maze()
        return True

    def _handle_events(self) -> bool:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            if e.type == pygame.KEYDOWN and not self._handle_keydown(e.key):
                return False
        return True

    def _hud_lines(self) -> List[str]:
        program = " ".join(a.value for a in self.program) or "(empty)"
        hint = " ".join(a.value for a in plan_program(self.hint_path)) if self.show_hint else ""
        lines = [
            f"Score: {self.score} | Facing: {self.robot.direction.value.upper()}",
            f"Program: {program}",
            "UP fwd | LEFT/RIGHT turn | BKSP undo | ENTER run | C clear | H hint | N new",
        ]
        if hint:
            lines.append(f"Hint: {hint}")
        if self.status:
            lines.append(self.status)
        return lines

    def run(self) -> None:
        """Run the main loop."""
        running = True
        while running:
            dt_ms = self.clock.tick(60)
            running = self._handle_events()
            self.update(dt_ms)
            self.renderer.render_frame(
                screen=self.screen,
                bg=self.settings.bg,
                grid=self.grid,
                robot=self.robot,
                tile_size=self.tile_size,
                hud_lines=self._hud_lines(),
                hint_path=self.hint_path if self.show_hint else None,
            )
        pygame.quit()
