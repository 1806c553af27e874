from __future__ import annotations

from typing import Iterable, List, Sequence

from grid import Grid
from models import Action, CellTag, Direction, Position, RobotState

PATHFINDING_REWARD = 300


def start_state(grid: Grid) -> RobotState:
    return RobotState(position=grid.start, direction=Direction.RIGHT)


def step(grid: Grid, state: RobotState, action: Action) -> RobotState:
    """Apply one action. Moving into a wall or off the grid leaves the robot in place."""
    if action == Action.TURN_LEFT:
        return RobotState(state.position, state.direction.turned(clockwise=False))
    if action == Action.TURN_RIGHT:
        return RobotState(state.position, state.direction.turned(clockwise=True))

    dx, dy = state.direction.delta
    target = Position(state.position.x + dx, state.position.y + dy)
    if not grid.in_bounds(target) or grid.is_wall(target):
        return state
    return RobotState(target, state.direction)


def run_program(grid: Grid, actions: Iterable[Action]) -> List[RobotState]:
    """Execute a program from the start state and return every state visited."""
    state = start_state(grid)
    trace = [state]
    for action in actions:
        state = step(grid, state, action)
        trace.append(state)
    return trace


def reached_goal(grid: Grid, state: RobotState) -> bool:
    return grid.get(state.position) == CellTag.GOAL


def score_program(grid: Grid, actions: Sequence[Action]) -> int:
    final = run_program(grid, actions)[-1]
    return PATHFINDING_REWARD if reached_goal(grid, final) else 0


def parse_program(text: str) -> List[Action]:
    """Parse a comma/whitespace separated program such as "forward, turnLeft".

    Raises:
        ValueError: If a token is not a known action.
    """
    by_name = {a.value.lower(): a for a in Action}
    actions: List[Action] = []
    for token in text.replace(",", " ").split():
        action = by_name.get(token.lower())
        if action is None:
            raise ValueError(
                f"Unknown action {token!r}; expected one of "
                + ", ".join(a.value for a in Action)
            )
        actions.append(action)
    return actions


class ProgramPlayback:
    """Replays a precomputed trace one state per step_ms of elapsed time."""

    def __init__(self, grid: Grid, actions: Sequence[Action], step_ms: int) -> None:
        self.grid = grid
        self.trace = run_program(grid, actions)
        self.step_ms = max(0, step_ms)
        self.index = 0
        self._elapsed_ms = 0

    @property
    def state(self) -> RobotState:
        return self.trace[self.index]

    @property
    def finished(self) -> bool:
        return self.index >= len(self.trace) - 1

    def advance(self, dt_ms: int) -> RobotState:
        if self.finished:
            return self.state
        if self.step_ms == 0:
            self.index = len(self.trace) - 1
            return self.state
        self._elapsed_ms += dt_ms
        while self._elapsed_ms >= self.step_ms and not self.finished:
            self._elapsed_ms -= self.step_ms
            self.index += 1
        return self.state

    def succeeded(self) -> bool:
        return self.finished and reached_goal(self.grid, self.state)


def plan_program(path: Sequence[Position]) -> List[Action]:
    """Turn a cell path into robot actions, starting from the default heading."""
    actions: List[Action] = []
    heading = Direction.RIGHT
    for cur, nxt in zip(path, path[1:]):
        delta = (nxt[0] - cur[0], nxt[1] - cur[1])
        wanted = next(d for d in Direction if d.delta == delta)
        while heading != wanted:
            clockwise = heading.turned(clockwise=True) == wanted or (
                heading.turned(clockwise=True).turned(clockwise=True) == wanted
            )
            if clockwise:
                actions.append(Action.TURN_RIGHT)
                heading = heading.turned(clockwise=True)
            else:
                actions.append(Action.TURN_LEFT)
                heading = heading.turned(clockwise=False)
        actions.append(Action.FORWARD)
    return actions
