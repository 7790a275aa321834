"""
Shared helpers: a controllable clock and hand-built arenas
"""
import random
import pytest

from bomber.grid import Grid
from bomber.models import Block, Position, Player, ExitDoor
from bomber.state import GameState
from bomber.config import WIDTH, HEIGHT


class FakeClock:
    """Clock the test advances by hand"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def walled_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Empty arena with only the border walls"""
    grid = Grid(width, height)
    for y in range(height):
        for x in range(width):
            if grid.is_border(x, y):
                grid.place(x, y, Block(Position(x, y), destructible=False))
    return grid


def build_state(player=(1, 1), exit_pos=(50, 20), exit_hidden=True, enemies=None) -> GameState:
    """Full-size empty arena with the exit hidden (or revealed) at exit_pos"""
    grid = walled_grid()
    door = ExitDoor(Position(*exit_pos))
    if exit_hidden:
        grid.place(*exit_pos, Block(Position(*exit_pos), destructible=True, exit_carrier=True))
    else:
        door.visible = True
    return GameState(
        grid=grid,
        player=Player(Position(*player)),
        enemies=list(enemies or []),
        exit_door=door,
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_state():
    return build_state
