"""
State models for a running game
"""
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from bomber.models import Player, Enemy, Bomb, ExitDoor, Position, symbol_for
from bomber.grid import Grid, generate_world
from bomber.config import PLAYER_START, WIDTH, HEIGHT


class GameStatus(Enum):
    """Game state machine: PLAYING until a terminal outcome"""
    PLAYING = "playing"
    LOST = "lost"
    WON = "won"


@dataclass(frozen=True)
class GameView:
    """Read-only snapshot handed to the presentation layer"""
    rows: Tuple[str, ...]
    player: Tuple[int, int]
    enemies: Tuple[Tuple[int, int, str], ...]  # (x, y, symbol)
    bombs: Tuple[Tuple[int, int, str], ...]
    exit_pos: Tuple[int, int]
    exit_visible: bool
    exit_carrier: Optional[Tuple[int, int]]  # hidden-exit block, if still standing
    bombs_planted: int
    bombs_available: int
    status: GameStatus
    cause: str

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)


@dataclass
class GameState:
    """Complete mutable state of one game"""
    grid: Grid
    player: Player
    enemies: List[Enemy]
    exit_door: ExitDoor
    bombs: List[Bomb] = field(default_factory=list)
    bombs_planted: int = 0
    status: GameStatus = GameStatus.PLAYING
    cause: str = ""  # reason for the terminal status

    @classmethod
    def new(cls, rng: random.Random, width: int = WIDTH, height: int = HEIGHT) -> 'GameState':
        """Start a new game on a freshly generated arena"""
        world = generate_world(rng, width, height)
        return cls(
            grid=world.grid,
            player=Player(Position(*PLAYER_START)),
            enemies=world.enemies,
            exit_door=world.exit_door,
        )

    @property
    def is_over(self) -> bool:
        return self.status != GameStatus.PLAYING

    def finish(self, status: GameStatus, cause: str):
        self.status = status
        self.cause = cause

    def exit_carrier_pos(self) -> Optional[Tuple[int, int]]:
        door = self.exit_door.pos
        cell = self.grid.cell_at(door.x, door.y)
        if cell is not None and getattr(cell, "exit_carrier", False):
            return door.to_tuple()
        return None

    def view(self) -> GameView:
        return GameView(
            rows=tuple(self.grid.symbol_rows()),
            player=self.player.pos.to_tuple(),
            enemies=tuple((e.pos.x, e.pos.y, symbol_for(e)) for e in self.enemies),
            bombs=tuple((b.pos.x, b.pos.y, symbol_for(b)) for b in self.bombs),
            exit_pos=self.exit_door.pos.to_tuple(),
            exit_visible=self.exit_door.visible,
            exit_carrier=self.exit_carrier_pos(),
            bombs_planted=self.bombs_planted,
            bombs_available=self.player.bombs_available,
            status=self.status,
            cause=self.cause,
        )
