"""
Save/load of the single save slot

File layout (plain text, one field group per line):

    <playerX> <playerY>
    <bombsPlanted>
    <enemyCount>
    <enemyX> <enemyY> <moveType>      x enemyCount
    <bombCount>
    <bombX> <bombY>                   x bombCount
    <exitX> <exitY> <exitVisible:0|1>
    <HEIGHT rows of WIDTH characters>

Loading parses the whole file into a validated Snapshot before a new
GameState is built, so a corrupt file never leaves a half-built game.
Bomb fuses are not stored: loaded bombs start a fresh fuse.
"""
import logging
from typing import Callable, List

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from bomber.models import Position, Player, Enemy, Bomb, Block, Trap, ExitDoor, MoveType
from bomber.grid import Grid
from bomber.state import GameState
from bomber.errors import SaveError, LoadError
from bomber.logger import SystemLogger
from bomber.config import (
    WIDTH,
    HEIGHT,
    NUM_BOMBS,
    DESTRUCTIBLE_BLOCK,
    INDESTRUCTIBLE_BLOCK,
    EXIT_DOOR,
    TRAP,
    EMPTY,
)
from utils.time import get_current_time

logger = logging.getLogger(__name__)
system_logger = SystemLogger()

GRID_SYMBOLS = {DESTRUCTIBLE_BLOCK, INDESTRUCTIBLE_BLOCK, EXIT_DOOR, TRAP, EMPTY}
BLOCKING_SYMBOLS = {DESTRUCTIBLE_BLOCK, INDESTRUCTIBLE_BLOCK}


def _check_interior(x: int, y: int, what: str):
    if not (0 < x < WIDTH - 1 and 0 < y < HEIGHT - 1):
        raise ValueError(f"{what} at ({x}, {y}) is outside the arena interior")


class EnemyRecord(BaseModel):
    x: int
    y: int
    move_type: MoveType


class BombRecord(BaseModel):
    x: int
    y: int


class ExitRecord(BaseModel):
    x: int
    y: int
    visible: bool = False


class Snapshot(BaseModel):
    """Staging structure for one save file"""
    player_x: int
    player_y: int
    bombs_planted: int = Field(ge=0)
    enemies: List[EnemyRecord] = Field(default_factory=list)
    bombs: List[BombRecord] = Field(default_factory=list, max_length=NUM_BOMBS)
    exit_door: ExitRecord
    rows: List[str]

    @field_validator("rows")
    @classmethod
    def check_rows(cls, rows: List[str]) -> List[str]:
        if len(rows) != HEIGHT:
            raise ValueError(f"expected {HEIGHT} grid rows, got {len(rows)}")
        for y, row in enumerate(rows):
            if len(row) != WIDTH:
                raise ValueError(f"grid row {y} has {len(row)} cells, expected {WIDTH}")
            unknown = set(row) - GRID_SYMBOLS
            if unknown:
                raise ValueError(f"grid row {y} has unknown symbols {sorted(unknown)}")
            for x, symbol in enumerate(row):
                on_border = x in (0, WIDTH - 1) or y in (0, HEIGHT - 1)
                if on_border and symbol != INDESTRUCTIBLE_BLOCK:
                    raise ValueError(f"border cell ({x}, {y}) is not a wall")
        return rows

    @model_validator(mode="after")
    def check_positions(self) -> 'Snapshot':
        _check_interior(self.exit_door.x, self.exit_door.y, "exit door")
        # A hidden exit is rebuilt as a block on load
        hidden_exit = None if self.exit_door.visible else (self.exit_door.x, self.exit_door.y)

        actors = [("player", self.player_x, self.player_y)]
        actors.extend(("enemy", e.x, e.y) for e in self.enemies)
        actors.extend(("bomb", b.x, b.y) for b in self.bombs)
        for what, x, y in actors:
            _check_interior(x, y, what)
            if self.rows[y][x] in BLOCKING_SYMBOLS or (x, y) == hidden_exit:
                raise ValueError(f"{what} at ({x}, {y}) is inside a block")
        return self


def snapshot_from_state(state: GameState) -> Snapshot:
    """Capture the persisted fields of a game"""
    return Snapshot(
        player_x=state.player.pos.x,
        player_y=state.player.pos.y,
        bombs_planted=state.bombs_planted,
        enemies=[
            EnemyRecord(x=e.pos.x, y=e.pos.y, move_type=e.move_type)
            for e in state.enemies
        ],
        bombs=[BombRecord(x=b.pos.x, y=b.pos.y) for b in state.bombs],
        exit_door=ExitRecord(
            x=state.exit_door.pos.x,
            y=state.exit_door.pos.y,
            visible=state.exit_door.visible,
        ),
        rows=state.grid.symbol_rows(),
    )


def dump_snapshot(snapshot: Snapshot) -> str:
    lines = [
        f"{snapshot.player_x} {snapshot.player_y}",
        str(snapshot.bombs_planted),
        str(len(snapshot.enemies)),
    ]
    lines.extend(f"{e.x} {e.y} {int(e.move_type)}" for e in snapshot.enemies)
    lines.append(str(len(snapshot.bombs)))
    lines.extend(f"{b.x} {b.y}" for b in snapshot.bombs)
    door = snapshot.exit_door
    lines.append(f"{door.x} {door.y} {int(door.visible)}")
    lines.extend(snapshot.rows)
    return "\n".join(lines) + "\n"


class _Reader:
    """Line cursor over the header part of a save file"""

    def __init__(self, lines: List[str]):
        self.lines = lines
        self.index = 0

    def next_line(self) -> str:
        if self.index >= len(self.lines):
            raise LoadError(f"save file truncated at line {self.index + 1}")
        line = self.lines[self.index]
        self.index += 1
        return line

    def ints(self, count: int) -> List[int]:
        line_no = self.index + 1
        parts = self.next_line().split()
        if len(parts) != count:
            raise LoadError(f"line {line_no}: expected {count} numbers, got {len(parts)}")
        try:
            return [int(p) for p in parts]
        except ValueError:
            raise LoadError(f"line {line_no}: not a number: {' '.join(parts)!r}")


def parse_snapshot(text: str) -> Snapshot:
    """Parse and validate save file text; raises LoadError"""
    reader = _Reader(text.split("\n"))

    player_x, player_y = reader.ints(2)
    (bombs_planted,) = reader.ints(1)

    (enemy_count,) = reader.ints(1)
    if enemy_count < 0:
        raise LoadError(f"negative enemy count {enemy_count}")
    enemies = []
    for _ in range(enemy_count):
        x, y, move_type = reader.ints(3)
        enemies.append({"x": x, "y": y, "move_type": move_type})

    (bomb_count,) = reader.ints(1)
    if bomb_count < 0:
        raise LoadError(f"negative bomb count {bomb_count}")
    bombs = [dict(zip(("x", "y"), reader.ints(2))) for _ in range(bomb_count)]

    exit_x, exit_y, visible = reader.ints(3)
    if visible not in (0, 1):
        raise LoadError(f"exit visibility must be 0 or 1, got {visible}")

    rows = []
    for _ in range(HEIGHT):
        # Editors may strip trailing spaces or add \r
        row = reader.next_line().rstrip("\r")
        rows.append(row.ljust(WIDTH, EMPTY))

    try:
        return Snapshot(
            player_x=player_x,
            player_y=player_y,
            bombs_planted=bombs_planted,
            enemies=enemies,
            bombs=bombs,
            exit_door={"x": exit_x, "y": exit_y, "visible": bool(visible)},
            rows=rows,
        )
    except ValidationError as e:
        raise LoadError(f"invalid save file: {e.error_count()} error(s): {e.errors()[0]['msg']}") from e


def state_from_snapshot(snapshot: Snapshot, now: float) -> GameState:
    """
    Build a fresh GameState from a validated snapshot.

    The exit door is never stored in the grid; when it is still hidden
    its exit-carrier block is rebuilt at the door position.
    """
    grid = Grid(WIDTH, HEIGHT)
    for y, row in enumerate(snapshot.rows):
        for x, symbol in enumerate(row):
            pos = Position(x, y)
            if symbol == INDESTRUCTIBLE_BLOCK:
                grid.place(x, y, Block(pos, destructible=False))
            elif symbol == DESTRUCTIBLE_BLOCK:
                grid.place(x, y, Block(pos, destructible=True))
            elif symbol == TRAP:
                grid.place(x, y, Trap(pos))

    door = ExitDoor(Position(snapshot.exit_door.x, snapshot.exit_door.y), visible=snapshot.exit_door.visible)
    if not door.visible:
        grid.place(door.pos.x, door.pos.y, Block(Position(door.pos.x, door.pos.y), destructible=True, exit_carrier=True))

    bombs = [Bomb(Position(b.x, b.y), planted_at=now) for b in snapshot.bombs]
    return GameState(
        grid=grid,
        player=Player(Position(snapshot.player_x, snapshot.player_y), bombs_available=NUM_BOMBS - len(bombs)),
        enemies=[Enemy(Position(e.x, e.y), e.move_type) for e in snapshot.enemies],
        exit_door=door,
        bombs=bombs,
        bombs_planted=snapshot.bombs_planted,
    )


def save_game(state: GameState, path: str):
    """Write the game to the save slot; raises SaveError"""
    text = dump_snapshot(snapshot_from_state(state))
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
    except OSError as e:
        system_logger.error(f"Unable to save game to {path}: {e}")
        raise SaveError(f"unable to save game to {path}") from e
    system_logger.info(
        f"Game saved to {path} "
        f"(enemies={len(state.enemies)}, bombs={len(state.bombs)})"
    )


def load_game(path: str, clock: Callable[[], float] = get_current_time) -> GameState:
    """Read the save slot into a new GameState; raises LoadError"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError as e:
        system_logger.warning(f"No saved game at {path}")
        raise LoadError(f"no saved game at {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        system_logger.error(f"Unable to read {path}: {e}")
        raise LoadError(f"unable to read {path}") from e

    try:
        snapshot = parse_snapshot(text)
    except LoadError as e:
        system_logger.error(f"Corrupt save file {path}: {e}")
        raise
    state = state_from_snapshot(snapshot, clock())
    system_logger.info(
        f"Game loaded from {path} "
        f"(enemies={len(state.enemies)}, bombs={len(state.bombs)}, exit_visible={state.exit_door.visible})"
    )
    return state
