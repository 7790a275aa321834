"""
Grid: fixed-size cell store and world generation

Each cell holds at most one static occupant (Block or Trap) or None.
Actors (player, enemies, bombs) and the exit door live outside the grid.
"""
import random
import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from bomber.models import Position, Block, Trap, Enemy, ExitDoor, MoveType, CellContent, symbol_for
from bomber.config import WIDTH, HEIGHT, PLAYER_START, START_AREA, ENEMY_COUNT, TRAP_COUNT

logger = logging.getLogger(__name__)


class Grid:
    """
    Owning 2D store, indexed as cells[y][x].

    All access goes through bounds-checked accessors; out-of-range
    coordinates raise IndexError.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        self.width = width
        self.height = height
        self.cells: List[List[Optional[CellContent]]] = [
            [None] * width for _ in range(height)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_interior(self, x: int, y: int) -> bool:
        """Strictly inside the border"""
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    def is_border(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and not self.is_interior(x, y)

    def _check(self, x: int, y: int):
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")

    def cell_at(self, x: int, y: int) -> Optional[CellContent]:
        self._check(x, y)
        return self.cells[y][x]

    def is_empty(self, x: int, y: int) -> bool:
        return self.cell_at(x, y) is None

    def clear(self, x: int, y: int) -> Optional[CellContent]:
        """Remove the occupant of a cell and return it"""
        self._check(x, y)
        occupant = self.cells[y][x]
        self.cells[y][x] = None
        return occupant

    def place(self, x: int, y: int, content: CellContent):
        """Put content into a cell, replacing any occupant"""
        self._check(x, y)
        self.cells[y][x] = content

    def symbol_rows(self) -> List[str]:
        """HEIGHT strings of WIDTH symbols, space for empty cells"""
        return ["".join(symbol_for(cell) for cell in row) for row in self.cells]


@dataclass
class World:
    """Freshly generated arena contents"""
    grid: Grid
    enemies: List[Enemy]
    exit_door: ExitDoor


def _random_interior(grid: Grid, rng: random.Random) -> Tuple[int, int]:
    x = rng.randrange(grid.width - 2) + 1
    y = rng.randrange(grid.height - 2) + 1
    return x, y


def sample_free_cell(
    grid: Grid,
    rng: random.Random,
    avoid: Set[Tuple[int, int]] = frozenset(),
) -> Tuple[int, int]:
    """
    Uniformly sample interior cells until one is empty, is not the
    player start and is not in `avoid`.
    """
    while True:
        x, y = _random_interior(grid, rng)
        if grid.is_empty(x, y) and (x, y) != PLAYER_START and (x, y) not in avoid:
            return x, y


def generate_world(rng: random.Random, width: int = WIDTH, height: int = HEIGHT) -> World:
    """
    Build a new arena.

    - Border: indestructible walls
    - Interior: wall with p=1/width, otherwise destructible block with p=1/height
    - Traps, then enemies, at free interior cells (never on the start cell)
    - Start area (3x3 from the player start) cleared
    - Exit door hidden under an exit-carrier block at a free cell outside
      the start area and off every enemy

    Connectivity between player, exit and enemies is not guaranteed.
    """
    grid = Grid(width, height)

    for y in range(height):
        for x in range(width):
            if grid.is_border(x, y):
                grid.place(x, y, Block(Position(x, y), destructible=False))
            elif rng.randrange(width) == 0:
                grid.place(x, y, Block(Position(x, y), destructible=False))
            elif rng.randrange(height) == 0:
                grid.place(x, y, Block(Position(x, y), destructible=True))

    for _ in range(TRAP_COUNT):
        x, y = sample_free_cell(grid, rng)
        grid.place(x, y, Trap(Position(x, y)))

    # Enemies are not grid occupants, so two may share a cell
    enemies = []
    for i in range(ENEMY_COUNT):
        x, y = sample_free_cell(grid, rng)
        enemies.append(Enemy(Position(x, y), MoveType(i % 3)))

    sx, sy = PLAYER_START
    start_area = set()
    for y in range(sy, sy + START_AREA):
        for x in range(sx, sx + START_AREA):
            grid.clear(x, y)
            start_area.add((x, y))

    # The carrier block must not land in the start area or under an enemy
    ex, ey = sample_free_cell(grid, rng, avoid=start_area | {e.pos.to_tuple() for e in enemies})
    exit_door = ExitDoor(Position(ex, ey))
    grid.place(ex, ey, Block(Position(ex, ey), destructible=True, exit_carrier=True))

    logger.debug(
        f"Generated {width}x{height} arena: "
        f"{len(enemies)} enemies, exit at ({ex},{ey})"
    )
    return World(grid=grid, enemies=enemies, exit_door=exit_door)
