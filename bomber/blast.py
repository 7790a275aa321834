"""
Bombs: planting, fuse expiry and blast propagation

Blast rules:
- Cross pattern (W/N/S/E), up to BLAST_RANGE cells, origin cell excluded
- Destructible block: destroyed, ray stops (reveals the exit if it hid it)
- Indestructible block: ray stops
- Otherwise the first enemy on the cell dies and the ray continues
- Player on a blasted cell: game lost, the whole sweep stops at once
"""
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Tuple

from bomber.models import Bomb, EntityKind, Position, swap_remove
from bomber.state import GameState, GameStatus
from bomber.grid import Grid
from bomber.logger import GameLogger
from bomber.config import NUM_BOMBS, BLAST_RANGE

logger = logging.getLogger(__name__)
game_logger = GameLogger()

# Ray order: W, N, S, E
DIRECTIONS: List[Tuple[int, int]] = [(-1, 0), (0, -1), (0, 1), (1, 0)]

BLOWN_UP = "Player was blown up by a bomb!"


@dataclass
class BlastResult:
    """Outcome of a single detonation"""
    origin: Position
    cells: Set[Tuple[int, int]] = field(default_factory=set)  # every cell the blast reached
    destroyed_blocks: List[Position] = field(default_factory=list)
    killed_enemies: List[Position] = field(default_factory=list)
    exit_revealed: bool = False
    player_killed: bool = False


@dataclass
class BlastSweep:
    """Outcome of one tick's expiry sweep"""
    results: List[BlastResult] = field(default_factory=list)
    player_killed: bool = False


def plant_bomb(state: GameState, now: float) -> Optional[Bomb]:
    """
    Plant a bomb under the player.

    Refused (returns None) when the player has no charge left or
    NUM_BOMBS bombs are already active.
    """
    player = state.player
    if not player.can_plant_bomb():
        return None
    if len(state.bombs) >= NUM_BOMBS:
        return None

    bomb = Bomb(pos=Position(player.pos.x, player.pos.y), planted_at=now)
    state.bombs.append(bomb)
    player.use_bomb()
    state.bombs_planted += 1
    game_logger.bomb(
        f"Bomb planted at ({bomb.pos.x},{bomb.pos.y}), "
        f"{player.bombs_available} left"
    )
    return bomb


def blast_ray(grid: Grid, origin: Position, dx: int, dy: int, blast_range: int = BLAST_RANGE) -> Iterator[Tuple[int, int]]:
    """In-bounds cells of one blast ray, nearest first, origin excluded"""
    for dist in range(1, blast_range + 1):
        x = origin.x + dx * dist
        y = origin.y + dy * dist
        if not grid.in_bounds(x, y):
            return
        yield x, y


def explode_bomb(state: GameState, bomb: Bomb, blast_range: int = BLAST_RANGE) -> BlastResult:
    """
    Detonate a bomb and apply its effects to the state.

    Returns early, without restoring the bomb charge, when the blast
    kills the player; the state is then LOST.
    """
    grid = state.grid
    door = state.exit_door
    result = BlastResult(origin=bomb.pos)

    for dx, dy in DIRECTIONS:
        for x, y in blast_ray(grid, bomb.pos, dx, dy, blast_range):
            result.cells.add((x, y))

            cell = grid.cell_at(x, y)
            if cell is not None and cell.kind == EntityKind.DESTRUCTIBLE_BLOCK:
                grid.clear(x, y)
                result.destroyed_blocks.append(Position(x, y))
                if door.pos.x == x and door.pos.y == y:
                    door.visible = True
                    result.exit_revealed = True
                    game_logger.exit(f"Exit door revealed at ({x},{y})")
                break
            if cell is not None and cell.kind == EntityKind.INDESTRUCTIBLE_BLOCK:
                break

            for i, enemy in enumerate(state.enemies):
                if enemy.pos.x == x and enemy.pos.y == y:
                    swap_remove(state.enemies, i)
                    result.killed_enemies.append(Position(x, y))
                    game_logger.kill(f"Enemy destroyed at ({x},{y}), {len(state.enemies)} left")
                    break

            if state.player.pos.x == x and state.player.pos.y == y:
                result.player_killed = True
                state.finish(GameStatus.LOST, BLOWN_UP)
                game_logger.death(BLOWN_UP)
                return result

    state.player.reload_bomb()
    game_logger.blast(
        f"Bomb at ({bomb.pos.x},{bomb.pos.y}) exploded: "
        f"blocks={len(result.destroyed_blocks)} enemies={len(result.killed_enemies)}"
    )
    return result


def detonate_expired(state: GameState, now: float) -> BlastSweep:
    """
    Explode every bomb whose fuse has elapsed.

    Bombs are removed with swap-remove, so after a removal the same
    index is checked again. A player death aborts the sweep.
    """
    sweep = BlastSweep()
    i = 0
    while i < len(state.bombs):
        bomb = state.bombs[i]
        if not bomb.should_explode(now):
            i += 1
            continue

        result = explode_bomb(state, bomb)
        sweep.results.append(result)
        if result.player_killed:
            sweep.player_killed = True
            return sweep
        swap_remove(state.bombs, i)

    return sweep
