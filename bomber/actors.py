"""
Actor movement: player steps and enemy wandering

Traps count as walkable for move validity. Stepping on one is only
fatal for the player, and that is checked by the tick loop.
"""
import random
import logging
from typing import Tuple

from bomber.models import Enemy, EntityKind, MoveType, Player
from bomber.grid import Grid
from bomber.config import ENEMY_MOVE_THRESHOLD

logger = logging.getLogger(__name__)


def is_valid_move(grid: Grid, x: int, y: int) -> bool:
    """Target is strictly inside the border and either empty or a trap"""
    if not grid.is_interior(x, y):
        return False
    cell = grid.cell_at(x, y)
    return cell is None or cell.kind == EntityKind.TRAP


def move_player(player: Player, grid: Grid, dx: int, dy: int) -> bool:
    """
    Step the player by (dx, dy) if the target cell is valid.

    Returns True if the player moved; an invalid target is a no-op.
    """
    target = player.pos.offset(dx, dy)
    if not is_valid_move(grid, target.x, target.y):
        return False
    player.pos = target
    return True


def random_step(move_type: MoveType, rng: random.Random) -> Tuple[int, int]:
    """
    Pick a step for the given movement pattern.

    HORIZONTAL: (+-1, 0)
    VERTICAL:   (0, +-1)
    OMNI:       one of the four diagonals
    """
    if move_type == MoveType.HORIZONTAL:
        return rng.choice((1, -1)), 0
    if move_type == MoveType.VERTICAL:
        return 0, rng.choice((1, -1))
    return rng.choice((1, -1)), rng.choice((1, -1))


def update_enemy(enemy: Enemy, grid: Grid, rng: random.Random) -> bool:
    """
    Advance an enemy's move timer and maybe move it.

    The step counter increments on every update; on the update where it
    already equals ENEMY_MOVE_THRESHOLD (the 11th) it resets to 0 and the
    enemy tries one random step. An invalid step leaves it in place.

    Returns True if the enemy changed cell.
    """
    if enemy.move_step != ENEMY_MOVE_THRESHOLD:
        enemy.move_step += 1
        return False
    enemy.move_step = 0

    old_pos = enemy.pos
    dx, dy = random_step(enemy.move_type, rng)
    enemy.pos = old_pos.offset(dx, dy)

    if not is_valid_move(grid, enemy.pos.x, enemy.pos.y):
        enemy.pos = old_pos  # Move back if invalid
        return False
    return True
