"""
Simulation loop: one command in, one tick of world update

Tick order:
1. Player/enemy collision  -> lost
2. Player/trap collision   -> lost
3. Enemy moves
4. Bomb expiry sweep       -> lost if the player is caught in a blast
5. Win check (player on the revealed exit)
"""
import random
import logging
from typing import Callable, Optional

from bomber.models import Command, DIRECTIONS, EntityKind
from bomber.state import GameState, GameStatus
from bomber.actors import move_player, update_enemy
from bomber.blast import plant_bomb, detonate_expired
from bomber.logger import GameLogger
from utils.time import get_current_time

logger = logging.getLogger(__name__)
game_logger = GameLogger()

CAUGHT = "Player was caught by an enemy!"
TRAPPED = "Player stepped on a trap!"
WIN = "YOU WIN!"


class Game:
    """
    Drives a GameState forward.

    The loop never reads input itself: the caller applies at most one
    command per tick with apply() and then calls update().
    """

    def __init__(
        self,
        state: GameState,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = get_current_time,
    ):
        self.state = state
        self.rng = rng or random.Random()
        self.clock = clock
        self.tick_count = 0

    def apply(self, command: Optional[Command]) -> bool:
        """
        Apply a movement or plant command.

        Returns True if the state changed. Other commands, None and any
        command after the game ended are ignored.
        """
        if command is None or self.state.is_over:
            return False

        if command in DIRECTIONS:
            dx, dy = DIRECTIONS[command]
            moved = move_player(self.state.player, self.state.grid, dx, dy)
            if moved:
                pos = self.state.player.pos
                game_logger.movement(f"Player -> ({pos.x},{pos.y})")
            return moved

        if command == Command.PLANT_BOMB:
            return plant_bomb(self.state, self.clock()) is not None

        return False

    def update(self, now: Optional[float] = None) -> GameStatus:
        """Run one tick and return the resulting status"""
        state = self.state
        if state.is_over:
            return state.status

        self.tick_count += 1
        if now is None:
            now = self.clock()
        player = state.player

        for enemy in state.enemies:
            if enemy.pos.x == player.pos.x and enemy.pos.y == player.pos.y:
                return self._lose(CAUGHT)

        cell = state.grid.cell_at(player.pos.x, player.pos.y)
        if cell is not None and cell.kind == EntityKind.TRAP:
            return self._lose(TRAPPED)

        for enemy in state.enemies:
            update_enemy(enemy, state.grid, self.rng)

        sweep = detonate_expired(state, now)
        if sweep.player_killed:
            return state.status

        door = state.exit_door
        if door.visible and door.pos.x == player.pos.x and door.pos.y == player.pos.y:
            state.finish(GameStatus.WON, WIN)
            game_logger.win(f"Exit reached after {self.tick_count} ticks")

        return state.status

    def _lose(self, cause: str) -> GameStatus:
        self.state.finish(GameStatus.LOST, cause)
        game_logger.death(cause)
        return self.state.status
