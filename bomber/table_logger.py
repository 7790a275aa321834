"""
Table-style logger for game state snapshots
"""
from typing import Tuple

from bomber.state import GameState
from bomber.logger import SystemLogger

logger = SystemLogger()


def format_position(pos: Tuple[int, int]) -> str:
    """Format position tuple"""
    return f"({pos[0]:3d}, {pos[1]:3d})"


def format_table(state: GameState, tick: int) -> str:
    """
    Render the game state as a fixed-width table

    One row for the player, one per enemy, one per active bomb and
    one for the exit door.
    """
    header = (
        f"🎮 Tick {tick} | 💣 Planted {state.bombs_planted} | "
        f"Charges {state.player.bombs_available} | Status {state.status.value}"
    )
    separator = "-" * 60
    table_header = f"{'ENTITY':<10} | {'POS':<12} | {'INFO':<30}"

    rows = [f"{'player':<10} | {format_position(state.player.pos.to_tuple()):<12} | {'':<30}"]
    for enemy in state.enemies:
        info = f"{enemy.move_type.name.lower()} step={enemy.move_step}"
        rows.append(f"{'enemy':<10} | {format_position(enemy.pos.to_tuple()):<12} | {info:<30}")
    for bomb in state.bombs:
        rows.append(f"{'bomb':<10} | {format_position(bomb.pos.to_tuple()):<12} | {'':<30}")
    door_info = "visible" if state.exit_door.visible else "hidden"
    rows.append(f"{'exit':<10} | {format_position(state.exit_door.pos.to_tuple()):<12} | {door_info:<30}")

    table_parts = [separator, header, separator, table_header, separator]
    table_parts.extend(rows)
    table_parts.append(separator)
    return "\n".join(table_parts)


def log_status_table(state: GameState, tick: int):
    """Log the game table as a single message"""
    logger.info("\n" + format_table(state, tick))
