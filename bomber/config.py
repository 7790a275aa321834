"""
Configuration for the terminal Bomberman engine

Game rules (fixed):
- Arena: 60x30, border is indestructible
- Player starts at (1, 1) with 3 bombs, 3x3 start area kept clear
- Bomb: cross pattern, range 3, fuse 3s, max 3 active at once
- Enemies move every 11th update, traps kill the player on contact
- One save slot, plain text snapshot
"""
import os
from typing import Optional

# Arena
WIDTH: int = 60
HEIGHT: int = 30

# Entity symbols (also used in the save file grid)
PLAYER: str = "P"
ENEMY: str = "E"
BOMB: str = "B"
DESTRUCTIBLE_BLOCK: str = "#"
INDESTRUCTIBLE_BLOCK: str = "X"
EXIT_DOOR: str = "D"
TRAP: str = "T"
EMPTY: str = " "

# Bombs
NUM_BOMBS: int = 3  # active bombs at a time, also the player's charge cap
BOMB_FUSE: float = 3.0  # seconds
BLAST_RANGE: int = 3  # cells per ray

# Actors
PLAYER_START: tuple[int, int] = (1, 1)
START_AREA: int = 3  # cleared square in front of the player start
ENEMY_MOVE_THRESHOLD: int = 10  # enemy moves when its step counter reaches this
ENEMY_COUNT: int = (HEIGHT + WIDTH) // 10
TRAP_COUNT: int = (HEIGHT + WIDTH) // 10

# Runtime
TICK_DELAY: float = float(os.getenv("TICK_DELAY", "0.05"))  # seconds between ticks (~20 Hz)
SAVE_FILE: str = os.getenv("SAVE_FILE", "game_save.txt")
LOG_DIR: str = os.getenv("LOG_DIR", "logs")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
STATUS_LOG_INTERVAL: int = int(os.getenv("STATUS_LOG_INTERVAL", "100"))  # ticks between status tables

_seed = os.getenv("RANDOM_SEED")
RANDOM_SEED: Optional[int] = int(_seed) if _seed else None
