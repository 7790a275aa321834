"""
Entity model for the Bomberman arena

Every game object is a plain dataclass tagged with an EntityKind.
Code that needs per-kind behaviour switches on `kind` instead of
relying on a class hierarchy.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, List, Tuple, TypeVar, Union

from bomber.config import (
    NUM_BOMBS,
    BOMB_FUSE,
    PLAYER,
    ENEMY,
    BOMB,
    DESTRUCTIBLE_BLOCK,
    INDESTRUCTIBLE_BLOCK,
    EXIT_DOOR,
    TRAP,
    EMPTY,
)

T = TypeVar("T")


@dataclass
class Position:
    """2D position on the grid"""
    x: int
    y: int

    def to_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def offset(self, dx: int, dy: int) -> 'Position':
        return Position(self.x + dx, self.y + dy)


class EntityKind(Enum):
    """Closed set of things that can exist in the arena"""
    PLAYER = "player"
    ENEMY = "enemy"
    BOMB = "bomb"
    DESTRUCTIBLE_BLOCK = "destructible_block"
    INDESTRUCTIBLE_BLOCK = "indestructible_block"
    EXIT_DOOR = "exit_door"
    TRAP = "trap"


SYMBOLS: Dict[EntityKind, str] = {
    EntityKind.PLAYER: PLAYER,
    EntityKind.ENEMY: ENEMY,
    EntityKind.BOMB: BOMB,
    EntityKind.DESTRUCTIBLE_BLOCK: DESTRUCTIBLE_BLOCK,
    EntityKind.INDESTRUCTIBLE_BLOCK: INDESTRUCTIBLE_BLOCK,
    EntityKind.EXIT_DOOR: EXIT_DOOR,
    EntityKind.TRAP: TRAP,
}


class MoveType(IntEnum):
    """Enemy movement pattern (persisted as its integer value)"""
    HORIZONTAL = 0
    VERTICAL = 1
    OMNI = 2


@dataclass
class Player:
    """The single player-controlled bomber"""
    pos: Position
    bombs_available: int = NUM_BOMBS

    @property
    def kind(self) -> EntityKind:
        return EntityKind.PLAYER

    def can_plant_bomb(self) -> bool:
        return self.bombs_available > 0

    def use_bomb(self):
        self.bombs_available -= 1

    def reload_bomb(self):
        """Restore one charge after one of the player's bombs went off"""
        self.bombs_available = min(self.bombs_available + 1, NUM_BOMBS)


@dataclass
class Enemy:
    """Roaming enemy"""
    pos: Position
    move_type: MoveType
    move_step: int = 0  # updates since last move attempt

    @property
    def kind(self) -> EntityKind:
        return EntityKind.ENEMY


@dataclass
class Bomb:
    """Planted bomb"""
    pos: Position
    planted_at: float  # clock reading when planted (seconds)

    @property
    def kind(self) -> EntityKind:
        return EntityKind.BOMB

    def should_explode(self, now: float) -> bool:
        return now - self.planted_at >= BOMB_FUSE


@dataclass
class Block:
    """Wall or breakable block occupying a grid cell"""
    pos: Position
    destructible: bool
    exit_carrier: bool = False  # hides the exit door until destroyed

    @property
    def kind(self) -> EntityKind:
        if self.destructible:
            return EntityKind.DESTRUCTIBLE_BLOCK
        return EntityKind.INDESTRUCTIBLE_BLOCK


@dataclass
class Trap:
    """Static hazard: harmless for enemies, fatal for the player"""
    pos: Position

    @property
    def kind(self) -> EntityKind:
        return EntityKind.TRAP


@dataclass
class ExitDoor:
    """Level exit, hidden under an exit-carrier block until revealed"""
    pos: Position
    visible: bool = False

    @property
    def kind(self) -> EntityKind:
        return EntityKind.EXIT_DOOR


Entity = Union[Player, Enemy, Bomb, Block, Trap, ExitDoor]
CellContent = Union[Block, Trap]


def symbol_for(entity) -> str:
    """Render symbol for an entity, or a space for an empty cell"""
    if entity is None:
        return EMPTY
    return SYMBOLS[entity.kind]


def swap_remove(items: List[T], index: int) -> T:
    """
    Remove items[index] by moving the last element into its slot.

    O(1), does not preserve order: after the call the former last
    element sits at `index` (unless `index` was the last slot).
    Callers iterating by index must re-check the same index.
    """
    removed = items[index]
    last = items.pop()
    if index < len(items):
        items[index] = last
    return removed


class Command(Enum):
    """Discrete input accepted from the presentation layer"""
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    PLANT_BOMB = "plant_bomb"
    SAVE = "save"
    QUIT = "quit"
    MENU_NEW = "menu_new"
    MENU_LOAD = "menu_load"
    MENU_EXIT = "menu_exit"


DIRECTIONS: Dict[Command, Tuple[int, int]] = {
    Command.MOVE_UP: (0, -1),
    Command.MOVE_DOWN: (0, 1),
    Command.MOVE_LEFT: (-1, 0),
    Command.MOVE_RIGHT: (1, 0),
}
