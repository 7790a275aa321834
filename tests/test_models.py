"""
Tests for the entity model
"""
import pytest
from bomber.models import (
    Player, Bomb, Block, Trap, Enemy, ExitDoor, Position, MoveType, EntityKind,
    symbol_for, swap_remove,
)


def test_swap_remove_moves_last_into_slot():
    """Removing from the middle puts the last element in its place"""
    items = ["a", "b", "c", "d"]
    removed = swap_remove(items, 1)

    assert removed == "b"
    assert items == ["a", "d", "c"]


def test_swap_remove_last_and_only():
    """Removing the last slot (or the only element) just shrinks the list"""
    items = ["a", "b"]
    assert swap_remove(items, 1) == "b"
    assert items == ["a"]

    assert swap_remove(items, 0) == "a"
    assert items == []


def test_player_bomb_charges_capped():
    """Charges go down on use and never above 3 on reload"""
    player = Player(Position(1, 1))
    assert player.bombs_available == 3

    player.use_bomb()
    player.use_bomb()
    player.use_bomb()
    assert not player.can_plant_bomb()

    for _ in range(5):
        player.reload_bomb()
    assert player.bombs_available == 3


def test_bomb_fuse_threshold():
    """Bomb explodes once 3 seconds have elapsed, not before"""
    bomb = Bomb(Position(2, 2), planted_at=100.0)

    assert not bomb.should_explode(100.0)
    assert not bomb.should_explode(102.99)
    assert bomb.should_explode(103.0)
    assert bomb.should_explode(150.0)


def test_kind_and_symbols():
    """Each entity reports its kind; symbols follow the kind"""
    assert Block(Position(0, 0), destructible=True).kind == EntityKind.DESTRUCTIBLE_BLOCK
    assert Block(Position(0, 0), destructible=False).kind == EntityKind.INDESTRUCTIBLE_BLOCK

    assert symbol_for(None) == " "
    assert symbol_for(Block(Position(0, 0), destructible=True, exit_carrier=True)) == "#"
    assert symbol_for(Block(Position(0, 0), destructible=False)) == "X"
    assert symbol_for(Trap(Position(0, 0))) == "T"
    assert symbol_for(Enemy(Position(0, 0), MoveType.OMNI)) == "E"
    assert symbol_for(ExitDoor(Position(0, 0))) == "D"
    assert symbol_for(Player(Position(0, 0))) == "P"
    assert symbol_for(Bomb(Position(0, 0), 0.0)) == "B"


def test_position_helpers():
    pos = Position(3, 4)
    assert pos.to_tuple() == (3, 4)
    assert pos.offset(1, -1) == Position(4, 3)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
