"""
Tests for the grid store and world generation
"""
import random
import pytest

from bomber.grid import Grid, generate_world
from bomber.models import Block, Trap, Position, EntityKind, MoveType
from bomber.config import WIDTH, HEIGHT, ENEMY_COUNT, TRAP_COUNT


def test_cell_access_is_bounds_checked():
    """Reads and writes outside the grid raise IndexError"""
    grid = Grid(10, 5)

    with pytest.raises(IndexError):
        grid.cell_at(10, 0)
    with pytest.raises(IndexError):
        grid.cell_at(0, -1)
    with pytest.raises(IndexError):
        grid.place(0, 5, Trap(Position(0, 5)))


def test_place_and_clear():
    """place overwrites, clear returns the removed occupant"""
    grid = Grid(10, 5)
    trap = Trap(Position(2, 2))
    wall = Block(Position(2, 2), destructible=False)

    grid.place(2, 2, trap)
    grid.place(2, 2, wall)
    assert grid.cell_at(2, 2) is wall

    assert grid.clear(2, 2) is wall
    assert grid.is_empty(2, 2)
    assert grid.clear(2, 2) is None


def test_symbol_rows():
    grid = Grid(4, 2)
    grid.place(0, 0, Block(Position(0, 0), destructible=False))
    grid.place(1, 0, Block(Position(1, 0), destructible=True))
    grid.place(3, 1, Trap(Position(3, 1)))

    assert grid.symbol_rows() == ["X#  ", "   T"]


@pytest.mark.parametrize("seed", [0, 1, 42, 2024, 99999])
def test_generated_border_is_walls(seed):
    """Every border cell is an indestructible block"""
    world = generate_world(random.Random(seed))
    grid = world.grid

    for y in range(HEIGHT):
        for x in range(WIDTH):
            if grid.is_border(x, y):
                cell = grid.cell_at(x, y)
                assert cell is not None
                assert cell.kind == EntityKind.INDESTRUCTIBLE_BLOCK


@pytest.mark.parametrize("seed", [0, 1, 42, 177, 224, 456, 2024, 99999])
def test_generated_start_area_clear(seed):
    """Player's 3x3 start area has no blocks, traps or exit carrier"""
    grid = generate_world(random.Random(seed)).grid

    for y in range(1, 4):
        for x in range(1, 4):
            assert grid.cell_at(x, y) is None


def test_exit_carrier_never_in_start_area_or_under_enemy():
    """Exit sampling skips the cleared start area and enemy cells"""
    for seed in range(1000):
        world = generate_world(random.Random(seed))
        door = world.exit_door.pos

        assert not (1 <= door.x <= 3 and 1 <= door.y <= 3), seed
        assert door not in [e.pos for e in world.enemies], seed


@pytest.mark.parametrize("seed", [0, 1, 42, 2024, 99999])
def test_generated_exit_carrier(seed):
    """Exactly one exit-carrier block, on the hidden exit door"""
    world = generate_world(random.Random(seed))
    grid = world.grid
    door = world.exit_door

    carriers = [
        cell for row in grid.cells for cell in row
        if isinstance(cell, Block) and cell.exit_carrier
    ]
    assert len(carriers) == 1
    assert carriers[0].pos == door.pos
    assert carriers[0].destructible
    assert not door.visible
    assert grid.cell_at(door.pos.x, door.pos.y) is carriers[0]


@pytest.mark.parametrize("seed", [0, 7, 31337])
def test_generated_enemies_and_traps(seed):
    """Enemies spawn inside the arena, off the start cell, with cycling move types"""
    world = generate_world(random.Random(seed))
    grid = world.grid

    assert len(world.enemies) == ENEMY_COUNT
    for i, enemy in enumerate(world.enemies):
        assert grid.is_interior(enemy.pos.x, enemy.pos.y)
        assert enemy.pos.to_tuple() != (1, 1)
        assert enemy.move_type == MoveType(i % 3)

    # Traps inside the start area are removed by the start-area clear
    traps = sum(
        1 for row in grid.cells for cell in row
        if cell is not None and cell.kind == EntityKind.TRAP
    )
    assert 0 < traps <= TRAP_COUNT


def test_generation_is_seed_deterministic():
    a = generate_world(random.Random(5))
    b = generate_world(random.Random(5))

    assert a.grid.symbol_rows() == b.grid.symbol_rows()
    assert [e.pos for e in a.enemies] == [e.pos for e in b.enemies]
    assert a.exit_door.pos == b.exit_door.pos


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
