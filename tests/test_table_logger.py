"""
Tests for the status table log
"""
import logging
import pytest

from bomber.table_logger import format_table, log_status_table
from bomber.models import Bomb, Enemy, Position, MoveType


def test_table_rows(make_state):
    state = make_state(player=(2, 3), exit_pos=(30, 15))
    state.enemies = [Enemy(Position(10, 11), MoveType.VERTICAL, move_step=4)]
    state.bombs = [Bomb(Position(6, 7), 0.0)]

    table = format_table(state, tick=42)

    assert "Tick 42" in table
    assert "(  2,   3)" in table
    assert "vertical step=4" in table
    assert "(  6,   7)" in table
    assert "hidden" in table


def test_table_logged_on_system_channel(make_state, caplog):
    with caplog.at_level(logging.INFO, logger="system"):
        log_status_table(make_state(), tick=100)

    assert any("Tick 100" in record.getMessage() for record in caplog.records)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
