from puyo_rl.game import Action, Phase, command, new_session, reset, tick

from conftest import cycle_colors


def test_new_session_defaults():
    session = new_session(seed=1)
    assert session.grid.rows == 12
    assert session.grid.cols == 6
    assert session.config.color_count == 5
    assert session.phase is Phase.FALLING


def test_new_session_clamps_color_count():
    assert new_session(8).config.color_count == 5
    assert new_session(2).config.color_count == 3


def test_command_returns_new_session():
    start = new_session(color_source=cycle_colors(1, 2))
    moved = command(start, Action.LEFT)
    assert moved is not start
    assert moved.active.base.col == 1
    assert start.active.base.col == 2


def test_tick_returns_new_session():
    start = new_session(color_source=cycle_colors(1, 2))
    after = tick(start)
    assert after.active.base.row == 1
    assert start.active.base.row == 0


def test_hard_drop_leaves_previous_session_untouched():
    start = new_session(color_source=cycle_colors(1))
    dropped = command(command(start, Action.HARD_DROP), Action.HARD_DROP)
    assert dropped.score == 40
    assert dropped.chain_count == 1
    assert start.score == 0
    assert start.grid.count_filled() == 0


def test_reset_builds_fresh_state():
    session = new_session(seed=5)
    for _ in range(3):
        session = command(session, Action.HARD_DROP)
    fresh = reset(session, seed=5)
    assert fresh.grid.count_filled() == 0
    assert fresh.score == 0
    assert fresh.active.base.row == 0
    assert session.grid.count_filled() > 0
    assert fresh.active == new_session(seed=5).active


def test_commands_ignored_once_game_over():
    session = new_session(color_source=cycle_colors(1, 2, 3, 4))
    while not session.game_over:
        session = command(session, Action.HARD_DROP)
    after = tick(command(session, Action.LEFT))
    assert after.game_over
    assert after.grid == session.grid
    assert after.score == session.score


def test_same_command_on_same_session_is_repeatable():
    start = new_session(color_source=cycle_colors(1, 2, 3, 4, 5))
    first = command(start, Action.HARD_DROP)
    second = command(start, Action.HARD_DROP)
    assert first.next_pair == second.next_pair
    assert first.active == second.active
    assert first.grid == second.grid
