import pytest

from puyo_rl.game import (
    Cell,
    Pair,
    PuyoGrid,
    Rotation,
    ScoringRules,
    can_place,
    drop_position,
    rotate_with_kicks,
)


def test_can_place_allows_hidden_row():
    grid = PuyoGrid(12, 6)
    assert can_place(Pair.spawn((1, 2), 2), grid)
    assert can_place(Pair(Cell(-1, 0, 1), Cell(-2, 0, 1)), grid)


def test_can_place_rejects_walls_floor_and_cells():
    grid = PuyoGrid(12, 6)
    grid.set(11, 3, 1)
    assert not can_place(Pair.spawn((1, 2), -1), grid)
    assert not can_place(Pair.spawn((1, 2), 6), grid)
    assert not can_place(Pair(Cell(12, 0, 1), Cell(11, 0, 1)), grid)
    assert not can_place(Pair(Cell(11, 3, 1), Cell(10, 3, 1)), grid)
    assert can_place(Pair(Cell(10, 3, 1), Cell(9, 3, 1)), grid)


def test_hidden_row_ignores_columns_content_but_not_walls():
    grid = PuyoGrid(12, 6)
    grid.set(0, 2, 1)
    assert can_place(Pair(Cell(-1, 2, 1), Cell(-2, 2, 1)), grid)
    assert not can_place(Pair(Cell(-1, 6, 1), Cell(-2, 6, 1)), grid)


def test_rotation_without_obstacle_needs_no_kick():
    grid = PuyoGrid(12, 6)
    pair = Pair.spawn((1, 2), 2)
    rotated = rotate_with_kicks(pair, grid, Rotation.CW)
    assert rotated == pair.rotated(Rotation.CW)


def test_kick_off_right_wall():
    grid = PuyoGrid(12, 6)
    pair = Pair.spawn((1, 2), 5).translated(3, 0)
    rotated = rotate_with_kicks(pair, grid, Rotation.CCW)
    # child would land in column 6; first kick (-1) fixes it
    assert rotated is not None
    assert (rotated.base.col, rotated.child.col) == (4, 5)


def test_kick_off_left_wall_skips_to_plus_one():
    grid = PuyoGrid(12, 6)
    pair = Pair.spawn((1, 2), 0).translated(3, 0)
    rotated = rotate_with_kicks(pair, grid, Rotation.CW)
    # child would land in column -1; -1 shift is off the wall, +1 fits
    assert rotated is not None
    assert (rotated.base.col, rotated.child.col) == (1, 0)


def _horizontal_pair(row):
    # base at column 2, child to its left; CW swings the child below the base
    return Pair(Cell(row, 2, 1), Cell(row, 1, 2))


def test_kick_takes_minus_one_before_plus_one():
    grid = PuyoGrid(12, 6)
    grid.set(7, 2, 3)
    rotated = rotate_with_kicks(_horizontal_pair(6), grid, Rotation.CW)
    assert rotated.base == Cell(6, 1, 1)
    assert rotated.child == Cell(7, 1, 2)


def test_kick_takes_plus_one_before_minus_two():
    grid = PuyoGrid(12, 6)
    grid.set(7, 1, 3)
    grid.set(7, 2, 3)
    rotated = rotate_with_kicks(_horizontal_pair(6), grid, Rotation.CW)
    assert rotated.base == Cell(6, 3, 1)
    assert rotated.child == Cell(7, 3, 2)


def test_kick_takes_minus_two_before_plus_two():
    # -1 and +1 blocked, both -2 (column 0) and +2 (column 4) are open
    grid = PuyoGrid(12, 6)
    for col in (1, 2, 3):
        grid.set(7, col, 3)
    pair = _horizontal_pair(6)
    shifted_right = pair.rotated(Rotation.CW).translated(0, 2)
    assert can_place(shifted_right, grid)
    rotated = rotate_with_kicks(pair, grid, Rotation.CW)
    assert rotated.base == Cell(6, 0, 1)
    assert rotated.child == Cell(7, 0, 2)


def test_kick_falls_through_to_plus_two():
    # CCW puts the child at column 3. Blocking columns 1 and 3 defeats
    # shifts -1, +1 and -2; only +2 (columns 4, 5) is left.
    grid = PuyoGrid(12, 6)
    row = 6
    for col in (1, 3):
        grid.set(row, col, 3)
    pair = Pair(Cell(row, 2, 1), Cell(row - 1, 2, 2))
    rotated = rotate_with_kicks(pair, grid, Rotation.CCW)
    assert rotated is not None
    assert (rotated.base.col, rotated.child.col) == (4, 5)


def test_rotation_rejected_when_all_kicks_fail():
    grid = PuyoGrid.from_strings(["1.1"] * 3)
    pair = Pair(Cell(2, 1, 2), Cell(1, 1, 2))
    assert rotate_with_kicks(pair, grid, Rotation.CW) is None
    assert rotate_with_kicks(pair, grid, Rotation.CCW) is None


def test_drop_position_lands_on_stack():
    grid = PuyoGrid(12, 6)
    grid.set(11, 2, 1)
    landed = drop_position(Pair.spawn((1, 2), 2), grid)
    assert landed.base == Cell(10, 2, 1)
    assert landed.child == Cell(9, 2, 2)


@pytest.mark.parametrize(
    "cells,chains,expected",
    [(0, 0, 0), (4, 1, 40), (8, 2, 120), (12, 3, 240), (5, 2, 75)],
)
def test_score_for_clear(cells, chains, expected):
    assert ScoringRules().score_for_clear(cells, chains) == expected


def test_multiplier_formula():
    rules = ScoringRules()
    assert rules.multiplier(1) == 1.0
    assert rules.multiplier(2) == 1.5
    assert rules.multiplier(3) == 2.0
