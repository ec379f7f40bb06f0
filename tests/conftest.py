import pytest

from puyo_rl.game import ColorCycle, GameConfig, PuyoGame, PuyoGrid


def cycle_colors(*colors):
    return ColorCycle(tuple(colors))


def stacked(columns, rows=12, cols=6):
    """Grid from {col: [colors listed bottom-up]}."""
    grid = PuyoGrid(rows, cols)
    for col, colors in columns.items():
        for i, color in enumerate(colors):
            grid.set(rows - 1 - i, col, color)
    return grid


def alternating(n, first=3, second=4):
    return [first if i % 2 == 0 else second for i in range(n)]


@pytest.fixture
def make_game():
    def _make(*colors, **config):
        source = cycle_colors(*colors) if colors else None
        return PuyoGame(GameConfig(**config), color_source=source)
    return _make
