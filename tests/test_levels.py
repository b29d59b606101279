"""Tests for brick layouts, fitting and difficulty scaling."""


def _layout(width=600):
    from breakout.levels import Layout
    return Layout(field_width=width)


def test_reverse_pyramid_shape():
    from breakout.levels import reverse_pyramid
    rows = reverse_pyramid(_layout(), 9)
    assert [len(r) for r in rows] == [9, 7, 5, 3, 1]
    assert all(b.alive for row in rows for b in row)


def test_reverse_pyramid_forces_odd_columns():
    from breakout.levels import reverse_pyramid
    rows = reverse_pyramid(_layout(), 10)
    assert [len(r) for r in rows] == [9, 7, 5, 3, 1]


def test_full_grid():
    from breakout.levels import count_alive, full_grid
    rows = full_grid(_layout(), 5, 9)
    assert len(rows) == 5
    assert all(len(r) == 9 for r in rows)
    assert count_alive(rows) == 45


def test_hollow_rect_only_border_alive():
    from breakout.levels import count_alive, hollow_rect
    rows = hollow_rect(_layout(), 6, 11)
    assert sum(len(r) for r in rows) == 66
    assert count_alive(rows) == 30
    assert not rows[2][5].alive
    assert rows[0][5].alive and rows[5][5].alive
    assert rows[3][0].alive and rows[3][10].alive


def test_fit_bricks_centers_rows():
    from breakout.levels import fit_bricks, reverse_pyramid
    layout = _layout()
    rows = reverse_pyramid(layout, 9)
    width = fit_bricks(rows, layout)
    assert width == 600
    assert rows[0][0].width == 48
    assert rows[0][0].x == 44
    bottom = rows[-1][0]
    assert bottom.x == 276
    assert bottom.y == 80 + 4 * 50
    assert bottom.height == 40


def test_fit_bricks_rows_do_not_overlap():
    from breakout.levels import fit_bricks, full_grid
    layout = _layout()
    rows = full_grid(layout, 5, 9)
    fit_bricks(rows, layout)
    for row in rows:
        for left, right in zip(row, row[1:]):
            assert left.x + left.width < right.x
        assert row[0].x >= layout.margin
        assert row[-1].x + row[-1].width <= layout.field_width - layout.margin


def test_fit_bricks_grows_field_and_reclamps_paddle():
    from breakout.entities import Paddle
    from breakout.levels import fit_bricks, hollow_rect
    layout = _layout()
    paddle = Paddle(width=100, height=20, x=500, y=375)
    rows = hollow_rect(layout, 6, 11)
    assert fit_bricks(rows, layout, paddle) == 620
    assert layout.field_width == 620
    assert rows[0][0].width == 40
    assert 0 <= paddle.x <= 620 - paddle.width


def test_fit_bricks_keeps_liveness():
    from breakout.levels import fit_bricks, hollow_rect
    layout = _layout()
    rows = hollow_rect(layout, 6, 11)
    before = [b.alive for row in rows for b in row]
    fit_bricks(rows, layout)
    assert [b.alive for row in rows for b in row] == before


def test_build_level_dispatch():
    import pytest

    from breakout.config import LevelConfig
    from breakout.levels import build_level
    assert len(build_level(LevelConfig(layout="grid", rows=2, cols=3), _layout())) == 2
    with pytest.raises(ValueError):
        build_level(LevelConfig(layout="spiral"), _layout())


def test_iter_bricks_is_row_major():
    from breakout.levels import full_grid, iter_bricks
    rows = full_grid(_layout(), 2, 3)
    flat = list(iter_bricks(rows))
    assert flat == rows[0] + rows[1]


def test_difficulty_scaling():
    from breakout.config import BallConfig, PaddleConfig
    from breakout.levels import paddle_width_for, serve_speed_for
    assert paddle_width_for(0, PaddleConfig()) == 100
    assert paddle_width_for(2, PaddleConfig()) == 80
    assert paddle_width_for(9, PaddleConfig()) == 70
    assert serve_speed_for(0, BallConfig()) == 2.5
    assert serve_speed_for(10, BallConfig()) == 5.5
