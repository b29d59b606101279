"""Tests for ball/rect overlap and impact side inference."""

from types import SimpleNamespace


def _rect(x=100, y=100, width=50, height=20):
    return SimpleNamespace(x=x, y=y, width=width, height=height)


def _ball(x, y, radius=8):
    return SimpleNamespace(x=x, y=y, radius=radius)


def test_overlaps_inside():
    from breakout.geometry import overlaps
    assert overlaps(_ball(125, 110), _rect())


def test_overlaps_touching_edge_is_not_overlap():
    """Bounding square exactly touching the left edge does not count."""
    from breakout.geometry import overlaps
    assert not overlaps(_ball(92, 110), _rect())
    assert overlaps(_ball(92.5, 110), _rect())


def test_overlaps_uses_bounding_square_at_corners():
    """A ball diagonally off a corner still overlaps when its square does."""
    from breakout.geometry import overlaps
    # distance to corner (100, 100) is ~8.5 > radius, but the square overlaps
    assert overlaps(_ball(94, 94), _rect())


def test_overlaps_one_axis_only():
    from breakout.geometry import overlaps
    assert not overlaps(_ball(125, 60), _rect())
    assert not overlaps(_ball(300, 110), _rect())


def test_impact_from_top():
    from breakout.geometry import Side, impact_sides
    assert impact_sides(125, 92, 8, _rect()) == {Side.TOP}


def test_impact_from_bottom():
    from breakout.geometry import Side, impact_sides
    assert impact_sides(125, 128, 8, _rect()) == {Side.BOTTOM}


def test_impact_from_left_and_right():
    from breakout.geometry import Side, impact_sides
    assert impact_sides(92, 110, 8, _rect()) == {Side.LEFT}
    assert impact_sides(158, 110, 8, _rect()) == {Side.RIGHT}


def test_impact_corner_reports_both_axes():
    from breakout.geometry import Side, impact_sides
    assert impact_sides(90, 90, 8, _rect()) == {Side.LEFT, Side.TOP}


def test_impact_none_when_already_overlapping():
    from breakout.geometry import impact_sides
    assert impact_sides(125, 110, 8, _rect()) == frozenset()
