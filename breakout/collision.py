"""Ball-vs-brick resolution: at most one brick per tick."""

from __future__ import annotations

from breakout.entities import Ball, Brick
from breakout.geometry import Side, impact_sides, overlaps
from breakout.levels import Rows, iter_bricks

EPSILON = 0.1


def bounce_off(ball: Ball, brick: Brick) -> None:
    """Reflect the ball off `brick` and park it just outside the struck edge."""
    r = ball.radius
    sides = impact_sides(ball.prev_x, ball.prev_y, r, brick)

    if Side.LEFT in sides:
        ball.dx = -ball.dx
        ball.x = brick.x - r - EPSILON
    elif Side.RIGHT in sides:
        ball.dx = -ball.dx
        ball.x = brick.x + brick.width + r + EPSILON

    if Side.TOP in sides:
        ball.dy = -ball.dy
        ball.y = brick.y - r - EPSILON
    elif Side.BOTTOM in sides:
        ball.dy = -ball.dy
        ball.y = brick.y + brick.height + r + EPSILON

    if not sides:
        ball.dy = -ball.dy


def resolve_brick_collisions(ball: Ball, rows: Rows) -> Brick | None:
    """Clear the first alive brick (row-major) the ball overlaps.

    Scanning stops after that brick even if the ball touches others; the
    next tick gets to deal with them. Returns the cleared brick, or None.
    """
    for brick in iter_bricks(rows):
        if not brick.alive or not overlaps(ball, brick):
            continue
        bounce_off(ball, brick)
        brick.alive = False
        return brick
    return None
