"""Ball-vs-rectangle collision primitives.

The ball is treated as its bounding square: a brick counts as touched when
the square and the brick overlap on both axes. Corners are not rounded off.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Rect(Protocol):
    x: float
    y: float
    width: float
    height: float


class Circle(Protocol):
    x: float
    y: float
    radius: float


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


def overlaps(ball: Circle, rect: Rect) -> bool:
    """True when the ball's bounding square intersects the rect on both axes."""
    r = ball.radius
    within_x = ball.x + r > rect.x and ball.x - r < rect.x + rect.width
    within_y = ball.y + r > rect.y and ball.y - r < rect.y + rect.height
    return within_x and within_y


def impact_sides(prev_x: float, prev_y: float, radius: float,
                 rect: Rect) -> frozenset[Side]:
    """Sides of `rect` the ball approached from, judged by its previous position.

    At most one horizontal and one vertical side. An empty set means the ball
    was already overlapping on both axes before it moved.
    """
    sides = set()
    if prev_x + radius <= rect.x:
        sides.add(Side.LEFT)
    elif prev_x - radius >= rect.x + rect.width:
        sides.add(Side.RIGHT)
    if prev_y + radius <= rect.y:
        sides.add(Side.TOP)
    elif prev_y - radius >= rect.y + rect.height:
        sides.add(Side.BOTTOM)
    return frozenset(sides)
