"""Paddle, ball and brick: plain data plus their per-tick update rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BallEvent(str, Enum):
    WALL_HIT = "wall_hit"
    PADDLE_HIT = "paddle_hit"
    BOTTOM_OUT = "bottom_out"


@dataclass
class Paddle:
    width: float
    height: float
    x: float
    y: float
    speed: float = 5
    dx: float = 0

    @property
    def center(self) -> float:
        return self.x + self.width / 2

    def set_velocity(self, dx: float) -> None:
        self.dx = dx

    def move(self, direction: int) -> None:
        """Key-style intent: -1 left, 0 stop, +1 right."""
        if direction > 0:
            self.dx = self.speed
        elif direction < 0:
            self.dx = -self.speed
        else:
            self.dx = 0

    def set_center(self, target_x: float, field_width: float) -> None:
        """Pointer-style intent: put the paddle's center under target_x."""
        self.x = target_x - self.width / 2
        self.clamp(field_width)

    def clamp(self, field_width: float) -> None:
        self.x = max(0.0, min(self.x, field_width - self.width))

    def tick(self, field_width: float) -> None:
        self.x += self.dx
        self.clamp(field_width)


@dataclass
class Ball:
    radius: float
    x: float = 0
    y: float = 0
    dx: float = 0
    dy: float = 0
    prev_x: float = 0
    prev_y: float = 0

    def dock(self, paddle: Paddle, gap: float = 2) -> None:
        """Pin the ball on top of the paddle center, motionless."""
        self.x = paddle.center
        self.y = paddle.y - self.radius - gap
        self.prev_x, self.prev_y = self.x, self.y
        self.dx = 0
        self.dy = 0

    def tick(self, paddle: Paddle, field_width: float, field_height: float,
             spin: float = 4.0) -> list[BallEvent]:
        """Advance one fixed step and react to walls, paddle and bottom.

        Each check runs independently, so a fast ball can bounce off a side
        wall, the ceiling and the paddle in the same tick.
        """
        events: list[BallEvent] = []
        r = self.radius

        self.prev_x, self.prev_y = self.x, self.y
        self.x += self.dx
        self.y += self.dy

        # side walls: flip only while heading outward, then pull back inside
        if self.x - r < 0 or self.x + r > field_width:
            if (self.x - r < 0 and self.dx < 0) or (self.x + r > field_width and self.dx > 0):
                self.dx = -self.dx
            self.x = max(r, min(self.x, field_width - r))
            events.append(BallEvent.WALL_HIT)

        # ceiling
        if self.y - r < 0:
            if self.dy < 0:
                self.dy = -self.dy
            self.y = r
            events.append(BallEvent.WALL_HIT)

        if (
            self.y + r >= paddle.y
            and self.y - r <= paddle.y + paddle.height
            and paddle.x <= self.x <= paddle.x + paddle.width
            and self.dy > 0
        ):
            self.dy = -self.dy
            hit_offset = (self.x - paddle.center) / (paddle.width / 2)
            self.dx = spin * hit_offset
            events.append(BallEvent.PADDLE_HIT)

        if self.y - r > field_height:
            events.append(BallEvent.BOTTOM_OUT)

        return events


@dataclass
class Brick:
    x: float
    y: float
    width: float
    height: float
    alive: bool = True
    glyph: str = ""

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2
