"""Breakout session: score, lives, levels and the docked/running/terminal cycle.

One `Game` owns every entity. The host calls intents (`move_paddle`,
`set_paddle_center`, `request_serve`, `request_reset`) between ticks and
`tick()` once per frame; `snapshot()` is what a renderer reads.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from breakout.collision import resolve_brick_collisions
from breakout.config import AppConfig
from breakout.entities import Ball, BallEvent, Brick, Paddle
from breakout.levels import (
    KATAKANA,
    Layout,
    Rows,
    build_level,
    count_alive,
    fit_bricks,
    iter_bricks,
    paddle_width_for,
    serve_speed_for,
)
from breakout.scores import MemoryScoreBoard


class Phase(str, Enum):
    DOCKED = "docked"
    RUNNING = "running"
    GAME_OVER = "gameover"
    WON = "won"

    @property
    def terminal(self) -> bool:
        return self in (Phase.GAME_OVER, Phase.WON)


class EventKind(str, Enum):
    WALL_HIT = "wall_hit"
    PADDLE_HIT = "paddle_hit"
    BRICK_HIT = "brick_hit"
    LIFE_LOST = "life_lost"
    LEVEL_CLEARED = "level_cleared"
    WIN = "win"
    GAME_OVER = "game_over"
    SERVE = "serve"
    NEW_HIGH_SCORE = "new_high_score"
    RESET = "reset"


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    x: float | None = None
    y: float | None = None


Listener = Callable[[GameEvent], None]


@dataclass(frozen=True)
class PaddleView:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class BallView:
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class BrickView:
    x: float
    y: float
    width: float
    height: float
    alive: bool
    glyph: str


@dataclass(frozen=True)
class Snapshot:
    field_width: float
    field_height: float
    paddle: PaddleView
    ball: BallView
    bricks: tuple[BrickView, ...]
    score: int
    high_score: int
    lives: int
    level: int
    remaining: int
    state: str


class Game:
    def __init__(self, config: AppConfig | None = None, scores=None,
                 rng: random.Random | None = None):
        self.config = config or AppConfig()
        self.scores = scores if scores is not None else MemoryScoreBoard()
        self.rng = rng or random.Random()
        self.listeners: list[Listener] = []
        self._events: list[GameEvent] = []
        self.listener_errors: list[tuple[GameEvent, Exception]] = []

        field = self.config.playfield
        pcfg = self.config.paddle
        self.field_height = field.height
        self.layout = Layout.from_config(field.width, self.config.bricks)
        self.paddle = Paddle(
            width=pcfg.width,
            height=pcfg.height,
            x=(field.width - pcfg.width) / 2,
            y=field.height - pcfg.bottom_offset,
            speed=pcfg.speed,
        )
        self.ball = Ball(radius=self.config.ball.radius)
        self.high_score = self.scores.load_best()

        self.bricks: Rows = []
        self.remaining = 0
        self.level = 0
        self._start_session()

    # -- properties ----------------------------------------------------------

    @property
    def field_width(self) -> float:
        return self.layout.field_width

    @property
    def last_level(self) -> int:
        return len(self.config.levels) - 1

    # -- events ------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        """Register a callback fired synchronously for every event.

        A listener that raises does not interrupt the game; the event and
        exception are appended to `listener_errors`.
        """
        self.listeners.append(listener)

    def _emit(self, kind: EventKind, x: float | None = None,
              y: float | None = None) -> None:
        event = GameEvent(kind, x, y)
        self._events.append(event)
        for listener in self.listeners:
            try:
                listener(event)
            except Exception as exc:
                # a failing listener must not leave the tick half-applied
                self.listener_errors.append((event, exc))

    def _drain(self) -> list[GameEvent]:
        events, self._events = self._events, []
        return events

    # -- session / levels ----------------------------------------------------

    def _glyph(self) -> str:
        return self.rng.choice(KATAKANA)

    def _start_session(self) -> None:
        self.score = 0
        self.lives = self.config.game.lives
        self._record_announced = False
        self._set_level(0)
        self.phase = Phase.DOCKED
        self.ball.dock(self.paddle, self.config.ball.dock_gap)

    def _set_level(self, index: int) -> None:
        self.level = index
        self.bricks = build_level(self.config.levels[index], self.layout, self._glyph)
        self.remaining = count_alive(self.bricks)
        self.paddle.width = paddle_width_for(index, self.config.paddle)
        self.paddle.clamp(self.field_width)
        fit_bricks(self.bricks, self.layout, self.paddle)

    # -- intents -------------------------------------------------------------

    def set_paddle_velocity(self, dx: float) -> None:
        self.paddle.set_velocity(dx)

    def move_paddle(self, direction: int) -> None:
        self.paddle.move(direction)

    def set_paddle_center(self, x: float) -> bool:
        if self.phase.terminal:
            return False
        self.paddle.set_center(x, self.field_width)
        return True

    def request_serve(self) -> bool:
        """Launch the docked ball. No-op (False) in any other phase."""
        if self.phase is not Phase.DOCKED or self.lives <= 0:
            return False
        bcfg = self.config.ball
        speed = serve_speed_for(self.level, bcfg)
        self.ball.dock(self.paddle, bcfg.dock_gap)
        direction = self.rng.choice((-1, 1))
        self.ball.dx = (speed + self.rng.random() * bcfg.horizontal_jitter) * direction
        self.ball.dy = -max(bcfg.min_vertical_speed, speed + 0.5)
        self.phase = Phase.RUNNING
        self._emit(EventKind.SERVE)
        return True

    def request_reset(self) -> None:
        """Back to level 0 with a fresh score, full lives and new bricks."""
        self._start_session()
        self._emit(EventKind.RESET)

    # -- simulation ----------------------------------------------------------

    def tick(self) -> list[GameEvent]:
        """Advance one fixed step. Returns the events raised since the last tick."""
        if self.phase.terminal:
            return self._drain()

        self.paddle.tick(self.field_width)
        if self.phase is Phase.DOCKED:
            self.ball.dock(self.paddle, self.config.ball.dock_gap)
        else:
            self._fly()
        return self._drain()

    def _fly(self) -> None:
        ball_events = self.ball.tick(
            self.paddle, self.field_width, self.field_height,
            spin=self.config.ball.spin,
        )
        for ev in ball_events:
            if ev is BallEvent.WALL_HIT:
                self._emit(EventKind.WALL_HIT)
            elif ev is BallEvent.PADDLE_HIT:
                self._emit(EventKind.PADDLE_HIT)
            elif ev is BallEvent.BOTTOM_OUT:
                self._lose_life()
                return

        brick = resolve_brick_collisions(self.ball, self.bricks)
        if brick is not None:
            self._clear_brick(brick)

    def _lose_life(self) -> None:
        self.lives = max(0, self.lives - 1)
        self._emit(EventKind.LIFE_LOST)
        if self.lives == 0:
            self.phase = Phase.GAME_OVER
            self._emit(EventKind.GAME_OVER)
            return
        self.phase = Phase.DOCKED
        self.ball.dock(self.paddle, self.config.ball.dock_gap)

    def _clear_brick(self, brick: Brick) -> None:
        self.score += self.config.game.points_per_brick
        cx, cy = brick.center
        self._emit(EventKind.BRICK_HIT, cx, cy)
        self._update_high_score()

        self.remaining = max(0, self.remaining - 1)
        if self.remaining > 0:
            return

        if self.level < self.last_level:
            self._emit(EventKind.LEVEL_CLEARED)
            self._set_level(self.level + 1)
            self.phase = Phase.DOCKED
            self.ball.dock(self.paddle, self.config.ball.dock_gap)
        else:
            self.phase = Phase.WON
            self._emit(EventKind.WIN)

    def _update_high_score(self) -> None:
        if self.score <= self.high_score:
            return
        self.high_score = self.score
        self.scores.save_best(self.high_score)
        if not self._record_announced:
            self._record_announced = True
            self._emit(EventKind.NEW_HIGH_SCORE)

    # -- read side -----------------------------------------------------------

    def snapshot(self) -> Snapshot:
        p, b = self.paddle, self.ball
        return Snapshot(
            field_width=self.field_width,
            field_height=self.field_height,
            paddle=PaddleView(p.x, p.y, p.width, p.height),
            ball=BallView(b.x, b.y, b.radius),
            bricks=tuple(
                BrickView(br.x, br.y, br.width, br.height, br.alive, br.glyph)
                for br in iter_bricks(self.bricks)
            ),
            score=self.score,
            high_score=self.high_score,
            lives=self.lives,
            level=self.level,
            remaining=self.remaining,
            state=self.phase.value,
        )
