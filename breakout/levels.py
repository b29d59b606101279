"""Brick layouts, fit-to-field normalization and per-level difficulty."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from breakout.config import BallConfig, BrickConfig, LevelConfig, PaddleConfig
from breakout.entities import Brick, Paddle

KATAKANA = (
    "アイウエオカキクケコサシスセソタチツテトナニヌネノハヒフヘホマミムメモ"
    "ヤユヨラリルレロワンガギグゲゴザジズゼゾダヂヅデドパピプペポバビブベボ"
)

Rows = list[list[Brick]]


@dataclass
class Layout:
    """Brick placement parameters. field_width may grow during fitting."""
    field_width: float
    brick_width: float = 80  # nominal width before fitting
    brick_height: float = 40
    padding: float = 10
    margin: float = 40
    top_margin: float = 80
    min_width: float = 40

    @classmethod
    def from_config(cls, field_width: float, cfg: BrickConfig) -> Layout:
        return cls(
            field_width=field_width,
            brick_height=cfg.height,
            padding=cfg.padding,
            margin=cfg.margin,
            top_margin=cfg.top_margin,
            min_width=cfg.min_width,
        )


def _no_glyph() -> str:
    return ""


def _row(layout: Layout, r: int, cols: int, glyph: Callable[[], str],
         alive: Callable[[int], bool] = lambda c: True) -> list[Brick]:
    w, pad = layout.brick_width, layout.padding
    row_width = cols * w + (cols - 1) * pad
    start_x = (layout.field_width - row_width) / 2
    y = layout.top_margin + r * (layout.brick_height + pad)
    return [
        Brick(start_x + c * (w + pad), y, w, layout.brick_height,
              alive=alive(c), glyph=glyph())
        for c in range(cols)
    ]


def reverse_pyramid(layout: Layout, cols: int,
                    glyph: Callable[[], str] = _no_glyph) -> Rows:
    """Widest row on top, two bricks fewer on each row below."""
    max_cols = cols if cols % 2 == 1 else cols - 1
    rows = (max_cols + 1) // 2
    return [_row(layout, r, max_cols - 2 * r, glyph) for r in range(rows)]


def full_grid(layout: Layout, rows: int, cols: int,
              glyph: Callable[[], str] = _no_glyph) -> Rows:
    return [_row(layout, r, cols, glyph) for r in range(rows)]


def hollow_rect(layout: Layout, rows: int, cols: int,
                glyph: Callable[[], str] = _no_glyph) -> Rows:
    """Only the border is alive; interior slots start out cleared."""
    def row(r: int) -> list[Brick]:
        edge_row = r == 0 or r == rows - 1
        return _row(layout, r, cols, glyph,
                    alive=lambda c: edge_row or c == 0 or c == cols - 1)
    return [row(r) for r in range(rows)]


def build_level(level: LevelConfig, layout: Layout,
                glyph: Callable[[], str] = _no_glyph) -> Rows:
    if level.layout == "pyramid":
        return reverse_pyramid(layout, level.cols, glyph)
    if level.layout == "grid":
        return full_grid(layout, level.rows, level.cols, glyph)
    if level.layout == "hollow":
        return hollow_rect(layout, level.rows, level.cols, glyph)
    raise ValueError(f"unknown level layout: {level.layout!r}")


def fit_bricks(rows: Rows, layout: Layout, paddle: Paddle | None = None) -> float:
    """Resize and re-center bricks so the widest row fits the field.

    Grows layout.field_width (and reclamps the paddle) when even the minimum
    brick width would not fit. Liveness is untouched. Returns the field width.
    """
    if not rows:
        return layout.field_width

    pad = layout.padding
    max_cols = max(len(row) for row in rows)
    if max_cols == 0:
        return layout.field_width

    required = 2 * layout.margin + max_cols * layout.min_width + (max_cols - 1) * pad
    if required > layout.field_width:
        layout.field_width = required
        if paddle is not None:
            paddle.clamp(layout.field_width)

    available = layout.field_width - 2 * layout.margin
    w = math.floor((available - pad * (max_cols - 1)) / max_cols)
    h = layout.brick_height

    for r, row in enumerate(rows):
        cols = len(row)
        row_width = cols * w + (cols - 1) * pad
        start_x = (layout.field_width - row_width) / 2
        for c, brick in enumerate(row):
            brick.x = start_x + c * (w + pad)
            brick.y = layout.top_margin + r * (h + pad)
            brick.width = w
            brick.height = h
    return layout.field_width


def iter_bricks(rows: Rows) -> Iterator[Brick]:
    """Row-major walk over every brick, cleared ones included."""
    for row in rows:
        yield from row


def count_alive(rows: Rows) -> int:
    return sum(1 for b in iter_bricks(rows) if b.alive)


def paddle_width_for(level: int, cfg: PaddleConfig) -> float:
    return max(cfg.min_width, cfg.width - level * cfg.shrink_per_level)


def serve_speed_for(level: int, cfg: BallConfig) -> float:
    return cfg.base_speed + min(cfg.max_speed_bonus, level * cfg.speed_per_level)
