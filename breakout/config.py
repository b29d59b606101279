"""Config loader — YAML to dataclasses."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

LAYOUTS = ("pyramid", "grid", "hollow")


@dataclass
class FieldConfig:
    width: float = 600
    height: float = 400


@dataclass
class PaddleConfig:
    width: float = 100
    height: float = 20
    speed: float = 5
    bottom_offset: float = 25  # paddle top sits this far above the field bottom
    min_width: float = 70
    shrink_per_level: float = 10


@dataclass
class BallConfig:
    radius: float = 8
    dock_gap: float = 2
    spin: float = 4.0  # max |dx| after a paddle edge hit
    base_speed: float = 2.5
    speed_per_level: float = 0.6
    max_speed_bonus: float = 3
    min_vertical_speed: float = 3
    horizontal_jitter: float = 2


@dataclass
class BrickConfig:
    height: float = 40
    padding: float = 10
    margin: float = 40
    top_margin: float = 80  # room for the HUD
    min_width: float = 40


@dataclass
class LevelConfig:
    layout: str  # "pyramid" | "grid" | "hollow"
    rows: int = 5
    cols: int = 9


def _default_levels() -> list[LevelConfig]:
    return [
        LevelConfig(layout="pyramid", cols=9),
        LevelConfig(layout="grid", rows=5, cols=9),
        LevelConfig(layout="hollow", rows=6, cols=11),
    ]


@dataclass
class GameConfig:
    lives: int = 3
    points_per_brick: int = 10
    name: str = "breakout"
    scores_file: str = "~/.streamdeck-arcade/scores.json"


@dataclass
class SoundConfig:
    enabled: bool = True
    player: str = "afplay"
    volume: float = 0.3


@dataclass
class DeckConfig:
    brightness: int = 80
    fps: int = 30


@dataclass
class AppConfig:
    playfield: FieldConfig = field(default_factory=FieldConfig)
    paddle: PaddleConfig = field(default_factory=PaddleConfig)
    ball: BallConfig = field(default_factory=BallConfig)
    bricks: BrickConfig = field(default_factory=BrickConfig)
    levels: list[LevelConfig] = field(default_factory=_default_levels)
    game: GameConfig = field(default_factory=GameConfig)
    sound: SoundConfig = field(default_factory=SoundConfig)
    deck: DeckConfig = field(default_factory=DeckConfig)


def parse_config(raw: dict | None) -> AppConfig:
    """Build an AppConfig from an already-parsed mapping."""
    raw = raw or {}

    levels = [LevelConfig(**lvl) for lvl in (raw.get("levels") or [])]
    if "levels" in raw and not levels:
        raise ValueError("config must define at least one level")
    for lvl in levels:
        if lvl.layout not in LAYOUTS:
            raise ValueError(f"unknown level layout: {lvl.layout!r}")
        if lvl.rows < 1 or lvl.cols < 1:
            raise ValueError(
                f"level {lvl.layout!r} needs at least one row and column, "
                f"got {lvl.rows}x{lvl.cols}"
            )

    return AppConfig(
        playfield=FieldConfig(**(raw.get("field") or {})),
        paddle=PaddleConfig(**(raw.get("paddle") or {})),
        ball=BallConfig(**(raw.get("ball") or {})),
        bricks=BrickConfig(**(raw.get("bricks") or {})),
        levels=levels or _default_levels(),
        game=GameConfig(**(raw.get("game") or {})),
        sound=SoundConfig(**(raw.get("sound") or {})),
        deck=DeckConfig(**(raw.get("deck") or {})),
    )


def load_config(path: Path) -> AppConfig:
    """Load config from YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)
    return parse_config(raw)
