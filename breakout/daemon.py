"""Breakout on a Stream Deck — main daemon.

The whole key grid is one screen: each frame is rendered at field resolution,
scaled to the grid and cut into key images. The bottom row steers the paddle
(outer keys hold-to-move, inner keys jump the paddle under the key), any other
key serves the ball or, after a game ends, starts a new one.
"""

import argparse
import sys
import threading
from collections.abc import Callable
from pathlib import Path

from StreamDeck.DeviceManager import DeviceManager
from StreamDeck.ImageHelpers import PILHelper

from breakout.config import AppConfig, load_config
from breakout.game import EventKind, Game, GameEvent, Snapshot
from breakout.renderer import render_frame, slice_tiles
from breakout.scores import ScoreBoard
from breakout.sound import SoundBoard

ANNOUNCED = {
    EventKind.LIFE_LOST,
    EventKind.LEVEL_CLEARED,
    EventKind.WIN,
    EventKind.GAME_OVER,
    EventKind.NEW_HIGH_SCORE,
    EventKind.RESET,
}


def find_deck():
    """Find first visual Stream Deck device."""
    decks = DeviceManager().enumerate()
    for deck in decks:
        if deck.is_visual():
            return deck
    return None


class TickThread(threading.Thread):
    """Background thread that advances the game at a fixed tick rate.

    Each tick runs under `lock`, then `on_frame` gets the snapshot and events.
    The step size never depends on how late a tick fires.
    """

    def __init__(self, game: Game, lock: threading.Lock, interval: float,
                 on_frame: Callable[[Snapshot, list[GameEvent]], None] | None = None):
        super().__init__(daemon=True)
        self.game = game
        self.lock = lock
        self.interval = interval
        self.on_frame = on_frame
        self._stop_event = threading.Event()

    def stop(self):
        """Signal the tick thread to stop."""
        self._stop_event.set()

    def step(self) -> list[GameEvent]:
        with self.lock:
            events = self.game.tick()
            snapshot = self.game.snapshot()
        if self.on_frame:
            self.on_frame(snapshot, events)
        return events

    def run(self):
        while not self._stop_event.is_set():
            self.step()
            self._stop_event.wait(self.interval)


class DeckBreakout:
    """Main application class."""

    def __init__(self, config: AppConfig, deck, game: Game, verbose: bool = False):
        self.config = config
        self.deck = deck
        self.game = game
        self.verbose = verbose
        self.lock = threading.Lock()
        self.rows, self.cols = deck.key_layout()
        self.tile_size = tuple(deck.key_image_format()["size"])
        self.ticker = TickThread(
            game=game,
            lock=self.lock,
            interval=1.0 / max(1, config.deck.fps),
            on_frame=self._on_frame,
        )

    def start(self):
        """Initialize deck and start the tick loop."""
        self.deck.open()
        self.deck.reset()
        self.deck.set_brightness(self.config.deck.brightness)
        self.deck.set_key_callback(self._on_key_change)
        self.ticker.start()

    def stop(self):
        """Shutdown cleanly."""
        self.ticker.stop()
        self.deck.reset()
        self.deck.close()

    # -- output ------------------------------------------------------------

    def _on_frame(self, snapshot: Snapshot, events: list[GameEvent]):
        with self.lock:
            errors = list(self.game.listener_errors)
            self.game.listener_errors.clear()
        for event, exc in errors:
            print(f"listener failed on {event.kind.value}: {exc!r}")
        if self.verbose:
            for ev in events:
                if ev.kind in ANNOUNCED:
                    print(f"{ev.kind.value}: score={snapshot.score} "
                          f"lives={snapshot.lives} level={snapshot.level + 1}")
        frame = render_frame(snapshot)
        tiles = slice_tiles(frame, self.rows, self.cols, self.tile_size)
        for key, tile in enumerate(tiles):
            native = PILHelper.to_native_key_format(self.deck, tile)
            with self.deck:
                self.deck.set_key_image(key, native)

    # -- input -------------------------------------------------------------

    def _on_key_change(self, deck, key: int, pressed: bool):
        """Translate a key press or release into a game intent."""
        bottom_start = (self.rows - 1) * self.cols
        bottom_end = bottom_start + self.cols - 1

        with self.lock:
            if key == bottom_start:
                self.game.move_paddle(-1 if pressed else 0)
                return
            if key == bottom_end:
                self.game.move_paddle(1 if pressed else 0)
                return
            if not pressed:
                return
            if key > bottom_start:
                col = key - bottom_start
                self.game.set_paddle_center((col + 0.5) / self.cols * self.game.field_width)
                return
            if self.game.phase.terminal:
                self.game.request_reset()
            else:
                self.game.request_serve()


def main():
    parser = argparse.ArgumentParser(description="Breakout for Stream Deck")
    parser.add_argument("--config", default="config.yaml", help="Config file path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--frame", metavar="PATH",
                        help="Render the opening frame to a PNG and exit")
    args = parser.parse_args()

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Config not found: {config_path}")
        sys.exit(1)

    config = load_config(config_path)

    if args.frame:
        game = Game(config)
        render_frame(game.snapshot()).save(args.frame)
        print(f"Wrote {args.frame}")
        return

    deck = find_deck()
    if deck is None:
        print("No Stream Deck found. Is it plugged in?")
        sys.exit(1)

    scores = ScoreBoard(config.game.scores_file, config.game.name)
    game = Game(config, scores=scores)

    sound = SoundBoard(config.sound)
    if config.sound.enabled:
        try:
            sound.generate()
            print("Sound effects: ON")
        except OSError:
            print("Sound effects: OFF (generation failed)")
    game.subscribe(sound.on_event)

    app = DeckBreakout(config=config, deck=deck, game=game, verbose=args.verbose)
    print(f"Connected: {deck.deck_type()} ({deck.key_count()} keys)")
    print("BREAKOUT! Press any key above the bottom row to serve.")
    app.start()

    try:
        # Block main thread
        threading.Event().wait()
    except KeyboardInterrupt:
        print(f"\nBye! Final score: {game.score} Best: {game.high_score}")
    finally:
        app.stop()
        sound.close()


if __name__ == "__main__":
    main()
