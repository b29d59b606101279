"""Persistent high scores.

Stores best scores per game name in a small JSON file,
~/.streamdeck-arcade/scores.json by default.
"""

import json
import os
import threading

_lock = threading.Lock()


class ScoreBoard:
    """High-score store for one game. Storage failures never reach the caller."""

    def __init__(self, path: str, game: str = "breakout"):
        self.path = os.path.expanduser(path)
        self.game = game

    def _load_all(self) -> dict:
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, ValueError):  # ValueError covers bad JSON and bad UTF-8
            return {}
        return data if isinstance(data, dict) else {}

    def load_best(self, default: int = 0) -> int:
        """Best score on record, or default if there is none."""
        value = self._load_all().get(self.game, default)
        return value if isinstance(value, int) else default

    def save_best(self, score: int) -> bool:
        """Record a new best. Returns False if the write failed."""
        with _lock:
            try:
                os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
                data = self._load_all()
                data[self.game] = score
                with open(self.path, "w") as f:
                    json.dump(data, f, indent=2)
            except OSError:
                return False
        return True


class MemoryScoreBoard:
    """In-process stand-in with the same interface, for tests and --frame."""

    def __init__(self, best: int = 0):
        self.best = best

    def load_best(self, default: int = 0) -> int:
        return self.best or default

    def save_best(self, score: int) -> bool:
        self.best = score
        return True
