"""Tests for synthesized sound cues."""

import wave
from unittest.mock import MagicMock, patch


def test_tone_lengths():
    from breakout.sound import SAMPLE_RATE, sawtooth, square, triangle
    assert len(triangle(440, 0.1)) == int(SAMPLE_RATE * 0.1)
    assert len(square(440, 0.05)) == int(SAMPLE_RATE * 0.05)
    assert max(abs(s) for s in sawtooth(180, 0.1, 0.5)) <= 0.5


def test_every_announced_event_has_a_cue():
    from breakout.game import EventKind
    from breakout.sound import cue_samples
    cues = cue_samples(0.3)
    for kind in (EventKind.WALL_HIT, EventKind.PADDLE_HIT, EventKind.BRICK_HIT,
                 EventKind.LIFE_LOST, EventKind.LEVEL_CLEARED, EventKind.WIN,
                 EventKind.GAME_OVER):
        assert cues[kind]


def test_generate_writes_wavs():
    from breakout.sound import SAMPLE_RATE, SoundBoard
    board = SoundBoard()
    board.generate()
    try:
        assert board.cues
        for path in board.cues.values():
            with wave.open(path) as w:
                assert w.getframerate() == SAMPLE_RATE
                assert w.getnframes() > 0
    finally:
        board.close()
    assert not board.cues


def test_on_event_spawns_player():
    from breakout.config import SoundConfig
    from breakout.game import EventKind, GameEvent
    from breakout.sound import SoundBoard
    board = SoundBoard(SoundConfig(player="aplay"))
    board.cues[EventKind.BRICK_HIT] = "/tmp/brick.wav"
    with patch("subprocess.Popen") as mock_popen:
        board.on_event(GameEvent(EventKind.BRICK_HIT, 1, 2))
        board.on_event(GameEvent(EventKind.SERVE))
        mock_popen.assert_called_once()
        assert mock_popen.call_args[0][0] == ["aplay", "/tmp/brick.wav"]


def test_disabled_board_is_silent():
    from breakout.config import SoundConfig
    from breakout.game import EventKind, GameEvent
    from breakout.sound import SoundBoard
    board = SoundBoard(SoundConfig(enabled=False))
    board.cues[EventKind.WALL_HIT] = "/tmp/wall.wav"
    with patch("subprocess.Popen") as mock_popen:
        board.on_event(GameEvent(EventKind.WALL_HIT))
        mock_popen.assert_not_called()


def test_missing_player_is_ignored():
    from breakout.game import EventKind, GameEvent
    from breakout.sound import SoundBoard
    board = SoundBoard()
    board.cues[EventKind.WALL_HIT] = "/tmp/wall.wav"
    with patch("subprocess.Popen", side_effect=FileNotFoundError):
        board.on_event(GameEvent(EventKind.WALL_HIT))


def test_concurrent_playback_is_capped():
    from breakout.game import EventKind, GameEvent
    from breakout.sound import SoundBoard
    board = SoundBoard()
    board.cues[EventKind.WALL_HIT] = "/tmp/wall.wav"
    procs = []

    def fake_popen(*args, **kwargs):
        p = MagicMock()
        p.poll.return_value = None
        procs.append(p)
        return p

    with patch("subprocess.Popen", side_effect=fake_popen):
        for _ in range(6):
            board.on_event(GameEvent(EventKind.WALL_HIT))
    assert len(board._processes) == 4
    procs[0].kill.assert_called_once()
    procs[1].kill.assert_called_once()
