"""Tests for app.core.engines.timer – config clamping and the threading ticker."""

from __future__ import annotations

import threading

from app.core.engines.timer import TimerConfig, ThreadingTicker


KEYSTROKE = TimerConfig(0, 30, max_minutes=1, hard_ceiling=True)
CLICKS = TimerConfig(0, 30, max_minutes=99, hard_ceiling=False)


class TestTimerConfig:
    def test_total_seconds(self):
        assert TimerConfig(1, 0).total_seconds == 60
        assert TimerConfig(0, 45).total_seconds == 45

    def test_minutes_clamped_to_ceiling(self):
        assert KEYSTROKE.with_minutes(2).minutes == 1

    def test_one_minute_forces_seconds_to_zero(self):
        cfg = KEYSTROKE.with_seconds(40).with_minutes(1)
        assert (cfg.minutes, cfg.seconds) == (1, 0)

    def test_seconds_clamped(self):
        assert KEYSTROKE.with_seconds(75).seconds == 59

    def test_seconds_locked_at_zero_with_one_minute(self):
        assert KEYSTROKE.with_minutes(1).with_seconds(30).seconds == 0

    def test_negative_values_clamp_to_zero(self):
        cfg = KEYSTROKE.with_minutes(-3).with_seconds(-1)
        assert (cfg.minutes, cfg.seconds) == (0, 0)

    def test_click_game_allows_long_timers(self):
        cfg = CLICKS.with_minutes(150).with_seconds(75)
        assert (cfg.minutes, cfg.seconds) == (99, 59)

    def test_normalized(self):
        cfg = TimerConfig(3, 99).normalized()
        assert (cfg.minutes, cfg.seconds) == (1, 0)


class TestThreadingTicker:
    def test_ticks_until_cancelled(self):
        fired = threading.Event()
        calls = []

        def cb():
            calls.append(1)
            fired.set()

        handle = ThreadingTicker(interval=0.01).schedule(cb)
        assert fired.wait(2)
        handle.cancel()
        assert calls
