from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable, Protocol
import threading, logging

log = logging.getLogger(__name__)

SECONDS_MAX = 59

def _clamp(value: int, low: int, high: int) -> int:
    return min(max(low, int(value or 0)), high)

@dataclass(frozen=True)
class TimerConfig:
    """
    Duración pedida como (minutos, segundos).
    - max_minutes: tope de minutos editables.
    - hard_ceiling: si es True la duración total nunca pasa de max_minutes
      (con minutos en el tope, los segundos quedan en 0).
    Los valores fuera de rango se recortan, nunca se rechazan.
    """
    minutes: int = 0
    seconds: int = 30
    max_minutes: int = 1
    hard_ceiling: bool = True

    @property
    def total_seconds(self) -> int:
        return self.minutes * 60 + self.seconds

    def _max_seconds(self, minutes: int) -> int:
        if self.hard_ceiling and minutes >= self.max_minutes:
            return 0
        return SECONDS_MAX

    def with_minutes(self, value: int) -> "TimerConfig":
        minutes = _clamp(value, 0, self.max_minutes)
        seconds = min(self.seconds, self._max_seconds(minutes))
        return replace(self, minutes=minutes, seconds=seconds)

    def with_seconds(self, value: int) -> "TimerConfig":
        return replace(self, seconds=_clamp(value, 0, self._max_seconds(self.minutes)))

    def normalized(self) -> "TimerConfig":
        return self.with_minutes(self.minutes).with_seconds(self.seconds)

@dataclass
class Countdown:
    remaining: int = 0
    running: bool = False

# ---------- Fuente de ticks ----------

class TickHandle(Protocol):
    def cancel(self) -> None: ...

class Ticker(Protocol):
    def schedule(self, callback: Callable[[], None]) -> TickHandle: ...

class _ThreadTick:
    def __init__(self, interval: float, callback: Callable[[], None]):
        self._interval = interval
        self._callback = callback
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self):
        while not self._stop.wait(self._interval):
            try:
                self._callback()
            except Exception:
                log.exception("tick callback failed")

    def cancel(self) -> None:
        self._stop.set()

class ThreadingTicker:
    """Un hilo daemon por tick armado; cancel() lo detiene en el próximo intervalo."""

    def __init__(self, interval: float = 1.0):
        self.interval = interval

    def schedule(self, callback: Callable[[], None]) -> TickHandle:
        return _ThreadTick(self.interval, callback)
