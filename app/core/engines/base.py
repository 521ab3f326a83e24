from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, Optional
import threading, logging

from app.core.engines.timer import TimerConfig, Countdown, Ticker, TickHandle

log = logging.getLogger("games")

class SessionState(str, Enum):
    idle = "idle"
    running = "running"
    completed = "completed"

class InvalidTransition(Exception): ...

Submit = Callable[[Dict[str, Any]], Any]
Dispatcher = Callable[[Callable[[], None]], None]

def spawn_thread(job: Callable[[], None]) -> None:
    threading.Thread(target=job, daemon=True).start()

class TimedSession:
    """
    Máquina de estados de un juego con cuenta regresiva:
        idle --start--> running --tick*--> running --expire--> completed
        completed --retry--> running
        running|completed --reset--> idle

    La sesión es dueña de a lo sumo un tick armado; se libera en toda
    salida de running y en close().
    La finalización se procesa una sola vez (has_completed); el envío del
    puntaje sale en un trabajo aparte y sus errores solo se loguean.
    """

    slug = ""
    max_minutes = 1
    hard_ceiling = True
    default_minutes = 0
    default_seconds = 30

    def __init__(
        self,
        ticker: Ticker,
        submit: Optional[Submit] = None,
        dispatch: Dispatcher = spawn_thread,
        on_saved: Optional[Callable[[Any], None]] = None,
    ):
        self._lock = threading.RLock()
        self._ticker = ticker
        self._submit = submit
        self._dispatch = dispatch
        self._on_saved = on_saved
        self._tick_handle: TickHandle | None = None
        # se incrementa en cada _release: un tick de una generación vieja no hace nada
        self._tick_gen = 0

        self.config = TimerConfig(
            self.default_minutes, self.default_seconds, self.max_minutes, self.hard_ceiling
        ).normalized()
        self.countdown = Countdown(remaining=self.config.total_seconds, running=False)
        self.state = SessionState.idle
        self.has_completed = False
        self.last_duration: TimerConfig | None = None
        self.final_score: Any = None
        self.input_enabled = False
        self._reset_activity()

    # ---------- Hooks de cada juego ----------

    def _reset_activity(self) -> None:
        """Limpia lo acumulado en la ronda (texto tipeado, clicks...)."""

    def _new_round(self) -> None:
        """Se llama en reset; p.ej. elegir un texto nuevo."""

    def _build_final_score(self, duration: int) -> Any:
        raise NotImplementedError

    def _score_payload(self, final: Any) -> Dict[str, Any]:
        raise NotImplementedError

    def _activity_view(self) -> Dict[str, Any]:
        return {}

    # ---------- Configuración del timer ----------

    def set_minutes(self, value: int) -> TimerConfig:
        with self._lock:
            self._ensure_not_running("editar el timer")
            self.config = self.config.with_minutes(value)
            self.countdown.remaining = self.config.total_seconds
            return self.config

    def set_seconds(self, value: int) -> TimerConfig:
        with self._lock:
            self._ensure_not_running("editar el timer")
            self.config = self.config.with_seconds(value)
            self.countdown.remaining = self.config.total_seconds
            return self.config

    # ---------- Transiciones ----------

    def start(self) -> None:
        with self._lock:
            self._ensure_not_running("iniciar")
            total = self.config.total_seconds
            if total <= 0:
                raise InvalidTransition("La duración debe ser mayor a 0")
            self.last_duration = self.config
            self.countdown.remaining = total
            self.countdown.running = True
            self.has_completed = False
            self.final_score = None
            self._reset_activity()
            self.input_enabled = True
            self.state = SessionState.running
            self._arm()
            log.info("%s session started (%ss)", self.slug, total)

    def retry(self) -> None:
        with self._lock:
            if self.last_duration is None:
                raise InvalidTransition("No hay una duración previa para reintentar")
            self._ensure_not_running("reintentar")
            self.config = self.last_duration
            self.start()

    def tick(self, gen: Optional[int] = None) -> None:
        with self._lock:
            if gen is not None and gen != self._tick_gen:
                return
            if self.state is not SessionState.running or not self.countdown.running:
                return
            if self.countdown.remaining > 0:
                self.countdown.remaining -= 1
            if self.countdown.remaining <= 0:
                self.countdown.remaining = 0
                self.countdown.running = False
                self._release()
        self.check_completion()

    def check_completion(self) -> bool:
        """
        Única transición running -> completed. Se puede llamar cuantas veces
        se quiera: solo la primera con el contador en 0 hace algo.
        """
        with self._lock:
            if (
                self.has_completed
                or self.countdown.running
                or self.countdown.remaining != 0
                or not self.input_enabled
            ):
                return False
            # duración configurada al iniciar, no lo que quedó en pantalla
            duration = (self.last_duration or self.config).total_seconds
            final = self._build_final_score(duration)
            self.final_score = final
            self.input_enabled = False
            self.has_completed = True
            self.state = SessionState.completed
            self.countdown.remaining = self.config.total_seconds
            payload = self._score_payload(final)
            log.info("%s session completed: %s", self.slug, payload)
        self._dispatch_submission(payload)
        return True

    def reset(self) -> None:
        with self._lock:
            self._release()
            self.countdown.running = False
            self.countdown.remaining = self.config.total_seconds
            self.has_completed = False
            self.final_score = None
            self._new_round()
            self._reset_activity()
            self.input_enabled = False
            self.state = SessionState.idle

    def manual_reset(self) -> None:
        """Desde el modal de resultados; mismo efecto que reset."""
        self.reset()

    def close(self) -> None:
        with self._lock:
            self._release()
            self.countdown.running = False

    # ---------- Vista ----------

    @property
    def display_minutes(self) -> int:
        if self.countdown.running:
            return self.countdown.remaining // 60
        return self.config.minutes

    @property
    def display_seconds(self) -> int:
        if self.countdown.running:
            return self.countdown.remaining % 60
        return self.config.seconds

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            out = {
                "game": self.slug,
                "state": self.state.value,
                "minutes": self.config.minutes,
                "seconds": self.config.seconds,
                "displayMinutes": self.display_minutes,
                "displaySeconds": self.display_seconds,
                "remainingSeconds": self.countdown.remaining,
                "isRunning": self.countdown.running,
                "isCompleted": self.has_completed,
                "isInputEnabled": self.input_enabled,
                "lastDuration": (
                    {"minutes": self.last_duration.minutes, "seconds": self.last_duration.seconds}
                    if self.last_duration else None
                ),
                "finalScore": self._score_view(self.final_score) if self.final_score else None,
            }
            out.update(self._activity_view())
            return out

    def _score_view(self, final: Any) -> Dict[str, Any]:
        return self._score_payload(final)

    # ---------- Internos ----------

    def _ensure_not_running(self, action: str) -> None:
        if self.state is SessionState.running:
            raise InvalidTransition(f"No se puede {action} con el timer corriendo")

    def _arm(self) -> None:
        self._release()
        gen = self._tick_gen
        self._tick_handle = self._ticker.schedule(lambda: self.tick(gen))

    def _release(self) -> None:
        self._tick_gen += 1
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _dispatch_submission(self, payload: Dict[str, Any]) -> None:
        if self._submit is None:
            return
        submit, on_saved, slug = self._submit, self._on_saved, self.slug

        def job():
            try:
                saved = submit(payload)
            except Exception:
                log.exception("Failed to save %s score", slug)
                return
            if on_saved is not None:
                try:
                    on_saved(saved)
                except Exception:
                    log.warning("%s on_saved callback failed", slug, exc_info=True)

        self._dispatch(job)
