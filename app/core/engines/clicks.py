from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.core.engines.base import TimedSession

def clicks_per_second(clicks: int, duration: int) -> float:
    if duration <= 0:
        return 0.0
    return round(clicks / duration, 2)

@dataclass(frozen=True)
class ClickFinalScore:
    clicks: int
    duration: int
    clicks_per_second: float

class ClickSession(TimedSession):
    """Juego de velocidad de clicks; sin tope de un minuto."""

    slug = "timer-game"
    max_minutes = 99
    hard_ceiling = False

    def _reset_activity(self) -> None:
        self.click_count = 0

    def _build_final_score(self, duration: int) -> ClickFinalScore:
        return ClickFinalScore(
            clicks=self.click_count,
            duration=duration,
            clicks_per_second=clicks_per_second(self.click_count, duration),
        )

    def _score_payload(self, final: ClickFinalScore) -> Dict[str, Any]:
        return {
            "duration": final.duration,
            "clicks": final.clicks,
            "clicksPerSecond": final.clicks_per_second,
        }

    def _activity_view(self) -> Dict[str, Any]:
        return {"clickCount": self.click_count}

    def click(self) -> Optional[int]:
        with self._lock:
            if not self.input_enabled:
                return None
            self.click_count += 1
            return self.click_count
