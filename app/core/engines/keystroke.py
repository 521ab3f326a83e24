from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from app.core.engines.base import TimedSession
from app.core.validation.tokenizer import tokenize
from app.core.validation.validator import (
    WordStatus, WordValidationResult, validate_tokens, progress_pct,
)
from app.core.validation.samples import SAMPLE_TEXTS, TextSelector, pick_sample_text

def words_per_minute(correct_words: int, duration: int) -> float:
    if duration <= 0:
        return 0.0
    return round(correct_words / duration * 60, 2)

@dataclass(frozen=True)
class TypingFinalScore:
    words: int              # palabras correctas
    duration: int           # segundos configurados
    words_per_minute: float
    accuracy: float
    total_attempted: int

class KeystrokeSession(TimedSession):
    """Test de tipeo contra un texto de referencia, con timer de hasta 1 minuto."""

    slug = "keystroke-timer"
    max_minutes = 1
    hard_ceiling = True

    def __init__(
        self,
        ticker,
        submit=None,
        selector: Optional[TextSelector] = None,
        texts: Sequence[str] = SAMPLE_TEXTS,
        **kwargs,
    ):
        self._selector = selector
        self._texts = texts
        self._set_reference(pick_sample_text(selector, texts))
        super().__init__(ticker, submit, **kwargs)

    def _set_reference(self, text: str) -> None:
        self.reference_text = text
        self.reference_words: List[str] = tokenize(text)

    # ---------- Hooks ----------

    def _reset_activity(self) -> None:
        self.typed_text = ""
        self.word_count = 0
        self.correct_word_count = 0
        self.current_word_index = -1
        self.total_attempted = 0
        self.accuracy = 0.0
        self.is_complete = False
        self.word_statuses: List[WordStatus] = [WordStatus.pending] * len(self.reference_words)

    def _new_round(self) -> None:
        self._set_reference(pick_sample_text(self._selector, self._texts))

    def _build_final_score(self, duration: int) -> TypingFinalScore:
        return TypingFinalScore(
            words=self.correct_word_count,
            duration=duration,
            words_per_minute=words_per_minute(self.correct_word_count, duration),
            accuracy=self.accuracy,
            total_attempted=self.total_attempted,
        )

    def _score_payload(self, final: TypingFinalScore) -> Dict[str, Any]:
        return {
            "duration": final.duration,
            "words": final.words,
            "wordsPerMinute": final.words_per_minute,
        }

    def _score_view(self, final: TypingFinalScore) -> Dict[str, Any]:
        out = self._score_payload(final)
        out["accuracy"] = final.accuracy
        out["totalAttempted"] = final.total_attempted
        return out

    def _activity_view(self) -> Dict[str, Any]:
        return {
            "referenceText": self.reference_text,
            "typedText": self.typed_text,
            "wordCount": self.word_count,
            "correctWordCount": self.correct_word_count,
            "currentWordIndex": self.current_word_index,
            "totalAttempted": self.total_attempted,
            "accuracy": self.accuracy,
            "isComplete": self.is_complete,
            "progressPct": progress_pct(self.correct_word_count, len(self.reference_words)),
            "wordStatuses": [s.value for s in self.word_statuses],
        }

    # ---------- Input ----------

    def type_text(self, text: str) -> Optional[WordValidationResult]:
        """Procesa el contenido completo del textarea. Se ignora si el input está deshabilitado."""
        with self._lock:
            if not self.input_enabled:
                return None
            result = validate_tokens(text, self.reference_words)
            self.typed_text = text
            self.word_count = result.total_typed
            self.correct_word_count = result.correct_words
            self.current_word_index = result.current_word_index
            self.total_attempted = result.total_attempted
            self.accuracy = result.accuracy
            self.is_complete = result.is_complete
            self.word_statuses = list(result.word_statuses)
            return result
