from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from app.core.validation.tokenizer import tokenize, ends_with_separator

class WordStatus(str, Enum):
    pending = "pending"
    current = "current"
    correct = "correct"
    incorrect = "incorrect"

@dataclass(frozen=True)
class WordValidationResult:
    correct_words: int = 0
    total_typed: int = 0
    current_word_index: int = -1     # -1 => no hay palabra en curso
    total_attempted: int = 0
    accuracy: float = 0.0            # 0..100
    is_complete: bool = False
    word_statuses: List[WordStatus] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "correctWords": self.correct_words,
            "totalTyped": self.total_typed,
            "currentWordIndex": self.current_word_index,
            "totalAttempted": self.total_attempted,
            "accuracy": self.accuracy,
            "isComplete": self.is_complete,
            "wordStatuses": [s.value for s in self.word_statuses],
        }

def _same_word(typed: str, expected: str) -> bool:
    return typed.lower() == expected.lower()

def validate_tokens(user_input: str, reference_words: Sequence[str]) -> WordValidationResult:
    """
    Compara palabra por palabra, por posición (sin realinear).
    Una palabra se juzga solo cuando el usuario ya pasó de ella: hay un
    separador al final o ya empezó la siguiente. La última palabra sin
    separador queda como 'current'.
    Insertar o saltar una palabra desalinea todo lo que sigue; es la
    política de puntaje histórica y no se corrige aquí.
    """
    user_words = tokenize(user_input)
    trailing_sep = ends_with_separator(user_input)
    ref_len = len(reference_words)

    completed = len(user_words) if trailing_sep else max(len(user_words) - 1, 0)

    statuses = [WordStatus.pending] * ref_len
    correct = 0
    for i in range(min(completed, ref_len)):
        if _same_word(user_words[i], reference_words[i]):
            statuses[i] = WordStatus.correct
            correct += 1
        else:
            statuses[i] = WordStatus.incorrect

    if not trailing_sep and user_words:
        idx = len(user_words) - 1
        if idx < ref_len and statuses[idx] is WordStatus.pending:
            statuses[idx] = WordStatus.current

    attempted = completed
    accuracy = (correct / attempted * 100) if attempted > 0 else 0.0

    return WordValidationResult(
        correct_words=correct,
        total_typed=len(user_words),
        current_word_index=len(user_words) - 1,
        total_attempted=attempted,
        accuracy=accuracy,
        is_complete=attempted >= ref_len,
        word_statuses=statuses,
    )

def validate_words(user_input: str, reference_text: str) -> WordValidationResult:
    return validate_tokens(user_input, tokenize(reference_text))

def progress_pct(correct_words: int, reference_len: int) -> float:
    if reference_len <= 0:
        return 0.0
    return correct_words / reference_len * 100
