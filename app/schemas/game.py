from pydantic import BaseModel
from typing import Optional

class TimerIn(BaseModel):
    minutes: Optional[int] = None
    seconds: Optional[int] = None

class TypingInputIn(BaseModel):
    text: str

class ValidateIn(BaseModel):
    userInput: str
    referenceText: str

class ValidateOut(BaseModel):
    correctWords: int
    totalTyped: int
    currentWordIndex: int
    totalAttempted: int
    accuracy: float
    isComplete: bool
    wordStatuses: list[str]
