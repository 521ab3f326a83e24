from pydantic import BaseModel
from datetime import datetime

# Los rangos (duration > 0, etc.) los valida el servicio -> 400

class TypingScoreIn(BaseModel):
    duration: int
    words: int
    wordsPerMinute: float

class TypingScoreOut(BaseModel):
    id: int
    duration: int
    words: int
    wordsPerMinute: float
    userId: int
    createdAt: datetime | None = None

class SpeedScoreIn(BaseModel):
    duration: int
    clicks: int
    clicksPerSecond: float

class SpeedScoreOut(BaseModel):
    id: int
    duration: int
    clicks: int
    clicksPerSecond: float
    userId: int
    createdAt: datetime | None = None
