from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.deps import get_db, get_current_user
from app.models.user import User
from app.schemas.score import TypingScoreIn, TypingScoreOut
from app.domain.scores.service import (
    TYPING, ScoreValidationError, create_score, list_scores, sort_scores, score_out,
)

router = APIRouter(prefix="/typing-scores", tags=["scores"])

@router.post("", response_model=TypingScoreOut, status_code=201)
def create_typing_score(
    body: TypingScoreIn,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    try:
        row = create_score(db, TYPING, me.id, body.duration, body.words, body.wordsPerMinute)
    except ScoreValidationError as e:
        raise HTTPException(400, str(e))
    return score_out(TYPING, row)

@router.get("", response_model=list[TypingScoreOut])
def get_typing_scores(
    sort: Optional[Literal["duration", "words", "wordsPerMinute"]] = None,
    direction: Optional[Literal["asc", "desc"]] = None,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    """Historial del usuario, más nuevo primero (máx. 10). sort/direction opcionales."""
    rows = sort_scores(list_scores(db, TYPING, me.id), TYPING, sort, direction)
    return [score_out(TYPING, r) for r in rows]
