from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.deps import get_db, get_current_user
from app.models.user import User
from app.schemas.score import SpeedScoreIn, SpeedScoreOut
from app.domain.scores.service import (
    SPEED, ScoreValidationError, create_score, list_scores, sort_scores, score_out,
)

router = APIRouter(prefix="/speed-scores", tags=["scores"])

@router.post("", response_model=SpeedScoreOut, status_code=201)
def create_speed_score(
    body: SpeedScoreIn,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    try:
        row = create_score(db, SPEED, me.id, body.duration, body.clicks, body.clicksPerSecond)
    except ScoreValidationError as e:
        raise HTTPException(400, str(e))
    return score_out(SPEED, row)

@router.get("", response_model=list[SpeedScoreOut])
def get_speed_scores(
    sort: Optional[Literal["duration", "clicks", "clicksPerSecond"]] = None,
    direction: Optional[Literal["asc", "desc"]] = None,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    rows = sort_scores(list_scores(db, SPEED, me.id), SPEED, sort, direction)
    return [score_out(SPEED, r) for r in rows]
