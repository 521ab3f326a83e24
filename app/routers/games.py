from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import sessionmaker
import logging

from app.deps import get_current_user, get_session_factory, get_ticker, get_dispatcher
from app.models.user import User
from app.schemas.game import TimerIn, TypingInputIn, ValidateIn, ValidateOut
from app.core.engines.base import TimedSession, InvalidTransition, Dispatcher
from app.core.engines.keystroke import KeystrokeSession
from app.core.engines.clicks import ClickSession
from app.core.engines.registry import get_engine_for_slug, available_games
from app.core.engines.timer import Ticker
from app.core.validation.validator import validate_words
from app.domain.games.store import session_store, SessionNotFound
from app.services.score_gateway import LocalScoreGateway, kind_for_game

log = logging.getLogger("games")

router = APIRouter(prefix="/games", tags=["games"])

def _get(me: User, session_id: str) -> TimedSession:
    try:
        return session_store.get(me.id, session_id)
    except SessionNotFound:
        raise HTTPException(404, "Sesión no encontrada")

def _payload(session_id: str, sess: TimedSession, **extra) -> dict:
    out = {"sessionId": session_id, **sess.snapshot()}
    out.update(extra)
    return out

@router.get("")
def list_games():
    return available_games()

@router.post("/keystroke-timer/validate", response_model=ValidateOut)
def validate(body: ValidateIn):
    """Validación sin estado: útil para el front en cada tecla."""
    return validate_words(body.userInput, body.referenceText).as_dict()

@router.post("/{slug}/sessions", status_code=201)
def create_session(
    slug: str,
    me: User = Depends(get_current_user),
    session_factory: sessionmaker = Depends(get_session_factory),
    ticker: Ticker = Depends(get_ticker),
    dispatch: Dispatcher = Depends(get_dispatcher),
):
    try:
        cls = get_engine_for_slug(slug)
    except ValueError:
        raise HTTPException(404, "Juego no encontrado")

    gateway = LocalScoreGateway(kind_for_game(cls.slug), me.id, session_factory)
    user_id = me.id

    def on_saved(saved: dict):
        log.info("%s score saved for user %s: id=%s", cls.slug, user_id, saved.get("id"))

    sess = cls(ticker, gateway.submit, dispatch=dispatch, on_saved=on_saved)
    session_id = session_store.create(me.id, sess)
    return _payload(session_id, sess)

@router.get("/sessions/{session_id}")
def get_session(session_id: str, me: User = Depends(get_current_user)):
    return _payload(session_id, _get(me, session_id))

@router.put("/sessions/{session_id}/timer")
def set_timer(session_id: str, body: TimerIn, me: User = Depends(get_current_user)):
    sess = _get(me, session_id)
    try:
        # primero minutos: con 1 minuto los segundos quedan en 0
        if body.minutes is not None:
            sess.set_minutes(body.minutes)
        if body.seconds is not None:
            sess.set_seconds(body.seconds)
    except InvalidTransition as e:
        raise HTTPException(409, str(e))
    return _payload(session_id, sess)

@router.post("/sessions/{session_id}/start")
def start(session_id: str, me: User = Depends(get_current_user)):
    sess = _get(me, session_id)
    try:
        sess.start()
    except InvalidTransition as e:
        raise HTTPException(409, str(e))
    return _payload(session_id, sess)

@router.post("/sessions/{session_id}/retry")
def retry(session_id: str, me: User = Depends(get_current_user)):
    sess = _get(me, session_id)
    try:
        sess.retry()
    except InvalidTransition as e:
        raise HTTPException(409, str(e))
    return _payload(session_id, sess)

@router.post("/sessions/{session_id}/reset")
def reset(session_id: str, me: User = Depends(get_current_user)):
    sess = _get(me, session_id)
    sess.reset()
    return _payload(session_id, sess)

@router.post("/sessions/{session_id}/input")
def type_input(session_id: str, body: TypingInputIn, me: User = Depends(get_current_user)):
    sess = _get(me, session_id)
    if not isinstance(sess, KeystrokeSession):
        raise HTTPException(409, "Este juego no acepta texto")
    result = sess.type_text(body.text)
    return _payload(session_id, sess, accepted=result is not None)

@router.post("/sessions/{session_id}/click")
def click(session_id: str, me: User = Depends(get_current_user)):
    sess = _get(me, session_id)
    if not isinstance(sess, ClickSession):
        raise HTTPException(409, "Este juego no acepta clicks")
    count = sess.click()
    return _payload(session_id, sess, accepted=count is not None)

@router.delete("/sessions/{session_id}")
def close_session(session_id: str, me: User = Depends(get_current_user)):
    try:
        session_store.remove(me.id, session_id)
    except SessionNotFound:
        raise HTTPException(404, "Sesión no encontrada")
    return {"ok": True}
