from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session, sessionmaker
from jose import JWTError
from app.db import SessionLocal, get_db
from app.models.user import User
from app.security import decode_access_token
from app.core.engines.timer import Ticker, ThreadingTicker
from app.core.engines.base import Dispatcher, spawn_thread
from app.core.settings import TICK_INTERVAL_SEC

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_session_factory() -> sessionmaker:
    """Fábrica de sesiones para trabajos fuera del request (envío de puntajes en background)."""
    return SessionLocal

def get_ticker() -> Ticker:
    return ThreadingTicker(interval=TICK_INTERVAL_SEC)

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    cred_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Credenciales inválidas",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
        email: str | None = payload.get("sub")
        if email is None:
            raise cred_exc
    except JWTError:
        raise cred_exc
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        raise cred_exc
    return user

def get_dispatcher() -> Dispatcher:
    """Cómo se lanza el envío del puntaje al terminar una sesión (hilo aparte)."""
    return spawn_thread
