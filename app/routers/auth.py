from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
import logging

from app.schemas.user import UserCreate, UserOut
from app.schemas.auth import Token
from app.models.user import User
from app.security import get_password_hash, verify_password, create_access_token
from app.deps import get_db

log = logging.getLogger("auth")

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=UserOut, status_code=201)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == payload.email).first():
        raise HTTPException(status_code=409, detail="Email ya registrado")

    user = User(
        email=payload.email,
        name=payload.name.strip(),
        password=get_password_hash(payload.password),   # guarda HASH
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("registered user %s", user.id)
    return user

@router.post("/login", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(),
            db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == form_data.username).first()
    if not user or not verify_password(form_data.password, user.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail="Email o contraseña incorrectos")

    return {"access_token": create_access_token(subject=user.email),
            "token_type": "bearer"}
