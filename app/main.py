import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.settings import CORS_ORIGINS, DEV_AUTO_CREATE, LOG_LEVEL
from app.db import Base, engine
# registra los modelos en la metadata
from app.models import user, typing_score, speed_score  # noqa: F401
from app.domain.games.store import session_store

from app.routers import auth as auth_router
from app.routers import user as user_router
from app.routers import typing_scores as typing_scores_router
from app.routers import speed_scores as speed_scores_router
from app.routers import games as games_router

def setup_logging() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

@asynccontextmanager
async def lifespan(app: FastAPI):
    if DEV_AUTO_CREATE:
        Base.metadata.create_all(bind=engine)
    yield
    # ningún tick debe quedar vivo al apagar
    session_store.close_all()

setup_logging()

app = FastAPI(title="Keystroke Timer API", lifespan=lifespan)

# ==== CORS ====
origins_list = [o.strip() for o in CORS_ORIGINS.split(",")] if CORS_ORIGINS else ["http://localhost:3000"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==== Routers ====
app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(typing_scores_router.router)
app.include_router(speed_scores_router.router)
app.include_router(games_router.router)

@app.get("/health")
def health():
    return {"status": "ok"}
