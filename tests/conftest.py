from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.db import Base, make_engine, get_db
from app.deps import get_session_factory, get_ticker, get_dispatcher
from app.domain.games.store import session_store
from app.main import app
from app.models.user import User
from app.security import create_access_token


class _ManualHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualTicker:
    """Ticker que solo avanza cuando el test llama a fire()."""

    def __init__(self):
        self.handles: list[_ManualHandle] = []

    def schedule(self, callback):
        handle = _ManualHandle(callback)
        self.handles.append(handle)
        return handle

    @property
    def active(self) -> list[_ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            for h in self.active:
                h.callback()


def run_now(job):
    job()


@pytest.fixture
def ticker():
    return ManualTicker()


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture
def make_user(db):
    def _make(email: str = "ana@example.com", name: str = "Ana") -> User:
        u = User(email=email, name=name, password="not-a-real-hash")
        db.add(u)
        db.commit()
        db.refresh(u)
        return u
    return _make


@pytest.fixture
def user(make_user):
    return make_user()


def auth_headers(u: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject=u.email)}"}


@pytest.fixture
def headers(user):
    return auth_headers(user)


@pytest.fixture
def client(session_factory, ticker):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_ticker] = lambda: ticker
    app.dependency_overrides[get_dispatcher] = lambda: run_now
    yield TestClient(app)
    app.dependency_overrides.clear()
    session_store.close_all()
