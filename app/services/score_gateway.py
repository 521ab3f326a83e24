from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional
import logging
import requests

from sqlalchemy.orm import Session

from app.core.settings import SCORES_API_URL, SCORES_API_TIMEOUT
from app.domain.scores.service import ScoreKind, TYPING, SPEED, create_score, score_out

log = logging.getLogger("score_gateway")

class GatewayError(Exception): ...

_PATHS = {TYPING.name: "/typing-scores", SPEED.name: "/speed-scores"}
_KIND_BY_GAME = {"keystroke-timer": TYPING, "timer-game": SPEED}

def kind_for_game(slug: str) -> ScoreKind:
    return _KIND_BY_GAME[slug]

class LocalScoreGateway:
    """Envía el puntaje en el mismo proceso; abre su propia sesión de DB (corre fuera del request)."""

    def __init__(self, kind: ScoreKind, user_id: int, session_factory: Callable[[], Session]):
        self.kind = kind
        self.user_id = user_id
        self.session_factory = session_factory

    def submit(self, payload: Dict[str, Any]) -> dict:
        db = self.session_factory()
        try:
            row = create_score(
                db, self.kind, self.user_id,
                duration=payload["duration"],
                count=payload[self.kind.count_key],
                rate=payload[self.kind.rate_key],
            )
            return score_out(self.kind, row)
        finally:
            db.close()

class HttpScoreGateway:
    """
    Cliente de la API de puntajes para juegos que corren fuera del server.
    Sin reintentos: preferimos a lo sumo una vez antes que duplicar registros.
    """

    def __init__(
        self,
        kind: ScoreKind,
        token: str,
        base_url: str = SCORES_API_URL,
        timeout: float = SCORES_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.kind = kind
        self.url = f"{base_url.rstrip('/')}{_PATHS[kind.name]}"
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Authorization": f"Bearer {token}"})

    def _check(self, resp: requests.Response) -> Any:
        if resp.status_code >= 400:
            raise GatewayError(f"[scores] non-2xx: {resp.status_code} body={resp.text[:400]}")
        return resp.json()

    def submit(self, payload: Dict[str, Any]) -> dict:
        resp = self._session.post(self.url, json=payload, timeout=self.timeout)
        return self._check(resp)

    def list(self) -> List[dict]:
        resp = self._session.get(self.url, timeout=self.timeout)
        return self._check(resp)
