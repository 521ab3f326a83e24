from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import threading, uuid, logging

from app.core.engines.base import TimedSession
from app.core.settings import MAX_SESSIONS_PER_USER

log = logging.getLogger("games")

class SessionNotFound(Exception): ...

class SessionStore:
    """
    Sesiones de juego en memoria, por usuario.
    Cada usuario tiene a lo sumo `max_per_owner` sesiones vivas: al crear
    una más se cierra la más vieja (orden de creación).
    """

    def __init__(self, max_per_owner: Optional[int] = None):
        self._lock = threading.Lock()
        self._sessions: Dict[str, Tuple[int, TimedSession]] = {}
        self.max_per_owner = max(1, int(max_per_owner or MAX_SESSIONS_PER_USER))

    def create(self, owner_id: int, session: TimedSession) -> str:
        owner_id = int(owner_id)
        sid = str(uuid.uuid4())
        evicted: List[Tuple[str, TimedSession]] = []
        with self._lock:
            # el dict conserva el orden de inserción: los primeros son los más viejos
            owned = [k for k, (owner, _) in self._sessions.items() if owner == owner_id]
            for old in owned[: max(0, len(owned) - self.max_per_owner + 1)]:
                evicted.append((old, self._sessions.pop(old)[1]))
            self._sessions[sid] = (owner_id, session)
        for old, sess in evicted:
            sess.close()
            log.info("Evicted %s session %s for user %s", sess.slug, old, owner_id)
        log.info("New %s session %s for user %s", session.slug, sid, owner_id)
        return sid

    def get(self, owner_id: int, sid: str) -> TimedSession:
        with self._lock:
            entry = self._sessions.get(sid)
        # sesiones ajenas se reportan igual que inexistentes
        if not entry or entry[0] != int(owner_id):
            raise SessionNotFound(sid)
        return entry[1]

    def remove(self, owner_id: int, sid: str) -> None:
        sess = self.get(owner_id, sid)
        with self._lock:
            self._sessions.pop(sid, None)
        sess.close()

    def count_for(self, owner_id: int) -> int:
        with self._lock:
            return sum(1 for owner, _ in self._sessions.values() if owner == int(owner_id))

    def close_all(self) -> None:
        with self._lock:
            entries = list(self._sessions.values())
            self._sessions.clear()
        for _, sess in entries:
            sess.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

session_store = SessionStore()
