from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Type
import math, threading, weakref, logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.settings import SCORE_RETENTION_CAP
from app.models.user import User
from app.models.typing_score import TypingScore
from app.models.speed_score import SpeedScore

log = logging.getLogger("scores")

class ScoreValidationError(Exception): ...

@dataclass(frozen=True)
class ScoreKind:
    """Una instancia del contrato de puntajes: (duración, métrica principal, tasa)."""
    name: str
    model: Type[Any]
    count_field: str
    rate_field: str
    # claves del payload en la API
    count_key: str
    rate_key: str
    # nombre en la API -> atributo del modelo
    sort_keys: Tuple[Tuple[str, str], ...]

TYPING = ScoreKind(
    name="typing",
    model=TypingScore,
    count_field="words",
    rate_field="words_per_minute",
    count_key="words",
    rate_key="wordsPerMinute",
    sort_keys=(("duration", "duration"), ("words", "words"), ("wordsPerMinute", "words_per_minute")),
)
SPEED = ScoreKind(
    name="speed",
    model=SpeedScore,
    count_field="clicks",
    rate_field="clicks_per_second",
    count_key="clicks",
    rate_key="clicksPerSecond",
    sort_keys=(("duration", "duration"), ("clicks", "clicks"), ("clicksPerSecond", "clicks_per_second")),
)

# ---------- Serialización por usuario ----------
# evicción + insert debe ser atómico por (tipo, usuario) para no pasar el tope
# el lock vive mientras alguien lo tenga tomado o esperando
_locks: "weakref.WeakValueDictionary[tuple[str, int], threading.Lock]" = weakref.WeakValueDictionary()
_locks_guard = threading.Lock()

def _user_lock(kind: ScoreKind, user_id: int) -> threading.Lock:
    key = (kind.name, int(user_id))
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = threading.Lock()
            _locks[key] = lock
        return lock

def validate_score(duration: int, count: int, rate: float) -> None:
    if duration is None or count is None or rate is None:
        raise ScoreValidationError("Datos de puntaje incompletos")
    if not math.isfinite(float(rate)):
        raise ScoreValidationError("Tasa inválida")
    if duration <= 0 or count < 0 or rate < 0:
        raise ScoreValidationError("Datos de puntaje inválidos")

def _newest_first(kind: ScoreKind, user_id: int):
    m = kind.model
    return (
        select(m)
        .where(m.user_id == user_id)
        .order_by(m.created_at.desc(), m.id.desc())
    )

def create_score(
    db: Session,
    kind: ScoreKind,
    user_id: int,
    duration: int,
    count: int,
    rate: float,
    cap: int | None = None,
):
    """
    Guarda un puntaje para el usuario. Si ya tiene `cap` registros, borra los
    más viejos (por fecha de creación) antes de insertar el nuevo.
    """
    validate_score(duration, count, rate)
    cap = int(cap or SCORE_RETENTION_CAP)

    with _user_lock(kind, user_id):
        try:
            # Bloquea la fila del usuario (postgres); en SQLite no aplica
            db.execute(select(User.id).where(User.id == user_id).with_for_update()).first()

            existing = db.execute(_newest_first(kind, user_id)).scalars().all()
            stale = existing[cap - 1:] if len(existing) >= cap else []
            for old in stale:
                db.delete(old)

            row = kind.model(user_id=user_id, duration=int(duration))
            setattr(row, kind.count_field, int(count))
            setattr(row, kind.rate_field, float(rate))
            db.add(row)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(row)

    if stale:
        log.info("%s scores: evicted %d old record(s) for user %s", kind.name, len(stale), user_id)
    return row

def list_scores(db: Session, kind: ScoreKind, user_id: int, cap: int | None = None) -> List[Any]:
    cap = int(cap or SCORE_RETENTION_CAP)
    return db.execute(_newest_first(kind, user_id).limit(cap)).scalars().all()

# ---------- Orden de la tabla de historial ----------

def sort_scores(rows: Sequence[Any], kind: ScoreKind, key: Optional[str], direction: Optional[str]) -> List[Any]:
    """Sin key/direction se deja el orden original (más nuevo primero)."""
    attrs = dict(kind.sort_keys)
    if not key or not direction or key not in attrs:
        return list(rows)
    attr = attrs[key]
    return sorted(rows, key=lambda r: getattr(r, attr), reverse=(direction == "desc"))

def next_sort(current: Tuple[Optional[str], Optional[str]], key: str) -> Tuple[Optional[str], Optional[str]]:
    """Ciclo de cabecera: asc -> desc -> sin orden."""
    cur_key, cur_dir = current
    if cur_key == key:
        if cur_dir == "asc":
            return key, "desc"
        if cur_dir == "desc":
            return None, None
    return key, "asc"

def score_out(kind: ScoreKind, row: Any) -> dict:
    return {
        "id": row.id,
        "duration": row.duration,
        kind.count_key: getattr(row, kind.count_field),
        kind.rate_key: getattr(row, kind.rate_field),
        "userId": row.user_id,
        "createdAt": row.created_at,
    }
