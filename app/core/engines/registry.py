from __future__ import annotations
from typing import Dict, Type
from app.core.engines.base import TimedSession
from app.core.engines.keystroke import KeystrokeSession
from app.core.engines.clicks import ClickSession

_ENGINE_MAP: Dict[str, Type[TimedSession]] = {
    KeystrokeSession.slug: KeystrokeSession,
    ClickSession.slug: ClickSession,
}

def available_games() -> list[str]:
    return sorted(_ENGINE_MAP)

def get_engine_for_slug(slug: str) -> Type[TimedSession]:
    cls = _ENGINE_MAP.get((slug or "").strip().lower())
    if cls is None:
        raise ValueError(f"Juego no encontrado para slug={slug}")
    return cls
