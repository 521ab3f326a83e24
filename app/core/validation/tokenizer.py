from __future__ import annotations
from typing import List

def tokenize(text: str | None) -> List[str]:
    """Recorta y separa por bloques de espacios; nunca devuelve tokens vacíos."""
    return (text or "").split()

def count_words(text: str | None) -> int:
    return len(tokenize(text))

def ends_with_separator(text: str | None) -> bool:
    """True si el último carácter es un espacio (espacio, tab, salto de línea)."""
    return bool(text) and text[-1].isspace()
