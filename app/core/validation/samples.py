from __future__ import annotations
import random
from typing import Callable, Sequence

# Textos de dominio público
SAMPLE_TEXT_1 = (
    "It is a truth universally acknowledged, that a single man in possession of a good fortune, "
    "must be in want of a wife. However little known the feelings or views of such a man may be "
    "on his first entering a neighbourhood, this truth is so well fixed in the minds of the "
    "surrounding families, that he is considered the rightful property of some one or other of "
    "their daughters. My dear Mr. Bennet, said his lady to him one day, have you heard that "
    "Netherfield Park is let at last?"
)

SAMPLE_TEXT_2 = (
    "It was a bright cold day in April, and the clocks were striking thirteen. Winston Smith, his "
    "chin nuzzled into his breast in an effort to escape the vile wind, slipped quickly through "
    "the glass doors of Victory Mansions, though not quickly enough to prevent a swirl of gritty "
    "dust from entering along with him."
)

SAMPLE_TEXTS: tuple[str, ...] = (SAMPLE_TEXT_1, SAMPLE_TEXT_2)

# "elige uno de N": en tests se inyecta uno determinista
TextSelector = Callable[[Sequence[str]], str]

def pick_sample_text(selector: TextSelector | None = None, pool: Sequence[str] = SAMPLE_TEXTS) -> str:
    if not pool:
        raise ValueError("El pool de textos está vacío")
    return (selector or random.choice)(pool)
