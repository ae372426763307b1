import math
from typing import Iterable


def midi2freq(p: int) -> float:
    return 440.0 * 2 ** ((p - 69) / 12)


def pick_frequency(notes: Iterable[int]) -> float:
    """Frecuencia audible de un conjunto de notas: la más aguda, 0.0 si no hay ninguna."""
    return max((midi2freq(p) for p in notes), default=0.0)


def round_half_up(x: float) -> int:
    # round() de Python redondea al par; acá .5 siempre sube
    return int(math.floor(x + 0.5))
