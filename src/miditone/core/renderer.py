from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Optional, Sequence, Tuple

from ..constants import SR, CHANNELS, MIN_SEGMENT_MS
from ..synth.tone import Tone
from .dsp import pick_frequency, round_half_up
from .events import ChangePoint


@dataclass(frozen=True)
class Segment:
    index: int
    start: int              # unidades
    duration_units: int
    notes: FrozenSet[int]

    @property
    def frequency(self) -> float:
        return pick_frequency(self.notes)


@dataclass
class RenderSummary:
    segment_count: int = 0          # segmentos enviados a los sinks
    total_duration_ms: float = 0.0  # todos los segmentos dentro de la ventana
    skipped_count: int = 0          # dentro de la ventana pero muy cortos
    emitted: List[Tuple[float, float]] = field(default_factory=list)  # (dur_ms, freq)


def iter_segments(changes: Sequence[ChangePoint]) -> Iterator[Segment]:
    """Cada par de cambios consecutivos es un segmento con las notas del primero."""
    for i in range(len(changes) - 1):
        cur, nxt = changes[i], changes[i + 1]
        yield Segment(i, cur.timestamp, nxt.timestamp - cur.timestamp, cur.notes)


def render_all(
    changes: Sequence[ChangePoint],
    delta_ms: float = 1.0,
    speed: float = 1.0,
    from_note: Optional[int] = None,
    until_note: Optional[int] = None,
    sink=None,
    melody=None,
) -> RenderSummary:
    """
    Recorre los segmentos en orden y manda cada uno, como una sola senoidal
    (la nota más aguda, o silencio), al sink de audio y/o al escritor de
    melodía.

    - from_note / until_note: ventana inclusiva sobre el índice de segmento.
      Antes de from_note se saltea; pasado until_note se corta.
    - duración real = unidades * delta_ms / speed.
    - Segmentos de MIN_SEGMENT_MS o menos se cuentan pero no se emiten.
    """
    if delta_ms <= 0:
        raise ValueError(f"delta_ms debe ser > 0 (recibido {delta_ms})")
    if speed <= 0:
        raise ValueError(f"speed debe ser > 0 (recibido {speed})")

    summary = RenderSummary()
    for seg in iter_segments(changes):
        if from_note is not None and seg.index < from_note:
            continue
        if until_note is not None and seg.index > until_note:
            break

        dur_ms = seg.duration_units * delta_ms / speed
        summary.total_duration_ms += dur_ms
        if dur_ms <= MIN_SEGMENT_MS:
            summary.skipped_count += 1
            continue

        freq = seg.frequency
        if sink is not None:
            sink.accept(Tone(freq, dur_ms / 1000.0).render(), SR, CHANNELS)
        if melody is not None:
            melody.write_record(int(dur_ms), round_half_up(freq))
        summary.segment_count += 1
        summary.emitted.append((dur_ms, freq))

    return summary
