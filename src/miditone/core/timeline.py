from typing import Iterable, List

from .events import ChangePoint, Event, NoteOn


def reduce_events(events: Iterable[Event]) -> List[ChangePoint]:
    """
    Reduce una secuencia de note-on/note-off con deltas a la lista de instantes
    en los que cambia el conjunto de notas activas.

    Cada entrada guarda el tiempo absoluto y una copia congelada de las notas
    que suenan desde ese instante. Los eventos que caen en el mismo tiempo
    (acordes, note-off + note-on en el mismo tick) quedan en una sola entrada
    con el efecto neto de todos, aplicado en orden.
    """
    active = set()
    changes: List[ChangePoint] = []
    current_time = 0
    prev_time = 0
    seen_note = False

    for evt in events:
        current_time += evt.delta_time
        kind = evt.kind

        if evt.is_note:
            # estado inicial (silencio) antes de la primera nota
            if not seen_note:
                changes.append(ChangePoint(prev_time, frozenset(active)))
                seen_note = True

            if isinstance(kind, NoteOn):
                active.add(kind.pitch)
            else:
                active.discard(kind.pitch)

            # evento simultáneo (delta 0): reemplaza al último cambio
            if evt.delta_time == 0 and changes:
                changes.pop()
            changes.append(ChangePoint(current_time, frozenset(active)))

        prev_time = current_time

    return changes
