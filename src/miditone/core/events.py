from dataclasses import dataclass
from typing import FrozenSet, Union


@dataclass(frozen=True)
class NoteOn:
    pitch: int      # número de nota MIDI


@dataclass(frozen=True)
class NoteOff:
    pitch: int


@dataclass(frozen=True)
class Other:
    """Cualquier evento que no sea de nota. Sólo aporta su delta."""


EventKind = Union[NoteOn, NoteOff, Other]


@dataclass(frozen=True)
class Event:
    delta_time: int     # unidades desde el evento anterior
    kind: EventKind

    @property
    def is_note(self) -> bool:
        return isinstance(self.kind, (NoteOn, NoteOff))


@dataclass(frozen=True)
class ChangePoint:
    timestamp: int              # tiempo absoluto en unidades
    notes: FrozenSet[int]       # notas que suenan desde este instante
