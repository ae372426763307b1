from typing import List

from mido import MidiFile

from ..core.events import Event, NoteOff, NoteOn, Other

DEFAULT_TEMPO = 500000  # µs por negra (120 bpm)


def load_midi(mid_path: str) -> MidiFile:
    return MidiFile(mid_path)


def describe_midi(mid: MidiFile) -> str:
    return (f"type={mid.type}, ticks_per_beat={mid.ticks_per_beat}, "
            f"tracks={len(mid.tracks)}")


def track_events(track) -> List[Event]:
    """
    Pasa los mensajes de una pista a Events, conservando el delta (msg.time,
    en ticks) de todos, incluso de los que no son notas.
    """
    events = []
    for msg in track:
        if msg.type == "note_on" and msg.velocity > 0:
            kind = NoteOn(msg.note)
        elif (msg.type == "note_off") or (msg.type == "note_on" and msg.velocity == 0):
            kind = NoteOff(msg.note)
        else:
            kind = Other()
        events.append(Event(int(msg.time), kind))
    return events


def load_events(mid_path: str, track: int = 0) -> List[Event]:
    mid = load_midi(mid_path)
    if not 0 <= track < len(mid.tracks):
        raise IndexError(f"La pista {track} no existe (el archivo tiene {len(mid.tracks)})")
    return track_events(mid.tracks[track])


def header_delta_ms(mid: MidiFile) -> float:
    """Duración de un tick en ms al tempo por defecto del estándar (120 bpm)."""
    return DEFAULT_TEMPO / 1000.0 / mid.ticks_per_beat
