import mido
import pytest


@pytest.fixture
def midi_file(tmp_path):
    """MIDI de 2 pistas: 0 = tempo/meta, 1 = melodía C-E con un acorde."""
    mid = mido.MidiFile(ticks_per_beat=480)
    meta = mido.MidiTrack()
    meta.append(mido.MetaMessage("set_tempo", tempo=500000, time=0))
    meta.append(mido.MetaMessage("end_of_track", time=0))
    mel = mido.MidiTrack()
    mel.append(mido.Message("program_change", program=0, time=0))
    mel.append(mido.Message("note_on", note=60, velocity=100, time=0))
    mel.append(mido.Message("note_off", note=60, velocity=0, time=480))
    mel.append(mido.Message("note_on", note=64, velocity=100, time=0))
    mel.append(mido.Message("note_on", note=64, velocity=0, time=480))   # note-off por velocity 0
    mel.append(mido.Message("note_on", note=48, velocity=90, time=240))
    mel.append(mido.Message("note_on", note=67, velocity=90, time=0))
    mel.append(mido.Message("note_off", note=48, velocity=0, time=480))
    mel.append(mido.Message("note_off", note=67, velocity=0, time=0))
    mel.append(mido.MetaMessage("end_of_track", time=0))
    mid.tracks.extend([meta, mel])
    path = tmp_path / "melody.mid"
    mid.save(str(path))
    return str(path)
