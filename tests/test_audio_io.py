import numpy as np
import pytest
import soundfile as sf

from miditone.core.audio_io import BufferSink, MelodyWriter, TeeSink, WavSink, read_melody, write_wav


def test_wav_sink_concatenates_in_order(tmp_path):
    out = tmp_path / "o.wav"
    sink = WavSink(str(out))
    sink.accept(np.full(100, 0.5, dtype=np.float32), 48000, 1)
    sink.accept(np.full(50, -0.25, dtype=np.float32), 48000, 1)
    sink.wait_until_drained()
    y, sr = sf.read(str(out), dtype="float32")
    assert sr == 48000 and y.size == 150
    assert np.allclose(y[:100], 0.5) and np.allclose(y[100:], -0.25)


def test_buffer_sink_rejects_mixed_formats():
    sink = BufferSink()
    sink.accept(np.zeros(10, dtype=np.float32), 48000, 1)
    with pytest.raises(ValueError):
        sink.accept(np.zeros(10, dtype=np.float32), 44100, 1)
    with pytest.raises(ValueError):
        sink.accept(np.zeros(10, dtype=np.float32), 48000, 2)


def test_tee_sink():
    a, b = BufferSink(), BufferSink()
    tee = TeeSink([a, b])
    tee.accept(np.ones(8, dtype=np.float32), 48000, 1)
    tee.wait_until_drained()
    assert a.samples.size == 8 and b.samples.size == 8


def test_write_wav_clips(tmp_path):
    out = tmp_path / "c.wav"
    write_wav(str(out), np.array([2.0, -3.0, 0.1], dtype=np.float32), 48000)
    y, _ = sf.read(str(out), dtype="float32")
    assert y.max() <= 1.0 and y.min() >= -1.0


def test_melody_roundtrip(tmp_path):
    path = tmp_path / "m.txt"
    with MelodyWriter(str(path)) as w:
        w.write_record(480, 262)
        w.write_record(120, 0)
    assert path.read_text(encoding="utf-8") == "480,\t262\n120,\t0\n"
    assert read_melody(str(path)) == [(480, 262), (120, 0)]


def test_read_melody_bad_line(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("480,\t262\nhola\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_melody(str(path))
