from abc import ABC, abstractmethod
from typing import List, Tuple

import numpy as np
import soundfile as sf

from ..constants import SR, CHANNELS


def write_wav(path: str, audio: np.ndarray, sr: int):
    audio = np.clip(audio, -1.0, 1.0).astype(np.float32)
    sf.write(path, audio, sr)


class Sink(ABC):
    """Destino de audio: recibe buffers en orden y los reproduce o guarda."""

    @abstractmethod
    def accept(self, samples: np.ndarray, sample_rate: int = SR, channels: int = CHANNELS):
        ...

    def wait_until_drained(self):
        pass


class BufferSink(Sink):
    """Junta los buffers en memoria, en el orden en que llegan."""

    def __init__(self):
        self.sr = None
        self._chunks: List[np.ndarray] = []

    def accept(self, samples, sample_rate=SR, channels=CHANNELS):
        if channels != 1:
            raise ValueError(f"Sólo se acepta mono (channels={channels})")
        if self.sr is None:
            self.sr = sample_rate
        elif sample_rate != self.sr:
            raise ValueError(f"Sample rate mezclado: {sample_rate} != {self.sr}")
        self._chunks.append(np.asarray(samples, dtype=np.float32))

    @property
    def samples(self) -> np.ndarray:
        if not self._chunks:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(self._chunks)


class WavSink(BufferSink):
    """Como BufferSink, pero al vaciarse escribe todo en un único WAV."""

    def __init__(self, path: str):
        super().__init__()
        self.path = path

    def wait_until_drained(self):
        write_wav(self.path, self.samples, self.sr or SR)
        print(f"[OK] WAV escrito → {self.path}")


class TeeSink(Sink):
    """Reparte cada buffer entre varios sinks."""

    def __init__(self, sinks):
        self.sinks = list(sinks)

    def accept(self, samples, sample_rate=SR, channels=CHANNELS):
        for s in self.sinks:
            s.accept(samples, sample_rate, channels)

    def wait_until_drained(self):
        for s in self.sinks:
            s.wait_until_drained()


class MelodyWriter:
    """
    Guarda la melodía reducida como texto: una línea "duración_ms,\\tfrecuencia_hz"
    por segmento, en el orden en que se renderizan.
    """

    def __init__(self, path: str):
        self.path = path
        self.count = 0
        self._f = open(path, "w", encoding="utf-8")

    def write_record(self, duration_ms: int, frequency_hz: int):
        self._f.write(f"{int(duration_ms)},\t{int(frequency_hz)}\n")
        self.count += 1

    def close(self):
        if not self._f.closed:
            self._f.close()
            print(f"[OK] Melodía ({self.count} notas) → {self.path}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def read_melody(path: str) -> List[Tuple[int, int]]:
    records = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                dur, freq = line.split(",", 1)
                records.append((int(dur), int(freq)))
            except ValueError:
                raise ValueError(f"Línea {lineno} inválida en {path}: {line!r}") from None
    return records
