import math
import numpy as np

from ..constants import SR, CHANNELS
from ..core.dsp import round_half_up

# muestras por bloque en render(); acota la memoria intermedia en float64
RENDER_BLOCK = 1 << 16


class Tone:
    """
    Senoidal pura de frecuencia y duración fijas, 48 kHz mono.

    Es un iterador de una sola pasada: produce exactamente
    round(dur_s * SR) muestras y termina. Para volver a empezar se crea
    otro Tone. freq_hz = 0.0 da silencio (ceros), no un buffer vacío.
    """

    sample_rate = SR
    channels = CHANNELS
    # no se conocen de antemano para quien consume; hay que drenarlo
    current_frame_len = None
    total_duration = None

    def __init__(self, freq_hz: float, dur_s: float):
        if dur_s < 0:
            raise ValueError(f"Duración negativa: {dur_s}")
        self.freq = float(freq_hz)
        self.dur_s = float(dur_s)
        self.last_sample = round_half_up(self.dur_s * SR)
        self.num_sample = 0

    def __iter__(self):
        return self

    def __next__(self) -> float:
        if self.num_sample >= self.last_sample:
            raise StopIteration
        self.num_sample += 1
        return math.sin(2.0 * math.pi * self.freq * self.num_sample / SR)

    def render(self) -> np.ndarray:
        """Drena las muestras que quedan en un array float32, por bloques de RENDER_BLOCK."""
        out = np.empty(self.last_sample - self.num_sample, dtype=np.float32)
        for i0 in range(0, len(out), RENDER_BLOCK):
            i1 = min(i0 + RENDER_BLOCK, len(out))
            n = np.arange(self.num_sample + 1 + i0, self.num_sample + 1 + i1, dtype=np.float64)
            out[i0:i1] = np.sin(2.0 * np.pi * self.freq * n / SR)
        self.num_sample = self.last_sample
        return out
