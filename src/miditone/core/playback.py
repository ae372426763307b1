import queue
import threading

import numpy as np
import sounddevice as sd

from ..constants import SR, CHANNELS
from .audio_io import Sink


class PlaybackSink(Sink):
    """
    Reproduce por la salida de audio por defecto.

    accept() encola el buffer y vuelve enseguida; el callback del stream lo va
    consumiendo en orden. wait_until_drained() bloquea hasta que suena todo.
    """

    def __init__(self, sample_rate: int = SR, blocksize: int = 2048, device=None):
        self.sr = sample_rate
        self.blocksize = blocksize
        self.poll_s = 0.5     # cada cuánto revisar que el stream siga vivo
        self.device = device
        self.stream = None
        self._queue = queue.Queue()
        self._current = None
        self._pos = 0
        self._pending = 0
        self._lock = threading.Lock()
        self._drained = threading.Event()
        self._drained.set()

    def _start(self):
        self.stream = sd.OutputStream(
            samplerate=self.sr,
            channels=CHANNELS,
            dtype="float32",
            callback=self._callback,
            blocksize=self.blocksize,
            device=self.device,
        )
        self.stream.start()
        print(f"[INFO] Salida de audio abierta ({self.sr} Hz, mono)")

    def _callback(self, outdata, frames, time_info, status):
        if status:
            print(f"[WARN] Audio status: {status}")
        out = outdata[:, 0]
        filled = 0
        while filled < frames:
            if self._current is None or self._pos >= len(self._current):
                try:
                    self._current = self._queue.get_nowait()
                    self._pos = 0
                except queue.Empty:
                    self._current = None
                    break
            n = min(frames - filled, len(self._current) - self._pos)
            out[filled:filled + n] = self._current[self._pos:self._pos + n]
            self._pos += n
            filled += n
        out[filled:] = 0.0

        with self._lock:
            self._pending -= filled
            if self._pending <= 0:
                self._drained.set()

    def accept(self, samples, sample_rate=SR, channels=CHANNELS):
        if sample_rate != self.sr or channels != CHANNELS:
            raise ValueError(f"Formato no soportado: {sample_rate} Hz, {channels} canales")
        buf = np.asarray(samples, dtype=np.float32)
        if buf.size == 0:
            return
        with self._lock:
            self._pending += buf.size
            self._drained.clear()
            self._queue.put(buf)
        if self.stream is None:
            self._start()

    def wait_until_drained(self):
        if self.stream is None:
            return
        while not self._drained.wait(self.poll_s):
            # el callback ya no corre: no va a vaciarse nunca
            if not self.stream.active:
                pending = self._pending
                self.close()
                raise sd.PortAudioError(f"El stream de audio se detuvo con {pending} muestras sin reproducir")
        # lo que quedó en el buffer del dispositivo
        sd.sleep(int(self.stream.latency * 1000) + 50)
        self.close()

    def close(self):
        if self.stream is not None:
            self.stream.stop()
            self.stream.close()
            self.stream = None
