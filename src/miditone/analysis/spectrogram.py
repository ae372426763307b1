import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from scipy.signal import stft


def pitch_trace(emitted):
    """(dur_ms, freq) consecutivos → bordes de tiempo [s] y frecuencias para un step plot."""
    edges = [0.0]
    freqs = []
    for dur_ms, freq in emitted:
        edges.append(edges[-1] + dur_ms / 1000.0)
        freqs.append(freq)
    return np.array(edges), np.array(freqs)


def save_spectrogram(wav, sr, path_png, emitted=None, nperseg=2048, noverlap=None, fmax=4000.0):
    """
    Espectrograma del render. Si se pasa `emitted` (lista de (dur_ms, freq) como
    la de RenderSummary), se dibuja encima la frecuencia elegida por segmento.
    """
    if noverlap is None:
        noverlap = nperseg // 4
    wav = np.asarray(wav, dtype=np.float32)
    if len(wav) < 16:
        raise ValueError(f"Audio demasiado corto para un espectrograma ({len(wav)} muestras)")
    nperseg = max(16, min(nperseg, len(wav)))
    noverlap = min(noverlap, nperseg - 1)
    f, t, Z = stft(wav, sr, nperseg=nperseg, noverlap=noverlap)
    mag = 20*np.log10(np.abs(Z)+1e-9)
    plt.figure(figsize=(10,4))
    plt.pcolormesh(t, f, mag, shading='gouraud', cmap="inferno", vmin=-120, vmax=0)
    if emitted:
        edges, freqs = pitch_trace(emitted)
        plt.stairs(freqs, edges, color="cyan", linewidth=1.0, label="nota elegida")
        plt.legend(loc="upper right")
    plt.ylim(0, min(fmax, sr / 2))
    plt.xlabel("Tiempo [s]"); plt.ylabel("Frecuencia [Hz]")
    plt.title("Espectrograma")
    plt.colorbar(label="dB")
    plt.tight_layout()
    plt.savefig(path_png, dpi=150)
    plt.close()
