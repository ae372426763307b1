import argparse

from .constants import SR
from .config import PlaybackOptions, load_options
from .core.audio_io import BufferSink, MelodyWriter, TeeSink, WavSink
from .core.renderer import render_all
from .core.timeline import reduce_events
from .midi.loader import describe_midi, header_delta_ms, load_midi, track_events


def _delta_arg(s: str):
    if s == "auto":
        return s
    try:
        return float(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{s}' no es un número ni 'auto'")


def resolve_options(args) -> PlaybackOptions:
    """
    Defaults < YAML (--config) < flags de la línea de comandos.
    delta_ms = "auto" se resuelve con el encabezado del MIDI.
    """
    base = PlaybackOptions(**load_options(args.config)) if args.config else PlaybackOptions()
    opts = base.merged(
        delta_ms=args.delta_ms,
        speed=args.speed,
        track=args.track,
        from_note=args.from_note,
        until_note=args.until_note,
        quiet=True if args.quiet else None,
    )
    if opts.delta_ms == "auto":
        opts.delta_ms = header_delta_ms(load_midi(args.midi))
        print(f"[INFO] delta_ms desde el encabezado: {opts.delta_ms:.4f} ms/tick")
    return opts.validate()


# =============================
# Render de MIDI
# =============================
def play_midi(mid_path, opts: PlaybackOptions, out=None, melody=None, spectrogram=None):
    try:
        mid = load_midi(mid_path)
    except (OSError, ValueError, EOFError) as e:
        raise SystemExit(f"[ERR] No se pudo leer el MIDI {mid_path}: {e}")
    print(f"[INFO] header: {describe_midi(mid)}")

    if opts.track >= len(mid.tracks):
        raise SystemExit(f"[ERR] La pista {opts.track} no existe. "
                         f"Pistas disponibles: 0..{len(mid.tracks) - 1}")

    events = track_events(mid.tracks[opts.track])
    changes = reduce_events(events)
    total_units = sum(e.delta_time for e in events)
    print(f"[INFO] total time: {total_units * opts.delta_ms:.1f} ms")
    print(f"[INFO] notes: {len(changes)}")

    sinks = []
    wav_sink = None
    if not opts.quiet:
        # sólo se abre el dispositivo si hace falta
        from .core.playback import PlaybackSink
        sinks.append(PlaybackSink(SR))
    if out:
        wav_sink = WavSink(out)
        sinks.append(wav_sink)
    elif spectrogram:
        wav_sink = BufferSink()
        sinks.append(wav_sink)
    sink = TeeSink(sinks) if sinks else None

    writer = MelodyWriter(melody) if melody else None
    try:
        summary = render_all(
            changes,
            delta_ms=opts.delta_ms,
            speed=opts.speed,
            from_note=opts.from_note,
            until_note=opts.until_note,
            sink=sink,
            melody=writer,
        )
        if sink is not None:
            sink.wait_until_drained()
    finally:
        if writer is not None:
            writer.close()

    print(f"[OK] Segmentos: {summary.segment_count} "
          f"(descartados por cortos: {summary.skipped_count}), "
          f"duración {summary.total_duration_ms:.1f} ms")

    if spectrogram:
        y = wav_sink.samples
        if len(y) < 16:
            print("[WARN] No hay audio suficiente para el espectrograma.")
        else:
            from .analysis.spectrogram import save_spectrogram
            save_spectrogram(y, SR, spectrogram, emitted=summary.emitted)
            print(f"[OK] Espectrograma → {spectrogram}")

    return summary


# =============================
# CLI
# =============================
def build_parser():
    ap = argparse.ArgumentParser(description="Reproduce una pista MIDI como una melodía de senoidales (monofónica)")
    ap.add_argument("midi", metavar="MIDI_FILE", help="Ruta al archivo MIDI")
    ap.add_argument("-d", "--delta-ms", type=_delta_arg, default=None,
                    help="Duración de cada delta en ms, mayor que cero, o 'auto' (default 1)")
    ap.add_argument("-s", "--speed", type=float, default=None, help="Velocidad de reproducción (default 1)")
    ap.add_argument("-t", "--track", type=int, default=None, help="Pista a usar (default 0)")
    ap.add_argument("-f", "--from-note", type=int, default=None,
                    help="Desde qué número de nota (segmento) reproducir")
    ap.add_argument("-u", "--until-note", type=int, default=None,
                    help="Hasta qué número de nota (segmento) reproducir, inclusive")
    ap.add_argument("-q", "--quiet", action="store_true", help="No reproduce ni espera al dispositivo de audio")
    ap.add_argument("--out", type=str, default=None, help="Archivo WAV de salida")
    ap.add_argument("--melody", type=str, default=None,
                    help="Guarda la melodía como líneas 'duración_ms,\\tfrecuencia_hz'")
    ap.add_argument("--spectrogram", type=str, default=None, help="PNG con el espectrograma del render")
    ap.add_argument("--config", type=str, default=None, help="YAML con opciones de reproducción")
    return ap


def run(argv=None):
    """Parsea argumentos, valida opciones y renderiza. Devuelve el RenderSummary."""
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        opts = resolve_options(args)
    except (OSError, EOFError) as e:
        raise SystemExit(f"[ERR] No se pudo leer el MIDI {args.midi}: {e}")
    except (TypeError, ValueError) as e:
        raise SystemExit(f"[ERR] Opciones inválidas: {e}")

    return play_midi(args.midi, opts, out=args.out, melody=args.melody, spectrogram=args.spectrogram)


def main(argv=None):
    run(argv)


if __name__ == "__main__":
    main()
