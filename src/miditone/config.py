import os
from dataclasses import dataclass, fields, replace
from typing import Optional

import yaml


@dataclass
class PlaybackOptions:
    delta_ms: float = 1.0               # duración de cada unidad de delta, en ms
    speed: float = 1.0                  # >1 reproduce más rápido
    track: int = 0
    from_note: Optional[int] = None     # ventana inclusiva de segmentos
    until_note: Optional[int] = None
    quiet: bool = False                 # no esperar a que termine la reproducción

    def validate(self):
        if not self.delta_ms > 0:
            raise ValueError(f"delta_ms debe ser mayor que cero (recibido {self.delta_ms})")
        if not self.speed > 0:
            raise ValueError(f"speed debe ser mayor que cero (recibido {self.speed})")
        if self.track < 0:
            raise ValueError(f"track no puede ser negativo (recibido {self.track})")
        for name in ("from_note", "until_note"):
            v = getattr(self, name)
            if v is not None and v < 0:
                raise ValueError(f"{name} no puede ser negativo (recibido {v})")
        return self

    def merged(self, **overrides) -> "PlaybackOptions":
        """Copia con los valores que no sean None reemplazados."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_options(path: str) -> dict:
    """
    Carga un YAML con opciones de reproducción (mismas claves que
    PlaybackOptions). Si el archivo no existe o no es un dict, avisa y
    devuelve {}. Las claves desconocidas se ignoran.
    """
    if not path:
        return {}
    full = os.path.abspath(path)
    if not os.path.exists(full):
        print(f"[WARN] No se encontró el archivo de opciones: {full}")
        return {}
    with open(full, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            print(f"[ERR] Error leyendo YAML {full}: {e}")
            return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        print(f"[WARN] El YAML no tiene formato dict: {full}")
        return {}

    known = {f.name for f in fields(PlaybackOptions)}
    unknown = sorted(set(data) - known)
    if unknown:
        print(f"[WARN] Opciones desconocidas ignoradas: {unknown}")
    opts = {k: v for k, v in data.items() if k in known}
    print(f"[OK] Opciones cargadas desde: {full}")
    return opts
