"""
===============================================================================
CRC CARD — infrastructure/storage/json_file.py
===============================================================================

Componente:
  Lectura/escritura atómica de un objeto JSON en disco

Responsabilidades:
  - Leer un dict JSON (archivo ausente = dict vacío).
  - Escribir con archivo temporal + os.replace (nunca deja un JSON a medias).
  - Aplicar permisos 0600 (el archivo contiene credenciales).

Colaboradores:
  - LocalFileStorage, CookieStorage
===============================================================================
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from .errors import StorageReadError, StorageWriteError

_FILE_MODE = 0o600


def read_json_object(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StorageReadError(f"No se pudo leer {path.name}", path=str(path)) from exc

    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise StorageReadError(f"JSON corrupto en {path.name}", path=str(path)) from exc

    if not isinstance(data, dict):
        raise StorageReadError(
            f"Se esperaba un objeto JSON en {path.name}", path=str(path)
        )
    return data


def write_json_object(path: Path, data: dict[str, Any]) -> None:
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, separators=(",", ":"))
        os.chmod(tmp_name, _FILE_MODE)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise StorageWriteError(
            f"No se pudo escribir {path.name}", path=str(path)
        ) from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
