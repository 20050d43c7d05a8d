"""
===============================================================================
CRC CARD — infrastructure/storage/local_file_storage.py
===============================================================================

Clase:
  LocalFileStorage (equivalente de localStorage)

Responsabilidades:
  - Persistir pares clave/valor en un archivo JSON, sin expiración.
  - Escribir de forma atómica (ver json_file.write_json_object).

Colaboradores:
  - domain.services.KeyValueStorage (port)
  - infrastructure.storage.json_file
===============================================================================
"""

from __future__ import annotations

import threading
from pathlib import Path

from .json_file import read_json_object, write_json_object


class LocalFileStorage:
    """
    Storage durable sin expiración.

    Errores:
      - StorageReadError si el archivo está corrupto.
      - StorageWriteError si no se puede escribir.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> str | None:
        with self._lock:
            value = read_json_object(self._path).get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = read_json_object(self._path)
            data[key] = value
            write_json_object(self._path, data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = read_json_object(self._path)
            if key not in data:
                return
            del data[key]
            write_json_object(self._path, data)
