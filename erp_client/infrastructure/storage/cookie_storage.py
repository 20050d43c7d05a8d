"""
===============================================================================
CRC CARD — infrastructure/storage/cookie_storage.py
===============================================================================

Clase:
  CookieStorage (cookie durable con expiración)

Responsabilidades:
  - Persistir cada clave como una "cookie": value + expires + secure + sameSite + path.
  - Purgar entradas expiradas al leer.
  - Permitir un reloj inyectable (tests de expiración sin sleep).

Colaboradores:
  - domain.services.KeyValueStorage (port)
  - infrastructure.storage.json_file (lectura/escritura atómica)
  - crosscutting.config.Settings (max age, secure, same-site)

Notas:
  - Un jar ilegible se reporta como StorageReadError; el caller decide.
===============================================================================
"""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Any, Callable

from ...crosscutting.logger import logger
from .json_file import read_json_object, write_json_object

_SECONDS_PER_DAY = 86_400


class CookieStorage:
    def __init__(
        self,
        path: Path,
        *,
        max_age_days: int = 30,
        secure: bool = True,
        same_site: str = "Strict",
        cookie_path: str = "/",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_age_days <= 0:
            raise ValueError("max_age_days debe ser mayor a 0")
        self._path = Path(path)
        self._max_age_seconds = max_age_days * _SECONDS_PER_DAY
        self._secure = secure
        self._same_site = same_site
        self._cookie_path = cookie_path
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # =========================================================================
    # KeyValueStorage
    # =========================================================================

    def get_item(self, key: str) -> str | None:
        with self._lock:
            jar = read_json_object(self._path)
            entry = jar.get(key)
            if not isinstance(entry, dict):
                return None
            if self._is_expired(entry):
                del jar[key]
                write_json_object(self._path, jar)
                logger.info("Cookie expirada purgada", extra={"cookie_name": key})
                return None
            value = entry.get("value")
            return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            jar = read_json_object(self._path)
            jar[key] = self._build_entry(value)
            write_json_object(self._path, jar)

    def remove_item(self, key: str) -> None:
        with self._lock:
            jar = read_json_object(self._path)
            if key not in jar:
                return
            del jar[key]
            write_json_object(self._path, jar)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _build_entry(self, value: str) -> dict[str, Any]:
        return {
            "value": value,
            "expires": self._clock() + self._max_age_seconds,
            "secure": self._secure,
            "sameSite": self._same_site,
            "path": self._cookie_path,
        }

    def _is_expired(self, entry: dict[str, Any]) -> bool:
        expires = entry.get("expires")
        if not isinstance(expires, (int, float)):
            return True
        return expires <= self._clock()
