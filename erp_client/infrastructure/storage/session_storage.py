"""
===============================================================================
CRC CARD — infrastructure/storage/session_storage.py
===============================================================================

Clase:
  SessionStorage (equivalente de sessionStorage)

Responsabilidades:
  - Guardar pares clave/valor en memoria del proceso.
  - Desaparecer cuando el proceso termina ("fin de la sesión de navegación").

Colaboradores:
  - domain.services.KeyValueStorage (port)
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Dict, Optional


class SessionStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        """Simula el cierre del navegador."""
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
