"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de efectos externos (Protocols)

Responsabilidades:
    - Definir contratos para medios de persistencia clave/valor.
    - Definir contratos para efectos de UI (notificaciones y navegación).
    - Mantener application independiente de archivos, toasts o routers concretos.

Colaboradores:
    - infrastructure/storage/*: implementaciones de KeyValueStorage.
    - infrastructure/notifications.py: Notifier / Navigator concretos.
    - application/session_store.py, infrastructure/http/error_interceptor.py: consumen.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol

from .value_objects import Notification


class KeyValueStorage(Protocol):
    """Medio de persistencia con semántica de Web Storage (strings por clave)."""

    def get_item(self, key: str) -> str | None:
        """Devuelve el valor o None si no existe (o expiró)."""
        ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None:
        """Borrar una clave inexistente no es error."""
        ...


class Notifier(Protocol):
    """Contrato para notificaciones tipo toast (fire-and-forget)."""

    def notify(self, notification: Notification) -> None: ...


class Navigator(Protocol):
    """Contrato para navegación forzada (ej: volver al login)."""

    def go(self, route: str) -> None: ...
