"""
===============================================================================
TARJETA CRC — infrastructure/notifications.py
===============================================================================

Componentes:
  LoggingNotifier, InMemoryNotifier, RecordingNavigator, CallbackNavigator

Responsabilidades:
  - Implementar los puertos Notifier / Navigator para entornos sin UI.
  - LoggingNotifier: cada toast se vuelve una línea de log estructurada.
  - InMemoryNotifier: acumula Notification para una UI embebida o tests.
  - Navegadores: registrar o delegar la navegación forzada al login.

Colaboradores:
  - domain.services (Notifier, Navigator)
  - infrastructure.http.error_interceptor (productor de notificaciones)
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Callable, List

from ..crosscutting.logger import logger
from ..domain.value_objects import Notification

_LOG_LEVELS = {
    "error": logger.error,
    "warning": logger.warning,
    "success": logger.info,
    "info": logger.info,
}


class LoggingNotifier:
    """Notifier por defecto: loguea el mensaje con su nivel."""

    def notify(self, notification: Notification) -> None:
        log = _LOG_LEVELS.get(notification.level, logger.info)
        log(
            notification.message,
            extra={"notification_level": notification.level, "field": notification.field},
        )


class InMemoryNotifier:
    """Acumula notificaciones en orden de llegada."""

    def __init__(self) -> None:
        self._items: List[Notification] = []
        self._lock = threading.Lock()

    def notify(self, notification: Notification) -> None:
        with self._lock:
            self._items.append(notification)

    @property
    def notifications(self) -> list[Notification]:
        with self._lock:
            return list(self._items)

    @property
    def messages(self) -> list[str]:
        return [n.message for n in self.notifications]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class RecordingNavigator:
    """Registra las rutas visitadas (la última es la actual)."""

    def __init__(self) -> None:
        self.history: list[str] = []

    def go(self, route: str) -> None:
        self.history.append(route)

    @property
    def current(self) -> str | None:
        return self.history[-1] if self.history else None


class CallbackNavigator:
    """Delegá la navegación a la app que embebe el cliente."""

    def __init__(self, callback: Callable[[str], None]) -> None:
        self._callback = callback

    def go(self, route: str) -> None:
        self._callback(route)
