"""
===============================================================================
CRC CARD — infrastructure/storage/errors.py
===============================================================================

Componente:
  Errores tipados de Storage (cookie jar / local storage en disco)

Responsabilidades:
  - Definir un lenguaje común de fallas de los medios de persistencia.
  - Evitar que OSError / JSONDecodeError se filtren a capas superiores.
  - Dejar la recuperación al caller (el session store decide qué hacer).

Colaboradores:
  - infrastructure/storage/json_file.py (mapeo OSError/ValueError -> StorageError)
  - application/session_store.py, application/remember_me.py (consumen)
===============================================================================
"""


class StorageError(Exception):
    """Base de errores del subsistema de Storage."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(message)
        self.path = path


class StorageReadError(StorageError):
    """Archivo ilegible o con JSON corrupto."""


class StorageWriteError(StorageError):
    """No se pudo escribir/borrar (permisos, disco lleno, etc.)."""
