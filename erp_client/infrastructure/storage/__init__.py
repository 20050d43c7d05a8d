"""Adapters de infraestructura: medios de persistencia clave/valor."""

from .cookie_storage import CookieStorage
from .errors import StorageError, StorageReadError, StorageWriteError
from .local_file_storage import LocalFileStorage
from .session_storage import SessionStorage

__all__ = [
    "CookieStorage",
    "LocalFileStorage",
    "SessionStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
