"""
===============================================================================
TARJETA CRC — application/remember_me.py
===============================================================================

Módulo:
    Cache de pre-llenado del formulario de login ("recordarme")

Responsabilidades:
    - Guardar {email, password, rememberMe} cuando el usuario lo pide.
    - Borrar la entrada cuando remember_me es False o el JSON está corrupto.

Colaboradores:
    - domain.services.KeyValueStorage (normalmente LocalFileStorage)
    - application.auth_service (guarda/borra al hacer login)

Reglas:
    - Independiente de la sesión: nunca es autoritativo.
===============================================================================
"""

from __future__ import annotations

import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..crosscutting.logger import logger
from ..domain.services import KeyValueStorage
from ..infrastructure.storage.errors import StorageError

DEFAULT_KEY = "login-remember-me-data"


class RememberMeData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str
    remember_me: bool = Field(alias="rememberMe")


class RememberMeCache:
    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_KEY) -> None:
        self._storage = storage
        self._key = key

    def save(self, email: str, password: str, remember_me: bool) -> None:
        if not remember_me:
            self.clear()
            return
        data = RememberMeData(email=email, password=password, remember_me=True)
        try:
            self._storage.set_item(self._key, data.model_dump_json(by_alias=True))
        except (StorageError, OSError) as exc:
            logger.warning(
                "No se pudo guardar remember-me", extra={"error": str(exc)}
            )

    def load(self) -> Optional[RememberMeData]:
        try:
            raw = self._storage.get_item(self._key)
        except (StorageError, OSError) as exc:
            logger.warning("remember-me ilegible", extra={"error": str(exc)})
            return None
        if raw is None:
            return None

        try:
            return RememberMeData.model_validate(json.loads(raw))
        except (ValueError, ValidationError, RecursionError):
            logger.warning("remember-me corrupto; se descarta")
            self.clear()
            return None

    def clear(self) -> None:
        try:
            self._storage.remove_item(self._key)
        except (StorageError, OSError) as exc:
            logger.warning("No se pudo borrar remember-me", extra={"error": str(exc)})
