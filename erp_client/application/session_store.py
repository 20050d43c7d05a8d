"""
===============================================================================
TARJETA CRC — application/session_store.py
===============================================================================

Módulo:
    Session Store persistido (usuario + token + "recordarme")

Responsabilidades:
    - Ser la única fuente de verdad de "quién está logueado y con qué token".
    - Aplicar la política de durabilidad:
        remember_me=True  -> medio durable (cookie ~30 días); se borra el otro.
        remember_me=False -> medio de sesión; se borra cualquier copia durable.
    - Hidratar al construirse: primero el medio durable, luego el de sesión.
    - Tratar datos corruptos como "sin sesión" (nunca propagar la excepción).
    - Exponer get_token() no reactivo para el cliente HTTP.
    - Notificar a suscriptores después de cada mutación.

Colaboradores:
    - domain.services.KeyValueStorage: medios durable y de sesión.
    - domain.entities.User: identidad persistida.
    - crosscutting.metrics: eventos de sesión.

Reglas:
    - is_authenticated es derivado: True sólo si hay user Y token.
    - logout() limpia ambos medios y es idempotente.
    - Mutaciones serializadas con un lock (set atómico de los cuatro campos).
===============================================================================
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_session_event
from ..domain.entities import User
from ..domain.services import KeyValueStorage
from ..infrastructure.storage.errors import StorageError

DEFAULT_STORAGE_KEY = "auth-storage"
DEFAULT_VERSION = 0

SessionListener = Callable[["Session"], None]


class MalformedSessionError(ValueError):
    """El registro persistido no tiene la forma {state: {...}, version}."""


@dataclass(frozen=True)
class Session:
    """Snapshot inmutable de la sesión."""

    user: Optional[User] = None
    token: Optional[str] = None
    refresh_token: Optional[str] = None
    remember_me: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and bool(self.token)

    def to_state(self) -> Dict[str, Any]:
        return {
            "user": self.user.to_payload() if self.user is not None else None,
            "token": self.token,
            "refreshToken": self.refresh_token,
            "isAuthenticated": self.is_authenticated,
            "rememberMe": self.remember_me,
        }

    @classmethod
    def from_state(cls, state: Any) -> "Session":
        if not isinstance(state, dict):
            raise MalformedSessionError("state debe ser un objeto")

        raw_user = state.get("user")
        if raw_user is not None and not isinstance(raw_user, dict):
            raise MalformedSessionError("user debe ser un objeto o null")

        token = state.get("token")
        refresh_token = state.get("refreshToken")
        for name, value in (("token", token), ("refreshToken", refresh_token)):
            if value is not None and not isinstance(value, str):
                raise MalformedSessionError(f"{name} debe ser string o null")

        remember_me = state.get("rememberMe", False)
        if not isinstance(remember_me, bool):
            raise MalformedSessionError("rememberMe debe ser booleano")

        # isAuthenticated persistido se ignora: siempre se recalcula.
        return cls(
            user=User.model_validate(raw_user) if raw_user is not None else None,
            token=token,
            refresh_token=refresh_token,
            remember_me=remember_me,
        )


EMPTY_SESSION = Session()


class SessionStore:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      SessionStore

    Responsabilidades:
      - login / logout / update_user / get_token
      - Persistir en el medio que corresponde según remember_me
      - Suscripciones (reemplazo del store reactivo)

    Colaboradores:
      - KeyValueStorage (durable + sesión)
      - ApiClient (lee get_token en cada request)
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        durable: KeyValueStorage,
        session_scoped: KeyValueStorage,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        version: int = DEFAULT_VERSION,
    ) -> None:
        self._durable = durable
        self._session_scoped = session_scoped
        self._storage_key = storage_key
        self._version = version
        self._lock = threading.RLock()
        self._listeners: List[SessionListener] = []
        self._session: Session = EMPTY_SESSION
        self._session = self._hydrate()

    # =========================================================================
    # Lectura
    # =========================================================================

    def get_token(self) -> Optional[str]:
        """Token actual sin suscribirse a cambios (para el cliente HTTP)."""
        return self._session.token

    def snapshot(self) -> Session:
        return self._session

    @property
    def user(self) -> Optional[User]:
        return self._session.user

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    @property
    def remember_me(self) -> bool:
        return self._session.remember_me

    # =========================================================================
    # Mutaciones
    # =========================================================================

    def login(
        self,
        user: Union[User, Mapping[str, Any]],
        token: str,
        remember_me: bool = False,
        refresh_token: Optional[str] = None,
    ) -> Session:
        """Setea los cuatro campos de una vez y persiste en el medio elegido."""
        new_user = user if isinstance(user, User) else User.model_validate(dict(user))
        session = Session(
            user=new_user,
            token=token,
            refresh_token=refresh_token,
            remember_me=bool(remember_me),
        )
        with self._lock:
            self._session = session
            self._persist(session)
        record_session_event("login")
        logger.info(
            "Sesión iniciada",
            extra={"remember_me": session.remember_me, "user_id": new_user.id},
        )
        self._notify(session)
        return session

    def logout(self) -> Session:
        """Vacía la sesión y borra el registro de AMBOS medios."""
        with self._lock:
            self._session = EMPTY_SESSION
            self._safe_remove(self._durable, "durable")
            self._safe_remove(self._session_scoped, "session")
        record_session_event("logout")
        logger.info("Sesión cerrada")
        self._notify(EMPTY_SESSION)
        return EMPTY_SESSION

    def update_user(self, patch: Union[User, Mapping[str, Any]]) -> Session:
        """
        Mezcla `patch` sobre el usuario actual (no-op si no hay usuario).

        Acepta claves de la API (`nome`, `empresaId`) o nombres de atributo
        (`empresa_id`). Nunca toca token ni is_authenticated.
        """
        with self._lock:
            current = self._session
            if current.user is None:
                return current

            merged = current.user.model_dump(by_alias=True)
            merged.update(_normalize_user_patch(patch))
            session = replace(current, user=User.model_validate(merged))
            self._session = session
            self._persist(session)
        record_session_event("update_user")
        self._notify(session)
        return session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Registra un listener; devuelve la función para desuscribirlo."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # Persistencia
    # =========================================================================

    def _hydrate(self) -> Session:
        for medium, label in (
            (self._durable, "durable"),
            (self._session_scoped, "session"),
        ):
            try:
                raw = medium.get_item(self._storage_key)
            except StorageError as exc:
                record_session_event("hydrate_failed")
                logger.warning(
                    "Medio de sesión ilegible; se descarta",
                    extra={"medium": label, "error": str(exc)},
                )
                self._safe_remove(medium, label)
                continue

            if raw is None:
                continue

            try:
                session = self._decode(raw)
            except (
                MalformedSessionError,
                ValidationError,
                ValueError,
                RecursionError,
            ) as exc:
                record_session_event("hydrate_failed")
                logger.warning(
                    "Sesión persistida corrupta; se trata como sin sesión",
                    extra={"medium": label, "error_type": type(exc).__name__},
                )
                self._safe_remove(medium, label)
                continue

            record_session_event("hydrate")
            return session

        return EMPTY_SESSION

    def _decode(self, raw: str) -> Session:
        envelope = json.loads(raw)
        if not isinstance(envelope, dict) or "state" not in envelope:
            raise MalformedSessionError("falta la clave 'state'")
        version = envelope.get("version", self._version)
        if version != self._version:
            raise MalformedSessionError(
                f"versión {version!r} incompatible (esperada {self._version})"
            )
        return Session.from_state(envelope["state"])

    def _persist(self, session: Session) -> None:
        payload = json.dumps(
            {"state": session.to_state(), "version": self._version},
            ensure_ascii=False,
        )
        if session.remember_me:
            self._safe_write(self._durable, "durable", payload)
            self._safe_remove(self._session_scoped, "session")
        else:
            self._safe_write(self._session_scoped, "session", payload)
            self._safe_remove(self._durable, "durable")

    def _safe_write(self, medium: KeyValueStorage, label: str, payload: str) -> None:
        try:
            medium.set_item(self._storage_key, payload)
        except (StorageError, OSError) as exc:
            record_session_event("persist_failed")
            logger.warning(
                "No se pudo persistir la sesión",
                extra={"medium": label, "error": str(exc)},
            )

    def _safe_remove(self, medium: KeyValueStorage, label: str) -> None:
        try:
            medium.remove_item(self._storage_key)
        except (StorageError, OSError) as exc:
            record_session_event("persist_failed")
            logger.warning(
                "No se pudo borrar la sesión persistida",
                extra={"medium": label, "error": str(exc)},
            )

    def _notify(self, session: Session) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(session)
            except Exception:
                logger.exception("Listener de sesión falló")


def _normalize_user_patch(patch: Union[User, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(patch, User):
        return patch.model_dump(by_alias=True, exclude_unset=True)

    fields = User.model_fields
    normalized: Dict[str, Any] = {}
    for key, value in patch.items():
        field = fields.get(key)
        normalized[field.alias or key if field else key] = value
    return normalized
