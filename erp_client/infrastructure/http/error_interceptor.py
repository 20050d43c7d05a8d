"""
===============================================================================
TARJETA CRC — infrastructure/http/error_interceptor.py
===============================================================================

Módulo:
    Interceptor de errores (fase de respuesta del cliente HTTP)

Responsabilidades:
    - Clasificar cada falla UNA sola vez: status HTTP, red o error del cliente.
    - Ejecutar la reacción global: notificación, y ante 401 fuera de /auth,
      logout + navegación al login.
    - Construir la excepción tipada que el ApiClient relanza al caller.

Colaboradores:
    - application.session_store.SessionStore (logout en sesión expirada)
    - domain.services.Notifier / Navigator (efectos de UI)
    - crosscutting.exceptions (taxonomía de errores)
    - crosscutting.metrics (fallas por motivo)

Reglas:
    - Nunca traga el error: siempre devuelve la excepción para relanzar.
    - Rutas de auth: allow-list explícita (match exacto), no substring.
    - Un notifier que falla no reemplaza el error original.
===============================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional

import httpx

from ...crosscutting.exceptions import (
    ApiError,
    ApiValidationError,
    AuthenticationError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RequestBuildError,
    ServerError,
    SessionExpiredError,
    UnexpectedStatusError,
)
from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_request_failure
from ...domain.services import Navigator, Notifier
from ...domain.value_objects import Notification

if TYPE_CHECKING:
    from ...application.session_store import SessionStore

MSG_SESSION_EXPIRED = "Sessão expirada. Por favor, faça login novamente."
MSG_INVALID_CREDENTIALS = "Credenciais inválidas."
MSG_FORBIDDEN = "Você não tem permissão para realizar esta ação."
MSG_NOT_FOUND = "Recurso não encontrado."
MSG_VALIDATION = "Erro de validação."
MSG_SERVER_ERROR = "Erro interno do servidor. Tente novamente mais tarde."
MSG_UNEXPECTED = "Ocorreu um erro inesperado."
MSG_NO_RESPONSE = "Sem resposta do servidor. Verifique sua conexão."
MSG_REQUEST_ERROR = "Erro ao processar requisição."


def normalize_path(path: str) -> str:
    """Quita query string y barra final: '/auth/login/?x=1' -> '/auth/login'."""
    clean = (path or "").split("?", 1)[0].split("#", 1)[0]
    if not clean.startswith("/"):
        clean = "/" + clean
    return clean.rstrip("/") or "/"


class ErrorInterceptor:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      ErrorInterceptor

    Responsabilidades:
      - on_response_error: status >= 400 -> ApiError tipada
      - on_network_error: sin respuesta -> NetworkError
      - on_client_error: excepción armando/enviando -> RequestBuildError

    Colaboradores:
      - ApiClient (único llamador)
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        session_store: "SessionStore",
        notifier: Notifier,
        navigator: Navigator,
        *,
        auth_public_paths: Iterable[str],
        login_route: str = "/login",
    ) -> None:
        self._session = session_store
        self._notifier = notifier
        self._navigator = navigator
        self._auth_paths = frozenset(normalize_path(p) for p in auth_public_paths)
        self._login_route = login_route

    def is_auth_path(self, path: str) -> bool:
        return normalize_path(path) in self._auth_paths

    # =========================================================================
    # Fallas con respuesta
    # =========================================================================

    def on_response_error(
        self,
        response: httpx.Response,
        *,
        path: str,
        original_error: Optional[Exception] = None,
    ) -> ApiError:
        status = response.status_code
        payload = _read_payload(response)
        server_message = _server_message(payload)
        common = {
            "status_code": status,
            "path": path,
            "payload": payload,
            "original_error": original_error,
        }

        if status == 401:
            if self.is_auth_path(path):
                message = server_message or MSG_INVALID_CREDENTIALS
                self._fail("unauthorized", path, status)
                self._emit("error", message)
                return AuthenticationError(message, **common)

            self._fail("session_expired", path, status)
            self._session.logout()
            self._emit("error", MSG_SESSION_EXPIRED)
            self._redirect_to_login()
            return SessionExpiredError(MSG_SESSION_EXPIRED, **common)

        if status == 403:
            self._fail("forbidden", path, status)
            self._emit("error", MSG_FORBIDDEN)
            return ForbiddenError(MSG_FORBIDDEN, **common)

        if status == 404:
            self._fail("not_found", path, status)
            self._emit("error", MSG_NOT_FOUND)
            return NotFoundError(MSG_NOT_FOUND, **common)

        if status == 422:
            self._fail("validation", path, status)
            field_errors = _field_errors(payload)
            message = server_message or MSG_VALIDATION
            if field_errors:
                for field, messages in field_errors.items():
                    for msg in messages:
                        self._emit("error", msg, field=field or None)
            else:
                self._emit("error", message)
            return ApiValidationError(message, field_errors=field_errors, **common)

        if status >= 500:
            self._fail("server_error", path, status)
            self._emit("error", MSG_SERVER_ERROR)
            return ServerError(MSG_SERVER_ERROR, **common)

        message = server_message or MSG_UNEXPECTED
        self._fail("other", path, status)
        self._emit("error", message)
        return UnexpectedStatusError(message, **common)

    # =========================================================================
    # Fallas sin respuesta
    # =========================================================================

    def on_network_error(self, exc: Exception, *, path: str) -> NetworkError:
        self._fail("network", path, 0, error_type=type(exc).__name__)
        self._emit("error", MSG_NO_RESPONSE)
        return NetworkError(MSG_NO_RESPONSE, path=path, original_error=exc)

    def on_client_error(self, exc: Exception, *, path: str) -> RequestBuildError:
        self._fail("client", path, 0, error_type=type(exc).__name__)
        self._emit("error", MSG_REQUEST_ERROR)
        return RequestBuildError(MSG_REQUEST_ERROR, path=path, original_error=exc)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _fail(self, reason: str, path: str, status: int, **extra: Any) -> None:
        record_request_failure(reason)
        logger.warning(
            "API request failed",
            extra={"reason": reason, "status_code": status, "api_path": path, **extra},
        )

    def _emit(self, level: str, message: str, *, field: Optional[str] = None) -> None:
        try:
            self._notifier.notify(Notification(level=level, message=message, field=field))
        except Exception:
            logger.exception("Notifier falló; se continúa con el error original")

    def _redirect_to_login(self) -> None:
        try:
            self._navigator.go(self._login_route)
        except Exception:
            logger.exception(
                "Navegación a login falló; se continúa con el error original",
                extra={"route": self._login_route},
            )


def _read_payload(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _server_message(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


def _field_errors(payload: Any) -> dict[str, list[str]]:
    """Normaliza `errors` a {campo: [mensajes]} (acepta str o lista por campo)."""
    if not isinstance(payload, dict):
        return {}
    errors = payload.get("errors")
    out: dict[str, list[str]] = {}

    if isinstance(errors, dict):
        for field, value in errors.items():
            if isinstance(value, (list, tuple)):
                messages = [str(v) for v in value if v is not None and str(v)]
            elif value is None or value == "":
                messages = []
            else:
                messages = [str(value)]
            if messages:
                out[str(field)] = messages
    elif isinstance(errors, list):
        messages = [str(v) for v in errors if isinstance(v, (str, int, float)) and str(v)]
        if messages:
            out[""] = messages
    return out
