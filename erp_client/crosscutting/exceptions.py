"""
===============================================================================
MÓDULO: Excepciones tipadas del cliente ERP
===============================================================================

Objetivo
--------
Tener excepciones coherentes para todo lo que puede fallar al hablar con la API:
- error_code estable (para que la UI decida sin parsear mensajes)
- error_id para correlación con logs
- message "humana" (sin filtrar tokens ni passwords)
- original_error: la excepción de httpx que originó la falla

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ErpClientError + subclases

Responsabilidades:
  - Modelar la taxonomía de fallas: autenticación, sesión expirada, autorización,
    not-found, validación, servidor, red, cliente, envelope y formulario.
  - Transportar status/path/payload/field_errors hacia el código de la feature.

Colaboradores:
  - infrastructure/http/error_interceptor.py (construye las ApiError)
  - infrastructure/http/envelope.py (EnvelopeError)
  - application/forms.py (FormValidationError)
===============================================================================
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4


class ErpClientError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      ErpClientError

    Responsabilidades:
      - Base para todos los errores del cliente
      - Proveer error_code + error_id + message + original_error

    Colaboradores:
      - ErrorInterceptor, envelopes, validador de formularios
    ----------------------------------------------------------------------------
    """

    error_code: str = "ERP_CLIENT_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


# ---------------------------------------------------------------------------
# Fallas con respuesta HTTP
# ---------------------------------------------------------------------------


class ApiError(ErpClientError):
    """La API respondió con status >= 400."""

    error_code: str = "API_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        path: str,
        payload: Any = None,
        field_errors: dict[str, list[str]] | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.status_code = status_code
        self.path = path
        self.payload = payload
        self.field_errors = field_errors or {}


class AuthenticationError(ApiError):
    """401 en un endpoint de autenticación: credenciales rechazadas."""

    error_code: str = "AUTHENTICATION_FAILED"


class SessionExpiredError(ApiError):
    """401 fuera de los endpoints de autenticación: la sesión ya no vale."""

    error_code: str = "SESSION_EXPIRED"


class ForbiddenError(ApiError):
    error_code: str = "FORBIDDEN"


class NotFoundError(ApiError):
    error_code: str = "NOT_FOUND"


class ApiValidationError(ApiError):
    """422: el servidor rechazó el payload (posiblemente por campo)."""

    error_code: str = "VALIDATION_ERROR"


class ServerError(ApiError):
    """500 y cualquier 5xx."""

    error_code: str = "SERVER_ERROR"


class UnexpectedStatusError(ApiError):
    """Cualquier otro 4xx (400, 409, 429, ...)."""

    error_code: str = "UNEXPECTED_STATUS"


# ---------------------------------------------------------------------------
# Fallas sin respuesta HTTP
# ---------------------------------------------------------------------------


class NetworkError(ErpClientError):
    """El request salió pero no hubo respuesta (timeout, DNS, conexión)."""

    error_code: str = "NETWORK_ERROR"

    def __init__(
        self, message: str, *, path: str, original_error: Exception | None = None
    ):
        super().__init__(message, original_error=original_error)
        self.path = path


class RequestBuildError(ErpClientError):
    """Excepción del lado cliente al construir/enviar el request."""

    error_code: str = "REQUEST_ERROR"

    def __init__(
        self, message: str, *, path: str, original_error: Exception | None = None
    ):
        super().__init__(message, original_error=original_error)
        self.path = path


class EnvelopeError(ErpClientError):
    """El body no tiene la forma declarada para el endpoint."""

    error_code: str = "UNEXPECTED_ENVELOPE"


class FormValidationError(ErpClientError):
    """Validación local de formulario (antes de tocar la red)."""

    error_code: str = "FORM_INVALID"

    def __init__(self, form: str, field_errors: dict[str, str]):
        fields = ", ".join(sorted(field_errors))
        super().__init__(f"Formulário '{form}' inválido: {fields}")
        self.form = form
        self.field_errors = dict(field_errors)
