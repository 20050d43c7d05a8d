"""
===============================================================================
TARJETA CRC — erp_client (paquete)
===============================================================================

Responsabilidades:
  - Cliente autenticado para la API REST del ERP multi-empresa.
  - Exportar el punto de entrada (build_client / ErpClient) y la taxonomía
    de errores que el código de la app necesita capturar.
===============================================================================
"""

from .container import ErpClient, build_client
from .crosscutting.exceptions import (
    ApiError,
    ApiValidationError,
    AuthenticationError,
    EnvelopeError,
    ErpClientError,
    ForbiddenError,
    FormValidationError,
    NetworkError,
    NotFoundError,
    RequestBuildError,
    ServerError,
    SessionExpiredError,
    UnexpectedStatusError,
)

__version__ = "0.1.0"

__all__ = [
    "ErpClient",
    "build_client",
    "ErpClientError",
    "ApiError",
    "AuthenticationError",
    "SessionExpiredError",
    "ForbiddenError",
    "NotFoundError",
    "ApiValidationError",
    "ServerError",
    "UnexpectedStatusError",
    "NetworkError",
    "RequestBuildError",
    "EnvelopeError",
    "FormValidationError",
]
