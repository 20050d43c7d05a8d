"""
===============================================================================
TARJETA CRC — infrastructure/http/api_client.py
===============================================================================

Clase:
    ApiClient (wrapper único sobre httpx.Client)

Responsabilidades:
    - Ser el único punto por donde las features llegan a la API.
    - Fase request: leer el token del SessionStore (get_token, no reactivo)
      y adjuntarlo como `Authorization: Bearer <token>`.
    - Fase response: delegar TODA falla al ErrorInterceptor una sola vez y
      relanzar la excepción tipada (`raise ... from` el error de httpx).
    - Contexto por request (request_id/method/path) para logs + métricas.

Colaboradores:
    - application.session_store.SessionStore (token)
    - infrastructure.http.error_interceptor.ErrorInterceptor
    - crosscutting.metrics / crosscutting.logger / context

Reglas:
    - Idle -> Sent -> Succeeded | Failed. Sin reintentos: eso es del caller.
    - Sin token, el request sale sin Authorization (el servidor decide).
===============================================================================
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Mapping, Optional
from urllib.parse import urlsplit
import httpx

from ...context import outgoing_request
from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_request_metrics
from .error_interceptor import ErrorInterceptor, normalize_path

if TYPE_CHECKING:
    from ...application.session_store import SessionStore

_DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class ApiClient:
    def __init__(
        self,
        session_store: "SessionStore",
        interceptor: ErrorInterceptor,
        *,
        base_url: str,
        timeout_s: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._session = session_store
        self._interceptor = interceptor
        self._base_path = normalize_path(urlsplit(base_url).path)

        # Cliente inyectable (tests / TestClient); si no, lo creamos y lo cerramos.
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.Client(
                base_url=base_url,
                timeout=timeout_s,
                transport=transport,
            )
        http_client.headers.update(_DEFAULT_HEADERS)
        hooks = http_client.event_hooks
        hooks["request"] = [*hooks.get("request", []), self._attach_bearer]
        http_client.event_hooks = hooks
        self._client = http_client

    @property
    def http(self) -> httpx.Client:
        return self._client

    # =========================================================================
    # Fase request
    # =========================================================================

    def _attach_bearer(self, request: httpx.Request) -> None:
        token = self._session.get_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    # =========================================================================
    # API pública
    # =========================================================================

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> httpx.Response:
        """
        Ejecuta un request. Devuelve la respuesta 2xx/3xx.

        Raises:
            ApiError (subclases): status >= 400
            NetworkError: no hubo respuesta (timeout, DNS, conexión)
            RequestBuildError: falla armando/enviando el request
        """
        method = method.upper()
        api_path = self._relative_path(path)
        started = time.perf_counter()
        status_code = 0

        with outgoing_request(method, api_path):
            try:
                try:
                    response = self._client.request(
                        method, path, params=_clean_params(params), json=json
                    )
                except httpx.UnsupportedProtocol as exc:
                    raise self._interceptor.on_client_error(exc, path=api_path) from exc
                except httpx.TransportError as exc:
                    raise self._interceptor.on_network_error(exc, path=api_path) from exc
                except (httpx.HTTPError, httpx.InvalidURL, TypeError, ValueError) as exc:
                    raise self._interceptor.on_client_error(exc, path=api_path) from exc

                status_code = response.status_code
                if response.is_error:
                    try:
                        response.raise_for_status()
                    except httpx.HTTPStatusError as exc:
                        raise self._interceptor.on_response_error(
                            exc.response, path=api_path, original_error=exc
                        ) from exc

                logger.debug("API request ok", extra={"status_code": status_code})
                return response
            finally:
                latency = time.perf_counter() - started
                record_request_metrics(api_path, method, status_code, latency)

    def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> httpx.Response:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> httpx.Response:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> httpx.Response:
        return self.request("PUT", path, json=json)

    def patch(self, path: str, json: Any = None) -> httpx.Response:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> httpx.Response:
        return self.request("DELETE", path, params=params)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _relative_path(self, path: str) -> str:
        """Path relativo a la base URL (acepta URLs absolutas)."""
        if "://" in path:
            path = urlsplit(path).path
            if self._base_path != "/" and path.startswith(self._base_path):
                path = path[len(self._base_path) :]
        return normalize_path(path)


def _clean_params(params: Optional[Mapping[str, Any]]) -> Optional[dict[str, Any]]:
    if not params:
        return None
    return {k: v for k, v in params.items() if v is not None}
