"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus) del cliente ERP

Responsabilidades:
    - Definir métricas Prometheus en un registry propio (no el global del proceso).
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO empresa_id, NO IDs dinámicos).
    - Exponer el texto de exposición para quien embeba el cliente.

Colaboradores:
    - infrastructure.http.api_client: conteo y latencia por request.
    - infrastructure.http.error_interceptor: fallas por motivo.
    - application.session_store: eventos de sesión.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

_requests_total = Counter(
    "erp_client_requests_total",
    "Total de requests enviados a la API",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "erp_client_request_latency_seconds",
    "Latencia de requests a la API (segundos)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=_registry,
)

_request_failures_total = Counter(
    "erp_client_request_failures_total",
    "Fallas de request clasificadas por el interceptor",
    ["reason"],
    registry=_registry,
)

_session_events_total = Counter(
    "erp_client_session_events_total",
    "Eventos del session store (login, logout, hydrate, ...)",
    ["event"],
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra métricas HTTP.

    - endpoint se normaliza para no explotar cardinalidad.
    - status se agrupa por 2xx/4xx/5xx (0 = sin respuesta).
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_request_failure(reason: str) -> None:
    """Incrementa fallas por motivo (baja cardinalidad)."""
    _request_failures_total.labels(reason=reason).inc()


def record_session_event(event: str) -> None:
    """Incrementa eventos del session store."""
    _session_events_total.labels(event=event).inc()


def get_metrics_text() -> tuple[bytes, str]:
    """Body y content-type en formato de exposición Prometheus."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST


# -----------------------------------------------------------------------------
# Helpers internos
# -----------------------------------------------------------------------------


def _normalize_endpoint(path: str) -> str:
    """Normaliza paths para evitar cardinalidad alta.

    Quita query string y reemplaza UUIDs e IDs numéricos por `{id}`.
    """
    path = path.split("?", 1)[0]
    path = re.sub(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        "{id}",
        path,
        flags=re.IGNORECASE,
    )
    path = re.sub(r"/\d+", "/{id}", path)
    return path


def _status_bucket(code: int) -> str:
    """Agrupa status code para baja cardinalidad."""
    if 200 <= code < 300:
        return "2xx"
    if 300 <= code < 400:
        return "3xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    if code == 0:
        return "no_response"
    return "other"
