"""
===============================================================================
TARJETA CRC — erp_client/context.py (Request saliente en curso)
===============================================================================

Responsabilidades:
  - Exponer qué request está enviando el cliente (id, método, path) mientras dura.
  - Restaurar el valor anterior al salir, aun si el request falla.

Colaboradores:
  - infrastructure.http.api_client: abre outgoing_request() por cada llamada.
  - crosscutting.logger: lee get_context_dict() al formatear.
===============================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Iterator, Optional
from uuid import uuid4


@dataclass(frozen=True)
class RequestContext:
    method: str
    path: str
    request_id: str = field(default_factory=lambda: uuid4().hex)


_current: ContextVar[Optional[RequestContext]] = ContextVar(
    "erp_outgoing_request", default=None
)


@contextmanager
def outgoing_request(method: str, path: str) -> Iterator[RequestContext]:
    ctx = RequestContext(method=method, path=path)
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)


def current_request() -> Optional[RequestContext]:
    return _current.get()


def get_context_dict() -> dict[str, str]:
    """Campos para logs; vacío fuera de un request."""
    ctx = _current.get()
    if ctx is None:
        return {}
    return {"request_id": ctx.request_id, "method": ctx.method, "path": ctx.path}
