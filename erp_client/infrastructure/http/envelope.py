"""
===============================================================================
TARJETA CRC — infrastructure/http/envelope.py
===============================================================================

Módulo:
    Adaptadores de envelope por endpoint

Responsabilidades:
    - Desenvolver el body según la forma DECLARADA para cada endpoint:
        raw          -> body tal cual
        data         -> {success, message, data} -> data
        data_or_raw  -> data si viene, sino el body (login/register)
        nested_page  -> {data: {items, pagination: {total, page, limit}}}
        flat_page    -> {data: [...], total, page, limit|pageSize, totalPages?}
        data_list    -> {data: [...]}
    - Fallar con EnvelopeError si el body no coincide (nunca adivinar).

Colaboradores:
    - services/* (cada servicio declara sus envelopes)
    - crosscutting.pagination.Page
===============================================================================
"""

from __future__ import annotations

from typing import Any, Callable

import httpx

from ...crosscutting.exceptions import EnvelopeError
from ...crosscutting.pagination import Page

Unwrapper = Callable[[httpx.Response], Any]


def _body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise EnvelopeError(
            f"Respuesta sin JSON válido en {response.request.url.path}",
            original_error=exc,
        ) from exc


def _mismatch(response: httpx.Response, expected: str) -> EnvelopeError:
    return EnvelopeError(
        f"Envelope inesperado en {response.request.url.path}: se esperaba {expected}"
    )


def raw(response: httpx.Response) -> Any:
    return _body(response)


def data(response: httpx.Response) -> Any:
    body = _body(response)
    if not isinstance(body, dict) or "data" not in body:
        raise _mismatch(response, "{data: ...}")
    return body["data"]


def data_or_raw(response: httpx.Response) -> Any:
    """Sólo para login/register: la API responde con y sin wrapper."""
    body = _body(response)
    if isinstance(body, dict) and body.get("data"):
        return body["data"]
    return body


def data_list(response: httpx.Response) -> list:
    items = data(response)
    if not isinstance(items, list):
        raise _mismatch(response, "{data: [...]}")
    return items


def nested_page(response: httpx.Response) -> Page[Any]:
    inner = data(response)
    if not isinstance(inner, dict):
        raise _mismatch(response, "{data: {items, pagination}}")
    items = inner.get("items")
    pagination = inner.get("pagination")
    if not isinstance(items, list) or not isinstance(pagination, dict):
        raise _mismatch(response, "{data: {items, pagination}}")
    return _page(response, items, pagination)


def flat_page(response: httpx.Response) -> Page[Any]:
    body = _body(response)
    if not isinstance(body, dict) or not isinstance(body.get("data"), list):
        raise _mismatch(response, "{data: [...], total, page}")
    meta = dict(body)
    if "limit" not in meta and "pageSize" in meta:
        meta["limit"] = meta["pageSize"]
    return _page(response, body["data"], meta)


def _page(response: httpx.Response, items: list, meta: dict) -> Page[Any]:
    try:
        total = int(meta.get("total", len(items)))
        page = int(meta.get("page", 1))
        limit = int(meta.get("limit") or max(len(items), 1))
        total_pages = meta.get("totalPages")
        return Page[Any](
            items=items,
            total=total,
            page=page,
            limit=limit,
            total_pages=int(total_pages) if total_pages is not None else None,
        )
    except (TypeError, ValueError) as exc:
        raise EnvelopeError(
            f"Metadata de paginación inválida en {response.request.url.path}",
            original_error=exc,
        ) from exc
